from __future__ import annotations

from pathlib import Path

import pytest

from stemplay.errors import SettingsError
from stemplay.settings import Settings, load_settings


def test_defaults_without_file_or_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert load_settings(env={}) == Settings()


def test_yaml_then_env_override(tmp_path: Path) -> None:
    path = tmp_path / "stemplay.yaml"
    path.write_text(
        "default_scene_title: Lab Bench\nlog_level: debug\ncors_origins:\n  - http://a\n  - http://b\nunknown_key: 1\n",
        encoding="utf-8",
    )
    s = load_settings(path, env={"STEMPLAY_DEFAULT_SCENE_TITLE": "From Env", "STEMPLAY_MAX_BLUEPRINT_CHARS": "10"})
    assert s.default_scene_title == "From Env"
    assert s.log_level == "DEBUG"
    assert s.cors_origins == ("http://a", "http://b")
    assert s.max_blueprint_chars == 10


def test_env_cors_origins_comma_separated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    s = load_settings(env={"STEMPLAY_CORS_ORIGINS": "http://x, http://y,"})
    assert s.cors_origins == ("http://x", "http://y")


def test_bad_values_raise(tmp_path: Path) -> None:
    with pytest.raises(SettingsError):
        load_settings(env={"STEMPLAY_LOG_LEVEL": "chatty"})
    with pytest.raises(SettingsError):
        load_settings(env={"STEMPLAY_MAX_BLUEPRINT_CHARS": "lots"})
    with pytest.raises(SettingsError):
        load_settings(tmp_path / "missing.yaml", env={})
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(bad, env={})
