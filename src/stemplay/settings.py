"""
Runtime settings for the parser CLI and the HTTP backend.

Resolution order, last wins:
  1. built-in defaults
  2. optional YAML file (``stemplay.yaml`` or an explicit path)
  3. ``STEMPLAY_*`` environment variables

The parser core never reads settings; callers pass what it needs.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import SettingsError
from .schema import DEFAULT_SCENE_TITLE

ENV_PREFIX = "STEMPLAY_"
DEFAULT_SETTINGS_FILE = Path("stemplay.yaml")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    default_scene_title: str = DEFAULT_SCENE_TITLE
    log_level: str = "INFO"
    log_file: Optional[str] = None
    cors_origins: Tuple[str, ...] = field(default=("http://localhost:5174",))
    max_blueprint_chars: int = 200_000


def _coerce(name: str, value: Any) -> Any:
    if name == "cors_origins":
        if isinstance(value, str):
            return tuple(o.strip() for o in value.split(",") if o.strip())
        if isinstance(value, (list, tuple)):
            return tuple(str(o) for o in value)
        raise SettingsError(f"cors_origins must be a list or comma-separated string, got {value!r}")
    if name == "max_blueprint_chars":
        try:
            n = int(value)
        except (TypeError, ValueError) as e:
            raise SettingsError(f"max_blueprint_chars must be an integer, got {value!r}") from e
        if n <= 0:
            raise SettingsError("max_blueprint_chars must be positive")
        return n
    if name == "log_level":
        level = str(value).upper()
        if level not in _LOG_LEVELS:
            raise SettingsError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}")
        return level
    if name == "log_file":
        return str(value) if value else None
    text = str(value).strip()
    if not text:
        raise SettingsError(f"{name} must not be empty")
    return text


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise SettingsError(f"{path}: expected a mapping at top level")
    return data


def load_settings(path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    known = {f.name for f in fields(Settings)}
    overrides: Dict[str, Any] = {}

    if path is None and DEFAULT_SETTINGS_FILE.exists():
        path = DEFAULT_SETTINGS_FILE
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise SettingsError(f"settings file not found: {path}")
        for key, value in _read_yaml(path).items():
            if key in known:  # unknown keys are ignored
                overrides[key] = _coerce(key, value)

    for name in known:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is not None:
            overrides[name] = _coerce(name, raw)

    return replace(Settings(), **overrides)
