from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import Any, Dict
import yaml

from .errors import BlueprintInputError

FORMATS = ("json", "yaml")


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_text(path: Path | str, max_chars: int | None = None) -> str:
    """Read a blueprint file, or stdin when path is '-'."""
    try:
        if str(path) == "-":
            text = sys.stdin.read()
        else:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
    except UnicodeDecodeError as e:
        raise BlueprintInputError(f"{path}: not valid UTF-8 text") from e
    except OSError as e:
        raise BlueprintInputError(f"{path}: {e.strerror or e}") from e
    if max_chars is not None and len(text) > max_chars:
        raise BlueprintInputError(f"{path}: blueprint is {len(text)} chars, limit is {max_chars}")
    return text


def dump_config(data: Dict[str, Any], fmt: str = "json") -> str:
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"unknown format {fmt!r}, expected one of {FORMATS}")


def write_yaml(path: Path, data: Dict[str, Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)


def write_json(path: Path, data: Dict[str, Any] | list[Any]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
