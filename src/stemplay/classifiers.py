from __future__ import annotations
import enum
import math
import re
from typing import Optional

from .ids import IdSource
from .schema import (
    FALLBACK_OBJECT_LABEL,
    SimulationObject,
    SimulationTimelineEvent,
    SimulationVariable,
)

# --- Line shapes (one raw blueprint line each) ---
#   "- Cart on a track"                   object
#   "- v: velocity of the cart (m/s)"     variable, colon form
#   "v — initial velocity (m/s)"          variable, dash form
#   "a = acceleration (m/s²)"             variable, equals form
#   "- t = 0s: object starts moving"      timeline
#   "At t = 2.5s, the ball hits the ground"

BULLETS = ("-", "*", "•")

_BULLET_RE = re.compile(r"^[-*•]\s*")
_OBJECT_WORD_RE = re.compile(r"^object\s*", re.IGNORECASE)
_NAME_RE = r"(?P<name>[a-zA-Z][a-zA-Z0-9_]*)"
_VAR_COLON_RE = re.compile(rf"^{_NAME_RE}\s*[:\-—]\s*(?P<rest>.+)$")
_VAR_EQUALS_RE = re.compile(rf"^{_NAME_RE}\s*=\s*(?P<rest>.+)$")
_UNIT_RE = re.compile(r"\((?P<unit>[^)]+)\)\s*$")
_TIME_CUE_RE = re.compile(r"t\s*=", re.IGNORECASE)
_TIME_VALUE_RE = re.compile(r"t\s*=\s*(?P<value>[0-9.]+)\s*s?", re.IGNORECASE)
_AT_T_RE = re.compile(r"^at\s+t", re.IGNORECASE)


class LineKind(enum.Enum):
    """What the segmenter did with one line."""

    HEADING = "heading"
    SCENE_TEXT = "scene_text"
    OBJECT = "object"
    VARIABLE = "variable"
    TIMELINE = "timeline"
    DROPPED = "dropped"


def strip_bullet(line: str) -> str:
    # marker must open the line; indentation is not a bullet
    return _BULLET_RE.sub("", line, count=1).strip()


def is_bullet(line: str) -> bool:
    return line.startswith(BULLETS)


def safe_float(raw: Optional[str]) -> Optional[float]:
    """Finite float or None; never raises."""
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _split_unit(rest: str) -> tuple[str, Optional[str]]:
    m = _UNIT_RE.search(rest)
    if not m:
        return rest, None
    return rest[: m.start()].strip(), m.group("unit").strip()


def classify_object_line(line: str, ids: IdSource, index: int) -> Optional[SimulationObject]:
    if not (is_bullet(line) or _OBJECT_WORD_RE.match(line)):
        return None
    label = _OBJECT_WORD_RE.sub("", strip_bullet(line), count=1).strip() or FALLBACK_OBJECT_LABEL
    return SimulationObject(
        id=ids.next_id("obj", index),
        label=label,
        role=None,
        variables=[],
    )


def classify_variable_line(line: str) -> Optional[SimulationVariable]:
    if line[:1].isspace():
        return None
    text = strip_bullet(line)
    # colon/dash form wins over equals form
    m = _VAR_COLON_RE.match(text) or _VAR_EQUALS_RE.match(text)
    if not m:
        return None
    description, unit = _split_unit(m.group("rest").strip())
    return SimulationVariable(
        name=m.group("name"),
        description=description,
        unit=unit,
        initial_value=None,
    )


def parse_event_time(text: str) -> Optional[float]:
    m = _TIME_VALUE_RE.search(text)
    return safe_float(m.group("value")) if m else None


def classify_timeline_line(line: str, ids: IdSource, index: int) -> Optional[SimulationTimelineEvent]:
    if not (is_bullet(line) or _TIME_CUE_RE.search(line) or _AT_T_RE.match(line)):
        return None
    label = strip_bullet(line)
    return SimulationTimelineEvent(
        id=ids.next_id("event", index),
        label=label,
        time=parse_event_time(label),
        description=label,
    )
