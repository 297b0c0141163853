from __future__ import annotations
import logging
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from .assembler import assemble_config
from .classifiers import LineKind
from .errors import BlueprintInputError
from .ids import CounterIds, IdSource
from .schema import DEFAULT_SCENE_TITLE, SimulationConfig
from .sections import LineRecord, segment_blueprint

log = logging.getLogger(__name__)


def _coerce_text(blueprint: Any) -> str:
    if blueprint is None:
        return ""
    if isinstance(blueprint, bytes):
        try:
            return blueprint.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BlueprintInputError(f"blueprint is not valid UTF-8: {e}") from e
    if not isinstance(blueprint, str):
        raise BlueprintInputError(f"blueprint must be text, got {type(blueprint).__name__}")
    return blueprint


def parse_blueprint_with_trace(
    blueprint: str,
    default_scene_title: Optional[str] = None,
    ids: Optional[IdSource] = None,
) -> Tuple[SimulationConfig, List[LineRecord]]:
    text = _coerce_text(blueprint)
    ids = ids if ids is not None else CounterIds()
    seg = segment_blueprint(text, ids)
    cfg = assemble_config(seg, text, ids, default_scene_title or DEFAULT_SCENE_TITLE)
    log.debug(
        "parsed blueprint: %d objects, %d variables, %d events",
        len(cfg.objects), len(cfg.variables), len(cfg.timeline),
    )
    return cfg, seg.trace


def parse_blueprint(
    blueprint: str,
    default_scene_title: Optional[str] = None,
    ids: Optional[IdSource] = None,
) -> SimulationConfig:
    """
    Turn free-form blueprint text into a SimulationConfig.

    Looks for Scene/Objects/Variables/Timeline headings and classifies the
    lines under each. Falls back to formula-symbol inference when no variable
    lines were found and to a default object when no objects were found, so
    every str input (empty included) yields a usable config.

    `ids` supplies entity ids; when omitted a fresh counter is used, which
    makes the output a pure function of the input.
    """
    cfg, _ = parse_blueprint_with_trace(blueprint, default_scene_title, ids)
    return cfg


def summarize_trace(trace: List[LineRecord]) -> Dict[str, Any]:
    by_kind = Counter(rec.kind.value for rec in trace)
    by_section: Dict[str, Dict[str, int]] = {}
    for rec in trace:
        key = rec.section.value if rec.section else "none"
        bucket = by_section.setdefault(key, {})
        bucket[rec.kind.value] = bucket.get(rec.kind.value, 0) + 1
    return {
        "lines": len(trace),
        "kinds": dict(by_kind),
        "sections": by_section,
        "dropped": [rec.line_no for rec in trace if rec.kind is LineKind.DROPPED],
    }
