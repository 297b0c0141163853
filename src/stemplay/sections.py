from __future__ import annotations
import enum
import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .classifiers import (
    LineKind,
    classify_object_line,
    classify_timeline_line,
    classify_variable_line,
    strip_bullet,
)
from .ids import IdSource
from .schema import SimulationObject, SimulationTimelineEvent, SimulationVariable

log = logging.getLogger(__name__)


class SectionKind(enum.Enum):
    SCENE = "scene"
    OBJECTS = "objects"
    VARIABLES = "variables"
    TIMELINE = "timeline"


# Heading grammar, checked in order. The keyword has to open the line;
# "Scene Setup:" and "Objects (2D):" both count.
_HEADINGS = [
    (SectionKind.SCENE, re.compile(r"^(?:scene|setup)\b", re.IGNORECASE)),
    (SectionKind.OBJECTS, re.compile(r"^objects?\b", re.IGNORECASE)),
    (SectionKind.VARIABLES, re.compile(r"^variables?\b", re.IGNORECASE)),
    (SectionKind.TIMELINE, re.compile(r"^(?:timeline|events?)\b", re.IGNORECASE)),
]

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass(frozen=True)
class LineRecord:
    line_no: int  # 1-based, counted over non-empty lines
    section: Optional[SectionKind]
    kind: LineKind
    text: str


@dataclass
class Segmentation:
    scene_title: Optional[str] = None
    scene_lines: List[str] = field(default_factory=list)
    objects: List[SimulationObject] = field(default_factory=list)
    variables: List[SimulationVariable] = field(default_factory=list)
    timeline: List[SimulationTimelineEvent] = field(default_factory=list)
    trace: List[LineRecord] = field(default_factory=list)


def split_lines(text: str) -> List[str]:
    lines = (ln.rstrip() for ln in _LINE_SPLIT_RE.split(text))
    return [ln for ln in lines if ln]


def detect_section(line: str) -> Optional[SectionKind]:
    text = line.strip()
    for kind, pattern in _HEADINGS:
        if pattern.match(text):
            return kind
    return None


def scene_title_from_heading(line: str) -> Optional[str]:
    """'Scene: Projectile motion' -> 'Projectile motion'."""
    _, sep, rest = line.partition(":")
    if not sep:
        return None
    return rest.strip() or None


def _classify_content(seg: Segmentation, section: Optional[SectionKind], line: str, ids: IdSource) -> LineKind:
    # `line` is right-trimmed only; leading indentation matters to the classifiers
    if section is SectionKind.SCENE:
        seg.scene_lines.append(strip_bullet(line.strip()))
        return LineKind.SCENE_TEXT

    if section is SectionKind.OBJECTS:
        obj = classify_object_line(line, ids, len(seg.objects))
        if obj is not None:
            seg.objects.append(obj)
            return LineKind.OBJECT

    elif section is SectionKind.VARIABLES:
        var = classify_variable_line(line)
        if var is not None:
            seg.variables.append(var)
            return LineKind.VARIABLE

    elif section is SectionKind.TIMELINE:
        evt = classify_timeline_line(line, ids, len(seg.timeline))
        if evt is not None:
            seg.timeline.append(evt)
            return LineKind.TIMELINE

    return LineKind.DROPPED


def segment_blueprint(text: str, ids: IdSource) -> Segmentation:
    """
    Walk the blueprint once, top to bottom.

    A heading switches the current section and is not content itself. Every
    other line goes to the current section's classifier. Lines before the
    first heading, and lines a classifier rejects, are dropped; the trace
    records them but nothing else changes.
    """
    seg = Segmentation()
    section: Optional[SectionKind] = None

    for line_no, raw in enumerate(split_lines(text), start=1):
        line = raw.strip()
        heading = detect_section(line)
        if heading is not None:
            section = heading
            if heading is SectionKind.SCENE:
                title = scene_title_from_heading(line)
                if title:
                    seg.scene_title = title
            seg.trace.append(LineRecord(line_no, section, LineKind.HEADING, line))
            continue

        kind = _classify_content(seg, section, raw, ids)
        if kind is LineKind.DROPPED:
            log.debug("dropped line %d (section=%s): %r", line_no, section.value if section else None, line)
        seg.trace.append(LineRecord(line_no, section, kind, line))

    return seg
