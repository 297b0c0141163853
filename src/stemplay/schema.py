from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# Simulation config consumed by the renderer. Keys in to_dict() use the
# renderer's camelCase wire names. Unset optional fields are left out, except
# initialValue and time, which are always present (null when unknown).

DEFAULT_SCENE_TITLE = "Physics Simulation"
DEFAULT_DESCRIPTION = "Automatically generated simulation configuration from AI blueprint text."
DEFAULT_OBJECT_LABEL = "Default Object"
DEFAULT_OBJECT_ROLE = "body"
FALLBACK_OBJECT_LABEL = "Object"

VARIABLE_ROLES = ("given", "unknown", "derived", "constant")


@dataclass(frozen=True)
class SimulationVariable:
    name: str
    description: Optional[str] = None
    unit: Optional[str] = None
    initial_value: Optional[float] = None
    role: Optional[str] = None  # given|unknown|derived|constant

    def to_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            row["description"] = self.description
        if self.unit is not None:
            row["unit"] = self.unit
        row["initialValue"] = self.initial_value
        if self.role is not None:
            row["role"] = self.role
        return row

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "SimulationVariable":
        return cls(
            name=str(row["name"]),
            description=row.get("description"),
            unit=row.get("unit"),
            initial_value=row.get("initialValue"),
            role=row.get("role"),
        )


@dataclass(frozen=True)
class SimulationObject:
    id: str
    label: str
    role: Optional[str] = None  # e.g. "projectile", "ground", "reference frame"
    variables: List[SimulationVariable] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {"id": self.id, "label": self.label}
        if self.role is not None:
            row["role"] = self.role
        row["variables"] = [v.to_dict() for v in self.variables]
        return row

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "SimulationObject":
        return cls(
            id=str(row["id"]),
            label=str(row.get("label") or FALLBACK_OBJECT_LABEL),
            role=row.get("role"),
            variables=[SimulationVariable.from_dict(v) for v in row.get("variables") or []],
        )


@dataclass(frozen=True)
class SimulationTimelineEvent:
    id: str
    label: str
    time: Optional[float] = None  # seconds
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "time": self.time,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "SimulationTimelineEvent":
        return cls(
            id=str(row["id"]),
            label=str(row.get("label", "")),
            time=row.get("time"),
            description=row.get("description"),
        )


@dataclass(frozen=True)
class SimulationConfig:
    scene_title: str
    description: str
    objects: List[SimulationObject]
    variables: List[SimulationVariable] = field(default_factory=list)
    timeline: List[SimulationTimelineEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sceneTitle": self.scene_title,
            "description": self.description,
            "objects": [o.to_dict() for o in self.objects],
            "variables": [v.to_dict() for v in self.variables],
            "timeline": [e.to_dict() for e in self.timeline],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SimulationConfig":
        """
        Rebuild a config from its wire dict.

        Meant for hand-built configs; run validate_config() first, this does
        no checking beyond what the constructors need.
        """
        return cls(
            scene_title=str(data.get("sceneTitle") or DEFAULT_SCENE_TITLE),
            description=str(data.get("description") or DEFAULT_DESCRIPTION),
            objects=[SimulationObject.from_dict(o) for o in data.get("objects") or []],
            variables=[SimulationVariable.from_dict(v) for v in data.get("variables") or []],
            timeline=[SimulationTimelineEvent.from_dict(e) for e in data.get("timeline") or []],
        )


def default_object(object_id: str) -> SimulationObject:
    return SimulationObject(
        id=object_id,
        label=DEFAULT_OBJECT_LABEL,
        role=DEFAULT_OBJECT_ROLE,
        variables=[],
    )
