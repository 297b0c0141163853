from __future__ import annotations
import dataclasses
import logging
from typing import List

from .ids import IdSource
from .inference import infer_variables
from .schema import (
    DEFAULT_DESCRIPTION,
    SimulationConfig,
    SimulationObject,
    SimulationVariable,
    default_object,
)
from .sections import Segmentation

log = logging.getLogger(__name__)


def resolve_variables(seg: Segmentation, text: str) -> List[SimulationVariable]:
    if seg.variables:
        return list(seg.variables)
    log.debug("no Variables section entries; inferring from formula tokens")
    out: List[SimulationVariable] = []
    for var in infer_variables(text):
        if not any(existing.name == var.name for existing in out):
            out.append(var)
    return out


def resolve_objects(seg: Segmentation, ids: IdSource, variables: List[SimulationVariable]) -> List[SimulationObject]:
    objects = list(seg.objects) or [default_object(ids.next_id("obj", 0))]
    # First object inherits the variable list only if it has none of its own.
    if variables and not objects[0].variables:
        objects[0] = dataclasses.replace(objects[0], variables=list(variables))
    return objects


def scene_description(seg: Segmentation) -> str:
    return " ".join(seg.scene_lines) or DEFAULT_DESCRIPTION


def assemble_config(seg: Segmentation, text: str, ids: IdSource, default_scene_title: str) -> SimulationConfig:
    variables = resolve_variables(seg, text)
    objects = resolve_objects(seg, ids, variables)
    return SimulationConfig(
        scene_title=seg.scene_title or default_scene_title,
        description=scene_description(seg),
        objects=objects,
        variables=variables,
        timeline=list(seg.timeline),
    )
