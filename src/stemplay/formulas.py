from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

# --- Catalog of formulas we can spot in transcripts and notes ---
# Surface patterns only: "F = m * a", "F = m×a", "F=m·a" all match.

_MUL = r"\s*[\*×·]\s*"

# (symbol, meaning, unit)
VarSpec = Tuple[str, str, str]


@dataclass(frozen=True)
class FormulaPattern:
    name: str
    pattern: "re.Pattern[str]"
    description: str
    variables: Tuple[VarSpec, ...]
    example: str
    scene: str


@dataclass(frozen=True)
class FormulaMatch:
    formula: str
    description: str
    variables: Tuple[VarSpec, ...]
    example: str
    scene: str
    is_default: bool = False

    def variable_labels(self) -> List[str]:
        return [f"{sym} ({meaning}, {unit})" for sym, meaning, unit in self.variables]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "formula": self.formula,
            "variables": self.variable_labels(),
            "description": self.description,
            "example": self.example,
            "isDefault": self.is_default,
        }


FORMULA_CATALOG: List[FormulaPattern] = [
    FormulaPattern(
        name="F = m × a",
        pattern=re.compile(rf"F\s*=\s*m{_MUL}a", re.IGNORECASE),
        description="Newton's Second Law - Force equals mass times acceleration",
        variables=(("m", "mass", "kg"), ("a", "acceleration", "m/s²")),
        example="m = 4, a = 2",
        scene="Cart pushed along a flat track",
    ),
    FormulaPattern(
        name="F = m × g",
        pattern=re.compile(rf"F\s*=\s*m{_MUL}g", re.IGNORECASE),
        description="Weight Formula - Force equals mass times gravitational acceleration",
        variables=(("m", "mass", "kg"), ("g", "gravity", "m/s²")),
        example="m = 5, g = 9.8",
        scene="Block resting on the ground",
    ),
    FormulaPattern(
        name="v = u + at",
        pattern=re.compile(rf"v\s*=\s*u\s*\+\s*a(?:{_MUL}|\s*)t", re.IGNORECASE),
        description="Velocity Formula - Final velocity with constant acceleration",
        variables=(("u", "initial velocity", "m/s"), ("a", "acceleration", "m/s²"), ("t", "time", "s")),
        example="u = 0, a = 2, t = 5",
        scene="Car accelerating from rest",
    ),
    FormulaPattern(
        name="E = mc²",
        pattern=re.compile(rf"E\s*=\s*m(?:{_MUL}|\s*)c\s*(?:\^\s*)?[²2]", re.IGNORECASE),
        description="Einstein's Mass-Energy Equivalence",
        variables=(("m", "mass", "kg"), ("c", "speed of light", "m/s")),
        example="m = 1, c = 299792458",
        scene="Mass converted to energy",
    ),
    FormulaPattern(
        name="s = ut + ½at²",
        pattern=re.compile(
            rf"s\s*=\s*u(?:{_MUL}|\s*)t\s*\+\s*(?:½|0?\.5|1\s*/\s*2)(?:{_MUL}|\s*)a(?:{_MUL}|\s*)t\s*(?:\^\s*)?[²2]",
            re.IGNORECASE,
        ),
        description="Displacement Formula with constant acceleration",
        variables=(("u", "initial velocity", "m/s"), ("a", "acceleration", "m/s²"), ("t", "time", "s")),
        example="u = 0, a = 2, t = 3",
        scene="Ball rolling down a ramp",
    ),
]

DEFAULT_FORMULA = FormulaMatch(
    formula="F = m × a",
    description="Newton's Second Law (default demo formula)",
    variables=(("m", "mass", "kg"), ("a", "acceleration", "m/s²")),
    example="m = 4, a = 2",
    scene="Cart pushed along a flat track",
    is_default=True,
)


def detect_formulas(text: str, with_default: bool = True) -> List[FormulaMatch]:
    """
    Return catalog formulas mentioned in `text`, in catalog order.

    With `with_default`, an empty result is replaced by Newton's second law
    flagged `is_default=True` so callers always have something to show.
    """
    text = text or ""
    found = [
        FormulaMatch(
            formula=p.name,
            description=p.description,
            variables=p.variables,
            example=p.example,
            scene=p.scene,
        )
        for p in FORMULA_CATALOG
        if p.pattern.search(text)
    ]
    if not found and with_default:
        found.append(DEFAULT_FORMULA)
    return found


def suggest_simulation(matches: List[FormulaMatch]) -> Optional[Dict[str, Any]]:
    if not matches:
        return None
    first = matches[0]
    return {
        "formula": first.formula,
        "variables": first.variable_labels(),
        "example": first.example,
        "suggestion": f'Detected "{first.formula}". Try it in the simulator with values: {first.example}',
        "blueprint": blueprint_from_formula(first),
    }


def blueprint_from_formula(match: FormulaMatch) -> str:
    """Minimal Scene/Objects/Variables/Timeline blueprint for one formula."""
    lines = [
        f"Scene: {match.scene}",
        match.description,
        "Objects:",
        "- Body",
        "Variables:",
    ]
    lines += [f"- {sym}: {meaning} ({unit})" for sym, meaning, unit in match.variables]
    lines += [
        "Timeline:",
        "- t = 0s: simulation starts",
        f"- {match.formula} drives the motion",
    ]
    return "\n".join(lines)
