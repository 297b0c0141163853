from __future__ import annotations
import re
from typing import Iterator, List

from .schema import SimulationVariable

# Single-letter symbols common in kinematics formulas. Longer tokens such
# as "sin" or "cos" never qualify.
FORMULA_SYMBOLS = ("v", "u", "a", "t", "s", "x", "y", "m", "g", "F")

_TOKEN_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")


def iter_tokens(text: str) -> Iterator[str]:
    for m in _TOKEN_RE.finditer(text):
        yield m.group(0)


def infer_variables(text: str) -> List[SimulationVariable]:
    """
    Pick formula symbols out of the whole blueprint, first occurrence first.

    This over-matches on purpose: the article "a" in plain prose counts as
    acceleration. Callers wanting less noise should strip prose first.
    """
    seen: set[str] = set()
    out: List[SimulationVariable] = []
    for token in iter_tokens(text):
        if token not in FORMULA_SYMBOLS or token in seen:
            continue
        seen.add(token)
        out.append(SimulationVariable(name=token, role="unknown"))
    return out
