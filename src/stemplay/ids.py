from __future__ import annotations
import itertools
import time
from typing import Callable, Iterator, Protocol

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(n: int) -> str:
    if n < 0:
        return "-" + to_base36(-n)
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(_DIGITS[r])
    return "".join(reversed(out))


def make_id(prefix: str, index: int, suffix: str) -> str:
    # e.g. obj-0-1a, event-3-k2
    return f"{prefix}-{index}-{suffix}"


class IdSource(Protocol):
    def next_id(self, prefix: str, index: int) -> str: ...


class CounterIds:
    """
    Monotonic counter ids. Create one per parse call to keep ids call-local;
    two fresh instances hand out the same sequence.
    """

    def __init__(self, start: int = 0) -> None:
        self._counter: Iterator[int] = itertools.count(start)

    def next_id(self, prefix: str, index: int) -> str:
        return make_id(prefix, index, to_base36(next(self._counter)))


class ClockIds:
    """
    Clock-stamped ids. The clock is injectable so tests can pin it; a
    per-instance sequence keeps ids distinct when the clock does not move.
    """

    def __init__(self, clock: Callable[[], int] = time.time_ns) -> None:
        self._clock = clock
        self._seq: Iterator[int] = itertools.count()

    def next_id(self, prefix: str, index: int) -> str:
        stamp = to_base36(int(self._clock()))
        return make_id(prefix, index, f"{stamp}.{to_base36(next(self._seq))}")
