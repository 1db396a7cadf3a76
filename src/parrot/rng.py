"""
Random sources for response generation.

Responses never touch the global ``random`` state: every draw comes from an
object passed in by the caller. All selections use ``value % len(items)``,
so a fixed sequence of values always produces the same response.
"""
from __future__ import annotations
import random
from typing import Optional, Protocol

_U64 = 1 << 64


class RandomSource(Protocol):
    def next_int(self) -> int: ...


class SystemRandomSource:
    """64-bit draws from a private random.Random instance."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rnd = random.Random(seed)

    def next_int(self) -> int:
        return self._rnd.getrandbits(64)


class StepRandomSource:
    """
    Deterministic source: start, start+step, start+2*step, ...

    Values wrap at 2**64 like an unsigned 64-bit counter.

    >>> src = StepRandomSource(2, 1)
    >>> [src.next_int() for _ in range(3)]
    [2, 3, 4]
    """

    def __init__(self, start: int = 0, step: int = 1) -> None:
        self._value = start % _U64
        self._step = step % _U64

    def next_int(self) -> int:
        v = self._value
        self._value = (self._value + self._step) % _U64
        return v
