"""Deterministic random stream for maze generation and AI decisions.

``MazeRng`` implements mulberry32 bit-for-bit (32-bit add, imul, xor-shift
mixing) so a seed reproduces the same maze on every run and in any other
implementation that follows the same mixing function. Python ints are
unbounded, so every intermediate is masked back to 32 bits.
"""

from __future__ import annotations

from typing import List, Sequence, TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class MazeRng:
    def __init__(self, seed: int):
        self.seed = int(seed)
        self._state = self.seed & _MASK32

    def next(self) -> float:
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    def int(self, lo: int, hi: int) -> int:
        return int(self.next() * (hi - lo + 1)) + lo

    def chance(self, probability: float) -> bool:
        return self.next() < probability

    def pick(self, seq: Sequence[T]) -> T:
        return seq[self.int(0, len(seq) - 1)]

    def shuffle(self, seq: Sequence[T]) -> List[T]:
        out = list(seq)
        for i in range(len(out) - 1, 0, -1):
            j = self.int(0, i)
            out[i], out[j] = out[j], out[i]
        return out

    def fork(self, salt: int) -> "MazeRng":
        """Independent stream derived from this seed (used for AI decisions)."""
        return MazeRng((self.seed * 31 + salt) & _MASK32)


__all__ = ["MazeRng"]
