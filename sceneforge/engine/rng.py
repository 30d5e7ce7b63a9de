"""Deterministic random streams.

mulberry32 over unsigned 32-bit arithmetic: tiny, fast, and bit-for-bit
reproducible across platforms, which the candidate search depends on.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619

# Builder micro-randomization runs on seed ^ this, never on the layout stream.
MICRO_SEED_SALT = 0x9E3779B9


def fnv1a(text: str) -> int:
    """32-bit FNV-1a over UTF-16 code units."""
    h = _FNV_OFFSET
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * _FNV_PRIME) & _MASK32
    return h


def mix_seed(seed: int, salt: int) -> int:
    return (seed ^ salt) & _MASK32


def layout_seed(seed: int, domain: str, style: str) -> int:
    return mix_seed(seed, fnv1a(f"{domain}:{style}"))


def micro_seed(seed: int) -> int:
    return mix_seed(seed, MICRO_SEED_SALT)


class Mulberry32:
    """Uniform floats in [0, 1) from a 32-bit state."""

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK32

    def random(self) -> float:
        self._state = (self._state + 0x6D2B79F5) & _MASK32
        x = self._state
        x = ((x ^ (x >> 15)) * (x | 1)) & _MASK32
        x ^= (x + (((x ^ (x >> 7)) * (x | 61)) & _MASK32)) & _MASK32
        return ((x ^ (x >> 14)) & _MASK32) / 4294967296

    def randint(self, a: int, b: int) -> int:
        """Inclusive integer draw; argument order does not matter."""
        lo, hi = min(a, b), max(a, b)
        return lo + int(self.random() * (hi - lo + 1))

    def pick_one(self, items: Sequence[T]) -> T | None:
        if not items:
            return None
        return items[self.randint(0, len(items) - 1)]

    def pick_some(self, items: Sequence[T], count: int) -> list[T]:
        """Draw ``count`` distinct items without replacement, in draw order."""
        pool = list(items)
        out: list[T] = []
        for _ in range(max(0, min(count, len(pool)))):
            out.append(pool.pop(self.randint(0, len(pool) - 1)))
        return out

    def pick_some_sorted(self, items: Sequence[str], count: int) -> list[str]:
        return sorted(self.pick_some(items, count))
