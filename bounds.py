"""
Bounds layer.

A ``Bounds`` is the integer domain an operation accepts.  ``Num`` lives in
``INT32``; unsigned conversions go through ``UINT32``.  The helpers here
also produce the edge values and random samples that the validation tools
and tests feed through the contract.
"""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """Inclusive integer interval [lo, hi]."""

    lo: int
    hi: int

    def __post_init__(self) -> None:
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def check(self, value: int, what: str = "value") -> int:
        """Return ``value`` unchanged or raise ValueError if out of range."""
        if not self.contains(value):
            raise ValueError(
                f"{what} {value} is outside bounds [{self.lo}, {self.hi}]"
            )
        return value

    def edge_values(self, window: int = 2) -> list[int]:
        """
        Values within ``window`` of lo, hi, zero and the INT32 maximum,
        clipped to the domain, sorted and de-duplicated.
        """
        centres = (self.lo, self.hi, 0, INT32_MAX)
        out = {
            c + d
            for c in centres
            for d in range(-window, window + 1)
            if self.contains(c + d)
        }
        return sorted(out)

    def sample(self, count: int, seed: int | None = None) -> list[int]:
        """``count`` uniformly random values from the domain."""
        rng = random.Random(seed)
        return [rng.randint(self.lo, self.hi) for _ in range(count)]


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1

INT32 = Bounds(lo=INT32_MIN, hi=INT32_MAX)
UINT32 = Bounds(lo=0, hi=UINT32_MAX)
