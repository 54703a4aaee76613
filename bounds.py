"""
Bounds layer for bounded integer types.

Bounds define the *domain* a bounded integer type can represent, and
the overflow policy that maps a raw arithmetic result back into that
domain.  The same policy governs addition, subtraction, multiplication,
division results, and succ/pred at the edges, so a type never disagrees
with itself about what happens at its limits.

Division by zero has no policy here: it is always signalled
(ZeroDivisionError) and never mapped to a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OverflowMode(str, Enum):
    """What to do when a result would leave the bounds."""

    WRAP = "wrap"        # Modular wrap-around (like C unsigned)
    CLAMP = "clamp"      # Saturate at lo/hi
    ERROR = "error"      # Raise an OverflowError


@dataclass(frozen=True)
class Bounds:
    """
    An inclusive integer domain [lo, hi] with explicit overflow semantics.

    ``width`` doubles as the modulus of a bounded type: two raw integers
    name the same residue class iff their difference is a multiple of it.
    """

    lo: int
    hi: int
    overflow: OverflowMode = OverflowMode.WRAP

    def __post_init__(self):
        if self.lo > self.hi:
            raise ValueError(f"lo ({self.lo}) must be <= hi ({self.hi})")

    @property
    def width(self) -> int:
        """Total number of representable values."""
        return self.hi - self.lo + 1

    def contains(self, value: int) -> bool:
        return self.lo <= value <= self.hi

    def all_values(self) -> range:
        return range(self.lo, self.hi + 1)

    def clamp(self, value: int) -> int:
        return max(self.lo, min(self.hi, value))

    def wrap(self, value: int) -> int:
        return self.lo + (value - self.lo) % self.width

    def apply(self, raw: int) -> int:
        """Apply the overflow policy to bring a raw result into bounds."""
        if self.lo <= raw <= self.hi:
            return raw

        if self.overflow == OverflowMode.CLAMP:
            return self.clamp(raw)

        if self.overflow == OverflowMode.WRAP:
            return self.wrap(raw)

        # ERROR
        raise OverflowError(
            f"Result {raw} is outside bounds [{self.lo}, {self.hi}]"
        )

    def with_overflow(self, overflow: OverflowMode) -> Bounds:
        """Same domain, different overflow policy."""
        return Bounds(lo=self.lo, hi=self.hi, overflow=overflow)


# ---------------------------------------------------------------------------
# Common bounds presets
# ---------------------------------------------------------------------------

INT8 = Bounds(lo=-128, hi=127)
INT16 = Bounds(lo=-32_768, hi=32_767)
INT32 = Bounds(lo=-(2**31), hi=2**31 - 1)
UINT8 = Bounds(lo=0, hi=255)
UINT16 = Bounds(lo=0, hi=65_535)

# Small bounds useful for exhaustive verification
TINY = Bounds(lo=-8, hi=7)
SMALL = Bounds(lo=-128, hi=127)
