"""
The ModularInteger contract: an Integer with a finite representable range.

A modular integer type has per-type inclusive bounds and a congruence
relation: two values are congruent when they name the same residue
class, which can hold even for distinct raw representations.

What ``succ(max_value())`` and ``pred(min_value())`` do is the type's
choice (wrap, saturate, or raise ``OverflowError``), but it must be the
same thing the type's ``+`` and ``-`` do at the edge.  The defaults here
are written in terms of those operators, so a type that keeps them gets
that consistency for free.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from algebra import contract, implementation_of
from integer import Integer


__all__ = [
    "ModularInteger",
    "min_value",
    "max_value",
    "modulus",
    "congruent",
    "pred",
]


@contract
class ModularInteger(Integer):
    """Integer contract extended with bounds, congruence and ``pred``."""

    __slots__ = ()

    @classmethod
    @abstractmethod
    def min_value(cls) -> Any:
        """Smallest representable value (inclusive)."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def max_value(cls) -> Any:
        """Largest representable value (inclusive)."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def congruent(cls, x, y) -> bool:
        """True iff *x* and *y* belong to the same residue class."""
        raise NotImplementedError

    @classmethod
    def modulus(cls) -> int:
        """Number of residue classes the type can represent."""
        return int(cls.max_value()) - int(cls.min_value()) + 1

    @classmethod
    def pred(cls, x):
        return x - cls.one()


# ---------------------------------------------------------------------------
# Free functions
# ---------------------------------------------------------------------------

def min_value(tp: type):
    return implementation_of(tp, ModularInteger).min_value()


def max_value(tp: type):
    return implementation_of(tp, ModularInteger).max_value()


def modulus(tp: type) -> int:
    return implementation_of(tp, ModularInteger).modulus()


def congruent(x, y) -> bool:
    impl = implementation_of(type(x), ModularInteger)
    if implementation_of(type(y), ModularInteger) is not impl:
        raise TypeError(
            f"cannot compare residues of {type(x).__name__} "
            f"and {type(y).__name__}"
        )
    return impl.congruent(x, y)


def pred(x):
    return implementation_of(type(x), ModularInteger).pred(x)
