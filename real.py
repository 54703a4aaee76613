"""
The Real marker: a capability tag for continuous numbers.

``Real`` adds no operations.  It marks types with field structure and a
*partial* order (NaN compares unordered with everything), so generic
code can tell "real-like" apart from a discrete ``Integer``.  Python's
``float`` is an IEEE binary64 value and is the only built-in registered.
"""

from __future__ import annotations

from abc import ABCMeta

from algebra import Field, PartialOrder, contract, implementation_of, satisfies
from integer import Integer


__all__ = ["Real", "is_real", "is_discrete"]


@contract
class Real(metaclass=ABCMeta):
    __slots__ = ()


Real.register(float)


def is_real(tp: type) -> bool:
    return satisfies(tp, Real, PartialOrder, Field)


def is_discrete(tp: type) -> bool:
    try:
        implementation_of(tp, Integer)
    except TypeError:
        return False
    return True
