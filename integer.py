"""
The Integer contract: numbers written without a fractional component.

Division and modulus
--------------------
Integer division has two common conventions, and mixing them up is a
classic source of sign bugs when code moves between languages:

truncated   t_div(a, b) = trunc(a / b)     t_mod(a, b) = a - b * t_div(a, b)
            C99 ``/`` and ``%``; the remainder takes the sign of ``a``.

floored     f_div(a, b) = floor(a / b)     f_mod(a, b) = a - b * f_div(a, b)
            Python's ``//`` and ``%``; the remainder takes the sign of ``b``.

Both are part of the contract so callers can say which one they mean.
See Daan Leijen, *Division and Modulus for Computer Scientists*.

A zero divisor is a domain error for every division form and is
signalled with ``ZeroDivisionError``.

Free functions
--------------
Generic code calls ``t_div(a, b)`` rather than naming the implementation;
the call is forwarded to whatever implements ``Integer`` for ``type(a)``.
"""

from __future__ import annotations

import math
from abc import ABCMeta, abstractmethod
from typing import Any

from algebra import contract, implement, implementation_of


__all__ = [
    "Integer",
    "NativeInteger",
    "truncdiv",
    "t_div",
    "t_mod",
    "t_div_mod",
    "f_div",
    "f_mod",
    "f_div_mod",
    "gcd",
    "lcm",
    "succ",
]


def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity.  C, Java and Rust
    truncate toward zero instead.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


@contract
class Integer(metaclass=ABCMeta):
    """A discrete number with ring structure and a total order.

    Every operation is a classmethod taking its operands explicitly, so
    an implementation can describe a value type it does not own (see
    ``NativeInteger``).  Required: the four division primitives, ``gcd``
    and ``lcm``.  Everything else has a default expressed in terms of
    those and the ring operators, and may be overridden when a type has
    a cheaper way.
    """

    __slots__ = ()

    # -- ring identities ----------------------------------------------------

    @classmethod
    def from_int(cls, value: int) -> Any:
        return cls(value)

    @classmethod
    def zero(cls) -> Any:
        return cls.from_int(0)

    @classmethod
    def one(cls) -> Any:
        return cls.from_int(1)

    # -- truncated division -------------------------------------------------

    @classmethod
    @abstractmethod
    def t_div(cls, a, b):
        """``trunc(a / b)`` for ``b != 0``."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def t_mod(cls, a, b):
        """``a - b * t_div(a, b)`` for ``b != 0``."""
        raise NotImplementedError

    @classmethod
    def t_div_mod(cls, a, b) -> tuple[Any, Any]:
        """Calculates ``t_div`` and ``t_mod`` simultaneously."""
        return cls.t_div(a, b), cls.t_mod(a, b)

    # -- floored division ---------------------------------------------------

    @classmethod
    @abstractmethod
    def f_div(cls, a, b):
        """``floor(a / b)`` for ``b != 0``."""
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def f_mod(cls, a, b):
        """``a - b * f_div(a, b)`` for ``b != 0``."""
        raise NotImplementedError

    @classmethod
    def f_div_mod(cls, a, b) -> tuple[Any, Any]:
        """Calculates ``f_div`` and ``f_mod`` simultaneously."""
        return cls.f_div(a, b), cls.f_mod(a, b)

    # -- divisors -----------------------------------------------------------

    @classmethod
    @abstractmethod
    def gcd(cls, a, b):
        """Greatest common divisor, never negative.

        Implementations must document what ``gcd(0, 0)`` returns.
        """
        raise NotImplementedError

    @classmethod
    @abstractmethod
    def lcm(cls, a, b):
        """Lowest common multiple; ``lcm(a, b) * gcd(a, b) == |a * b|``."""
        raise NotImplementedError

    # -- stepping -----------------------------------------------------------

    @classmethod
    def succ(cls, x):
        return x + cls.one()


class NativeInteger(Integer):
    """The Integer contract for Python's built-in ``int``.

    ``int`` is unbounded, so ``succ`` never overflows.  ``gcd(0, 0)`` is
    ``0`` and ``lcm(a, 0)`` is ``0``, matching ``math.gcd``/``math.lcm``.
    """

    __slots__ = ()

    @classmethod
    def from_int(cls, value: int) -> int:
        return int(value)

    @classmethod
    def t_div(cls, a: int, b: int) -> int:
        return truncdiv(a, b)

    @classmethod
    def t_mod(cls, a: int, b: int) -> int:
        return a - b * truncdiv(a, b)

    @classmethod
    def t_div_mod(cls, a: int, b: int) -> tuple[int, int]:
        q = truncdiv(a, b)
        return q, a - b * q

    @classmethod
    def f_div(cls, a: int, b: int) -> int:
        return a // b

    @classmethod
    def f_mod(cls, a: int, b: int) -> int:
        return a % b

    @classmethod
    def f_div_mod(cls, a: int, b: int) -> tuple[int, int]:
        return divmod(a, b)

    @classmethod
    def gcd(cls, a: int, b: int) -> int:
        return math.gcd(a, b)

    @classmethod
    def lcm(cls, a: int, b: int) -> int:
        return math.lcm(a, b)


implement(int, NativeInteger)


# ---------------------------------------------------------------------------
# Free functions
# ---------------------------------------------------------------------------

def _impl(a, b=None):
    impl = implementation_of(type(a), Integer)
    if b is not None and implementation_of(type(b), Integer) is not impl:
        raise TypeError(
            f"operands do not share an Integer implementation: "
            f"{type(a).__name__} and {type(b).__name__}"
        )
    return impl


def t_div(a, b):
    return _impl(a, b).t_div(a, b)


def t_mod(a, b):
    return _impl(a, b).t_mod(a, b)


def t_div_mod(a, b):
    return _impl(a, b).t_div_mod(a, b)


def f_div(a, b):
    return _impl(a, b).f_div(a, b)


def f_mod(a, b):
    return _impl(a, b).f_mod(a, b)


def f_div_mod(a, b):
    return _impl(a, b).f_div_mod(a, b)


def gcd(a, b):
    return _impl(a, b).gcd(a, b)


def lcm(a, b):
    return _impl(a, b).lcm(a, b)


def succ(x):
    return _impl(x).succ(x)
