"""
Reference ModularInteger implementation over a ``Bounds`` domain.

Each bounded type is a subclass of ``BoundedInteger`` carrying its own
``Bounds``.  Declare one with a class keyword::

    class Int8(BoundedInteger, bounds=INT8): pass

or build one at runtime with ``bounded_type`` / ``modular_type``.

Every operation computes on raw ints and then hands the raw result to
the type's overflow policy, so construction, the arithmetic operators,
the division forms, gcd/lcm and succ/pred all agree on what happens at
the edges.

Documented choices for this family:
  - ``gcd(0, 0) == 0`` and ``lcm(a, 0) == 0``.
  - A gcd or lcm that is not representable (``gcd(-128, 0)`` on an
    8-bit type) goes through the overflow policy like any other result.
  - The modulus is the bounds width; ``congruent`` accepts raw ints, so
    on a modulus-5 type ``congruent(7, 2)`` holds.
"""

from __future__ import annotations

import types
from functools import total_ordering
from typing import ClassVar

from bounds import Bounds, OverflowMode
from integer import truncdiv
from modular import ModularInteger


__all__ = ["BoundedInteger", "bounded_type", "modular_type"]


@total_ordering
class BoundedInteger(ModularInteger):
    """An immutable integer confined to ``cls.bounds``."""

    __slots__ = ("_value",)

    bounds: ClassVar[Bounds]

    def __init_subclass__(cls, bounds: Bounds | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if bounds is None:
            if not hasattr(cls, "bounds"):
                raise TypeError(f"No bounds defined for class {cls.__name__}")
            return
        if not (bounds.contains(0) and bounds.contains(1)):
            raise ValueError(
                f"bounds [{bounds.lo}, {bounds.hi}] must contain the ring "
                f"identities 0 and 1"
            )
        cls.bounds = bounds

    def __new__(cls, value: int = 0):
        if not hasattr(cls, "bounds"):
            raise TypeError(
                f"Can't instantiate object of class {cls.__name__}"
            )
        self = object.__new__(cls)
        self._value = cls.bounds.apply(cls._raw(value))
        return self

    # -- internal helpers ---------------------------------------------------

    @classmethod
    def _raw(cls, v) -> int:
        """Raw int behind an operand of this type or a plain int."""
        if isinstance(v, cls):
            return v._value
        if isinstance(v, int) and not isinstance(v, BoundedInteger):
            return int(v)
        raise TypeError(
            f"expected {cls.__name__} or int, got {type(v).__name__}"
        )

    @classmethod
    def _nonzero(cls, b) -> int:
        raw = cls._raw(b)
        if raw == 0:
            raise ZeroDivisionError(f"{cls.__name__} division by zero")
        return raw

    def _coerce(self, other):
        try:
            return type(self)._raw(other)
        except TypeError:
            return NotImplemented

    # -- value protocol -----------------------------------------------------

    def __int__(self) -> int:
        return self._value

    __index__ = __int__

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __eq__(self, other) -> bool:
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value == raw

    def __lt__(self, other) -> bool:
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return self._value < raw

    # -- ring operators -----------------------------------------------------

    def __add__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self)(self._value + raw)

    __radd__ = __add__

    def __sub__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self)(self._value - raw)

    def __rsub__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self)(raw - self._value)

    def __mul__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self)(self._value * raw)

    __rmul__ = __mul__

    def __neg__(self):
        return type(self)(-self._value)

    def __pos__(self):
        return self

    def __abs__(self):
        return type(self)(abs(self._value))

    # Python's own operators are the floored forms.

    def __floordiv__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self).f_div(self, raw)

    def __rfloordiv__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self).f_div(raw, self)

    def __mod__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self).f_mod(self, raw)

    def __rmod__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self).f_mod(raw, self)

    def __divmod__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self).f_div_mod(self, raw)

    def __rdivmod__(self, other):
        raw = self._coerce(other)
        if raw is NotImplemented:
            return NotImplemented
        return type(self).f_div_mod(raw, self)

    # -- Integer contract ---------------------------------------------------

    @classmethod
    def t_div(cls, a, b):
        b = cls._nonzero(b)
        return cls(truncdiv(cls._raw(a), b))

    @classmethod
    def t_mod(cls, a, b):
        b = cls._nonzero(b)
        a = cls._raw(a)
        return cls(a - b * truncdiv(a, b))

    @classmethod
    def f_div(cls, a, b):
        b = cls._nonzero(b)
        return cls(cls._raw(a) // b)

    @classmethod
    def f_mod(cls, a, b):
        b = cls._nonzero(b)
        return cls(cls._raw(a) % b)

    @staticmethod
    def _euclid(x: int, y: int) -> int:
        x, y = abs(x), abs(y)
        while y:
            x, y = y, x % y
        return x

    @classmethod
    def gcd(cls, a, b):
        """Euclid on magnitudes; ``gcd(0, 0) == 0``."""
        return cls(cls._euclid(cls._raw(a), cls._raw(b)))

    @classmethod
    def lcm(cls, a, b):
        x, y = cls._raw(a), cls._raw(b)
        if x == 0 or y == 0:
            return cls(0)
        return cls(abs(x * y) // cls._euclid(x, y))

    # -- ModularInteger contract --------------------------------------------

    @classmethod
    def min_value(cls):
        return cls(cls.bounds.lo)

    @classmethod
    def max_value(cls):
        return cls(cls.bounds.hi)

    @classmethod
    def modulus(cls) -> int:
        return cls.bounds.width

    @classmethod
    def congruent(cls, x, y) -> bool:
        return (cls._raw(x) - cls._raw(y)) % cls.bounds.width == 0


# ---------------------------------------------------------------------------
# Type builders
# ---------------------------------------------------------------------------

def bounded_type(name: str, bounds: Bounds) -> type[BoundedInteger]:
    """Create a new ``BoundedInteger`` subclass over *bounds*."""
    return types.new_class(
        name,
        (BoundedInteger,),
        {"bounds": bounds},
        lambda ns: ns.update({"__slots__": ()}),
    )


def modular_type(name: str, modulus: int) -> type[BoundedInteger]:
    """Integers modulo *modulus*, represented as ``0 .. modulus - 1``."""
    if modulus < 2:
        raise ValueError(f"modulus must be >= 2, got {modulus}")
    return bounded_type(
        name, Bounds(lo=0, hi=modulus - 1, overflow=OverflowMode.WRAP)
    )
