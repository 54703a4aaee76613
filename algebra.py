"""
Capability layer: the algebra the numeric contracts are built on.

The commutative-ring and ordering capabilities are external
collaborators.  They are expressed structurally (``Protocol``) so that a
*type* can be asked whether it provides the operators, without any base
class of ours in its ancestry.

The numeric contracts themselves (``Integer``, ``ModularInteger``,
``Real``) are nominal: a value type satisfies them either by subclassing
the contract, or by having an implementation registered for it with
``implement`` (the only option for built-ins such as ``int``).

A set of capabilities is composed by intersection::

    satisfies(int, CommutativeRing, TotalOrder, Integer)   # True
    satisfies(float, PartialOrder, Field, Real)            # True
"""

from __future__ import annotations

import inspect
from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# External capabilities (structural)
# ---------------------------------------------------------------------------

@runtime_checkable
class CommutativeRing(Protocol):
    """Addition, subtraction, commutative multiplication, negation."""

    def __add__(self, other): ...

    def __sub__(self, other): ...

    def __mul__(self, other): ...

    def __neg__(self): ...


@runtime_checkable
class TotalOrder(Protocol):
    """A total order over every pair of values.

    Equality is not listed: every object has ``__eq__``, and declaring
    it here would also blank out ``__hash__`` on the protocol.
    """

    def __lt__(self, other): ...

    def __le__(self, other): ...

    def __gt__(self, other): ...

    def __ge__(self, other): ...


@runtime_checkable
class PartialOrder(Protocol):
    """Comparison operators where some pairs may be unordered (NaN)."""

    def __lt__(self, other): ...

    def __le__(self, other): ...

    def __gt__(self, other): ...

    def __ge__(self, other): ...


@runtime_checkable
class Field(Protocol):
    """A commutative ring with multiplicative inverses."""

    def __add__(self, other): ...

    def __sub__(self, other): ...

    def __mul__(self, other): ...

    def __neg__(self): ...

    def __truediv__(self, other): ...


# ---------------------------------------------------------------------------
# Contract registry
# ---------------------------------------------------------------------------

_contracts: list[type] = []
_implementations: dict[type, type] = {}


def contract(cls: type) -> type:
    """Class decorator marking *cls* as a numeric contract."""
    _contracts.append(cls)
    return cls


def satisfies(tp: type, *capabilities: type) -> bool:
    """True iff *tp* provides every one of *capabilities*."""
    return all(issubclass(tp, cap) for cap in capabilities)


def implement(value_type: type, impl: type) -> None:
    """Declare that *impl* implements its contracts for *value_type*.

    *value_type* is registered as a virtual subclass of every contract
    *impl* derives from, so ``isinstance(3, Integer)`` holds once
    ``implement(int, NativeInteger)`` has run.
    """
    if not isinstance(impl, type) or inspect.isabstract(impl):
        raise TypeError(f"{impl!r} is not a concrete contract implementation")

    contracts = [c for c in impl.__mro__ if c in _contracts]
    if not contracts:
        raise TypeError(f"{impl.__name__} does not derive from any contract")

    missing = [
        cap.__name__
        for cap in (CommutativeRing, TotalOrder)
        if not issubclass(value_type, cap)
    ]
    if missing:
        raise TypeError(
            f"{value_type.__name__} lacks required capabilities: "
            f"{', '.join(missing)}"
        )

    for c in contracts:
        c.register(value_type)
    _implementations[value_type] = impl


def implementation_of(tp: type, required: type | None = None) -> type:
    """Resolve the contract implementation for values of type *tp*.

    A type that subclasses a contract is its own implementation;
    otherwise the registered implementation nearest in the MRO wins.
    If *required* is given, the implementation must derive from it.
    """
    impl = None
    if any(c in tp.__mro__ for c in _contracts) and not inspect.isabstract(tp):
        impl = tp
    else:
        for klass in tp.__mro__:
            if klass in _implementations:
                impl = _implementations[klass]
                break

    if impl is None:
        raise TypeError(f"{tp.__name__} does not implement a numeric contract")
    if required is not None and not issubclass(impl, required):
        raise TypeError(f"{tp.__name__} does not implement {required.__name__}")
    return impl
