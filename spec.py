"""
Contract layer: the laws every numeric implementation must obey.

A Contract is the machine-readable form of the Integer and
ModularInteger contracts.  It is purely declarative - it says WHAT must
be true, not HOW.  The factory iterates over it to verify an
implementation; tests iterate over it to get coverage for free.

Each law is a named predicate over an implementation and ``arity``
values of its value type.  A law only constrains results that are
mathematically representable in the type: where the true quotient, gcd
or lcm falls outside a bounded type's range the predicate holds
vacuously, and the overflow policy is checked by the boundary laws
instead.  Predicates never let an OverflowError escape for a
representable result: one that does is reported as a violation.

Layers
------
Law                 one verifiable property
Contract            an ordered collection of laws
integer_contract()  laws of the Integer contract
modular_contract()  additional laws of the ModularInteger contract
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable

from integer import truncdiv
from modular import ModularInteger


# ---------------------------------------------------------------------------
# Core contract primitives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Law:
    """A single verifiable law of a contract."""

    name: str
    description: str
    arity: int          # how many values the predicate takes after impl
    predicate: Callable[..., bool]

    def check(self, impl: type, *values: Any) -> bool:
        """Evaluate the law for *impl* on the given values."""
        return self.predicate(impl, *values)


@dataclass
class Contract:
    """An ordered collection of laws that together form a contract."""

    name: str
    laws: list[Law] = field(default_factory=list)

    def add(self, law: Law) -> None:
        self.laws.append(law)

    def __getitem__(self, name: str) -> Law:
        for law in self.laws:
            if law.name == name:
                return law
        raise KeyError(name)

    def __iter__(self):
        return iter(self.laws)

    def __len__(self):
        return len(self.laws)


# ---------------------------------------------------------------------------
# Helpers used inside the law predicates
# ---------------------------------------------------------------------------

def representable(impl: type, value: int) -> bool:
    """Can *impl* hold the raw integer *value* without overflow?"""
    if issubclass(impl, ModularInteger):
        return int(impl.min_value()) <= value <= int(impl.max_value())
    return True


def outcome(fn: Callable[..., Any], *args: Any) -> tuple[str, Any]:
    """Result of ``fn(*args)``, or the type of arithmetic error it raised.

    Lets a law compare two computations that are allowed to fail, as
    long as they fail the same way.
    """
    try:
        return ("value", fn(*args))
    except ArithmeticError as exc:
        return ("raised", type(exc))


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


_DIVISION_FORMS = ("t_div", "t_mod", "t_div_mod", "f_div", "f_mod", "f_div_mod")


def _zero_divisor_signalled(impl, a) -> bool:
    zero = impl.zero()
    for name in _DIVISION_FORMS:
        try:
            getattr(impl, name)(a, zero)
        except ZeroDivisionError:
            continue
        except ArithmeticError:
            return False
        return False
    return True


def _gcd_divides(impl, a, b) -> bool:
    if not representable(impl, math.gcd(int(a), int(b))):
        return True
    g = impl.gcd(a, b)
    if int(g) == 0:
        return int(a) == 0 and int(b) == 0
    return int(impl.t_mod(a, g)) == 0 and int(impl.t_mod(b, g)) == 0


def _lcm_gcd_product(impl, a, b) -> bool:
    ia, ib = int(a), int(b)
    if ia == 0 or ib == 0:
        return True
    if not (representable(impl, math.lcm(ia, ib))
            and representable(impl, math.gcd(ia, ib))):
        return True
    return int(impl.lcm(a, b)) * int(impl.gcd(a, b)) == abs(ia * ib)


def _strictly_inside(impl, a) -> bool:
    return int(impl.min_value()) < int(a) < int(impl.max_value())


# ---------------------------------------------------------------------------
# Contract builders
# ---------------------------------------------------------------------------

def integer_contract() -> Contract:
    """Build the laws of the Integer contract."""
    contract = Contract(name="integer")

    # -- truncated division -------------------------------------------------

    contract.add(Law(
        name="t_div_truncates",
        description="t_div(a, b) == trunc(a / b)",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or not representable(impl, truncdiv(int(a), int(b)))
            or int(impl.t_div(a, b)) == truncdiv(int(a), int(b))
        ),
    ))

    contract.add(Law(
        name="t_mod_remainder",
        description="t_mod(a, b) == a - b * trunc(a / b)",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or int(impl.t_mod(a, b))
            == int(a) - int(b) * truncdiv(int(a), int(b))
        ),
    ))

    contract.add(Law(
        name="truncated_identity",
        description="a == b * t_div(a, b) + t_mod(a, b)",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or not representable(impl, truncdiv(int(a), int(b)))
            or int(a) == int(b) * int(impl.t_div(a, b)) + int(impl.t_mod(a, b))
        ),
    ))

    contract.add(Law(
        name="t_mod_sign",
        description="t_mod(a, b) is zero or has the sign of a",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or _sign(int(impl.t_mod(a, b))) in (0, _sign(int(a)))
        ),
    ))

    contract.add(Law(
        name="t_div_mod_pairs",
        description="t_div_mod(a, b) == (t_div(a, b), t_mod(a, b))",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or not representable(impl, truncdiv(int(a), int(b)))
            or tuple(impl.t_div_mod(a, b)) == (impl.t_div(a, b), impl.t_mod(a, b))
        ),
    ))

    # -- floored division ---------------------------------------------------

    contract.add(Law(
        name="f_div_floors",
        description="f_div(a, b) == floor(a / b)",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or not representable(impl, int(a) // int(b))
            or int(impl.f_div(a, b)) == int(a) // int(b)
        ),
    ))

    contract.add(Law(
        name="f_mod_remainder",
        description="f_mod(a, b) == a - b * floor(a / b)",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or int(impl.f_mod(a, b)) == int(a) - int(b) * (int(a) // int(b))
        ),
    ))

    contract.add(Law(
        name="floored_identity",
        description="a == b * f_div(a, b) + f_mod(a, b)",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or not representable(impl, int(a) // int(b))
            or int(a) == int(b) * int(impl.f_div(a, b)) + int(impl.f_mod(a, b))
        ),
    ))

    contract.add(Law(
        name="f_mod_sign",
        description="f_mod(a, b) is zero or has the sign of b",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or _sign(int(impl.f_mod(a, b))) in (0, _sign(int(b)))
        ),
    ))

    contract.add(Law(
        name="f_div_mod_pairs",
        description="f_div_mod(a, b) == (f_div(a, b), f_mod(a, b))",
        arity=2,
        predicate=lambda impl, a, b: (
            int(b) == 0
            or not representable(impl, int(a) // int(b))
            or tuple(impl.f_div_mod(a, b)) == (impl.f_div(a, b), impl.f_mod(a, b))
        ),
    ))

    contract.add(Law(
        name="zero_divisor_signalled",
        description="every division form raises ZeroDivisionError for b == 0",
        arity=1,
        predicate=_zero_divisor_signalled,
    ))

    # -- divisors -----------------------------------------------------------

    contract.add(Law(
        name="gcd_commutative",
        description="gcd(a, b) == gcd(b, a)",
        arity=2,
        predicate=lambda impl, a, b: (
            outcome(impl.gcd, a, b) == outcome(impl.gcd, b, a)
        ),
    ))

    contract.add(Law(
        name="gcd_zero_identity",
        description="gcd(a, 0) == |a|",
        arity=1,
        predicate=lambda impl, a: (
            not representable(impl, abs(int(a)))
            or int(impl.gcd(a, impl.zero())) == abs(int(a))
        ),
    ))

    contract.add(Law(
        name="gcd_divides",
        description="t_mod(a, gcd(a, b)) == 0 and t_mod(b, gcd(a, b)) == 0",
        arity=2,
        predicate=_gcd_divides,
    ))

    contract.add(Law(
        name="gcd_greatest",
        description="gcd(a, b) is the greatest non-negative common divisor",
        arity=2,
        predicate=lambda impl, a, b: (
            not representable(impl, math.gcd(int(a), int(b)))
            or int(impl.gcd(a, b)) == math.gcd(int(a), int(b))
        ),
    ))

    contract.add(Law(
        name="gcd_zero_zero",
        description="gcd(0, 0) == 0",
        arity=0,
        predicate=lambda impl: int(impl.gcd(impl.zero(), impl.zero())) == 0,
    ))

    contract.add(Law(
        name="lcm_gcd_product",
        description="lcm(a, b) * gcd(a, b) == |a * b| for non-zero a, b",
        arity=2,
        predicate=_lcm_gcd_product,
    ))

    # -- stepping -----------------------------------------------------------

    contract.add(Law(
        name="succ_adds_one",
        description="succ(a) == a + one",
        arity=1,
        predicate=lambda impl, a: (
            outcome(impl.succ, a) == outcome(lambda x: x + impl.one(), a)
        ),
    ))

    return contract


def modular_contract() -> Contract:
    """Build the additional laws of the ModularInteger contract."""
    contract = Contract(name="modular")

    contract.add(Law(
        name="within_bounds",
        description="min_value() <= a <= max_value()",
        arity=1,
        predicate=lambda impl, a: (
            int(impl.min_value()) <= int(a) <= int(impl.max_value())
        ),
    ))

    contract.add(Law(
        name="pred_subtracts_one",
        description="pred(a) == a - one",
        arity=1,
        predicate=lambda impl, a: (
            outcome(impl.pred, a) == outcome(lambda x: x - impl.one(), a)
        ),
    ))

    contract.add(Law(
        name="succ_pred_inverse",
        description="succ(pred(a)) == a == pred(succ(a)) strictly inside the bounds",
        arity=1,
        predicate=lambda impl, a: (
            not _strictly_inside(impl, a)
            or (impl.succ(impl.pred(a)) == a and impl.pred(impl.succ(a)) == a)
        ),
    ))

    contract.add(Law(
        name="congruent_reflexive",
        description="congruent(a, a)",
        arity=1,
        predicate=lambda impl, a: impl.congruent(a, a),
    ))

    contract.add(Law(
        name="congruent_symmetric",
        description="congruent(a, b) == congruent(b, a)",
        arity=2,
        predicate=lambda impl, a, b: (
            impl.congruent(a, b) == impl.congruent(b, a)
        ),
    ))

    contract.add(Law(
        name="congruent_matches_modulus",
        description="congruent(a, b) iff (a - b) is a multiple of modulus()",
        arity=2,
        predicate=lambda impl, a, b: (
            impl.congruent(a, b) == ((int(a) - int(b)) % impl.modulus() == 0)
        ),
    ))

    contract.add(Law(
        name="succ_at_max_matches_addition",
        description="succ(max_value()) behaves exactly like max_value() + one",
        arity=0,
        predicate=lambda impl: (
            outcome(impl.succ, impl.max_value())
            == outcome(lambda x: x + impl.one(), impl.max_value())
        ),
    ))

    contract.add(Law(
        name="pred_at_min_matches_subtraction",
        description="pred(min_value()) behaves exactly like min_value() - one",
        arity=0,
        predicate=lambda impl: (
            outcome(impl.pred, impl.min_value())
            == outcome(lambda x: x - impl.one(), impl.min_value())
        ),
    ))

    return contract
