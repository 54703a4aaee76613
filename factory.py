"""
The Dark Factory.

The factory does not just construct integer types - it *verifies* them
against the contract laws before releasing them.

Flow:
  1. Caller requests a bounded type for a given Bounds (``create``), or
     hands over any implementation to check (``certify``/``verify``).
  2. Factory runs every law of the Integer contract, plus the
     ModularInteger laws when the implementation is bounded.
  3. If verification passes  -> return the type.
     If verification fails   -> raise, never hand out a broken type.

Small domains are checked exhaustively; larger ones (and the unbounded
built-in ``int``) are checked on edge values plus seeded random samples.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from typing import Iterable

from algebra import implementation_of
from bounded import BoundedInteger, bounded_type
from bounds import Bounds
from config import Settings, get_settings
from integer import Integer
from modular import ModularInteger
from spec import Contract, Law, integer_contract, modular_contract

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of verifying one law."""

    law_name: str
    passed: bool
    counterexample: tuple | None = None
    tests_run: int = 0
    error: str | None = None

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        ce = f"  counterexample={self.counterexample}" if self.counterexample is not None else ""
        err = f"  error={self.error}" if self.error else ""
        return f"[{status}] {self.law_name} ({self.tests_run} tests){ce}{err}"


@dataclass
class VerificationReport:
    """Aggregate result of verifying one contract for one type."""

    contract_name: str
    type_name: str
    exhaustive: bool = False
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        mode = "exhaustive" if self.exhaustive else "sampled"
        lines = [f"--- {self.type_name}: {self.contract_name} ({mode}) ---"]
        for r in self.results:
            lines.append(f"  {r}")
        status = "ALL PASSED" if self.passed else "FAILED"
        lines.append(f"  => {status}")
        return "\n".join(lines)


class VerificationError(Exception):
    """Raised when an implementation fails its contract."""

    def __init__(self, report: VerificationReport):
        self.report = report
        super().__init__(f"Verification failed:\n{report.summary()}")


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class DarkFactory:
    """
    Produces integer types that are proven to obey their contract.

    For domains no wider than ``Settings.exhaustive_threshold`` every
    input combination is checked; beyond that the factory samples.
    """

    @classmethod
    def create(
        cls, name: str, bounds: Bounds, settings: Settings | None = None
    ) -> type[BoundedInteger]:
        """Build, verify, and return a BoundedInteger type."""
        return cls.certify(bounded_type(name, bounds), settings)

    @classmethod
    def certify(cls, tp: type, settings: Settings | None = None) -> type:
        """Return *tp* unchanged if it passes, else raise VerificationError."""
        for report in cls.verify(tp, settings):
            if not report.passed:
                first = report.failures[0]
                logger.warning(
                    "%s rejected: law %s failed",
                    report.type_name, first.law_name,
                    extra={
                        "type_name": report.type_name,
                        "contract": report.contract_name,
                        "law": first.law_name,
                        "counterexample": first.counterexample,
                    },
                )
                raise VerificationError(report)
        logger.info("%s certified", tp.__name__, extra={"type_name": tp.__name__})
        return tp

    @classmethod
    def verify(
        cls, tp: type, settings: Settings | None = None
    ) -> list[VerificationReport]:
        """Run every applicable contract against the implementation for *tp*."""
        if settings is None:
            settings = get_settings()
        impl = implementation_of(tp, Integer)

        contracts = [integer_contract()]
        if issubclass(impl, ModularInteger):
            contracts.append(modular_contract())

        domain = cls._domain(impl, settings)
        exhaustive = domain.width <= settings.exhaustive_threshold

        return [
            cls._verify_contract(contract, impl, tp.__name__, domain, exhaustive, settings)
            for contract in contracts
        ]

    # -- internal ---------------------------------------------------------

    @classmethod
    def _domain(cls, impl: type, settings: Settings) -> Bounds:
        if issubclass(impl, ModularInteger):
            return Bounds(int(impl.min_value()), int(impl.max_value()))
        bound = settings.native_sample_bound
        return Bounds(-bound, bound)

    @classmethod
    def _verify_contract(
        cls,
        contract: Contract,
        impl: type,
        type_name: str,
        domain: Bounds,
        exhaustive: bool,
        settings: Settings,
    ) -> VerificationReport:
        report = VerificationReport(
            contract_name=contract.name,
            type_name=type_name,
            exhaustive=exhaustive,
        )
        rng = random.Random(settings.sample_seed)
        for law in contract:
            if exhaustive:
                combos = itertools.product(domain.all_values(), repeat=law.arity)
            else:
                combos = _generate_samples(domain.lo, domain.hi, law.arity, settings.sample_count, rng)
            result = cls._verify_law(law, impl, combos)
            logger.debug(
                "law %s: %s",
                law.name, "pass" if result.passed else "FAIL",
                extra={
                    "type_name": type_name,
                    "contract": contract.name,
                    "law": law.name,
                    "tests_run": result.tests_run,
                },
            )
            report.results.append(result)
        return report

    @classmethod
    def _verify_law(
        cls, law: Law, impl: type, combos: Iterable[tuple[int, ...]]
    ) -> VerificationResult:
        tests_run = 0
        for combo in combos:
            tests_run += 1
            values = tuple(impl.from_int(v) for v in combo)
            try:
                ok = law.check(impl, *values)
            except ArithmeticError as exc:
                return VerificationResult(
                    law_name=law.name,
                    passed=False,
                    counterexample=combo,
                    tests_run=tests_run,
                    error=f"{type(exc).__name__}: {exc}",
                )
            if not ok:
                return VerificationResult(
                    law_name=law.name,
                    passed=False,
                    counterexample=combo,
                    tests_run=tests_run,
                )

        return VerificationResult(
            law_name=law.name,
            passed=True,
            tests_run=tests_run,
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate_samples(
    lo: int, hi: int, arity: int, count: int, rng: random.Random
) -> list[tuple[int, ...]]:
    """Generate edge-case + random samples for law checking."""
    if arity == 0:
        return [()]

    edge_values = [lo, lo + 1, -1, 0, 1, hi - 1, hi]
    edge_values = sorted({v for v in edge_values if lo <= v <= hi})

    samples: list[tuple[int, ...]] = list(itertools.product(edge_values, repeat=arity))

    # Random fill
    while len(samples) < count:
        samples.append(tuple(rng.randint(lo, hi) for _ in range(arity)))

    return samples
