"""
Contract conformance tests.

These test the factory's end-to-end verification:
  - Correct implementations pass verification.
  - Broken implementations are rejected with a counterexample.
  - Exhaustive verification actually checks all combinations.
"""

import logging
import math

import pytest

from bounded import BoundedInteger
from bounds import Bounds, OverflowMode, TINY, SMALL, INT16
from factory import DarkFactory, VerificationError, _generate_samples
from spec import Contract, Law, integer_contract, modular_contract


# ---------------------------------------------------------------------------
# Broken implementations
# ---------------------------------------------------------------------------

class FlooredTDiv(BoundedInteger, bounds=TINY):
    """t_div written with Python's floor division."""

    @classmethod
    def t_div(cls, a, b):
        b = cls._nonzero(b)
        return cls(cls._raw(a) // b)


class SilentZeroMod(BoundedInteger, bounds=TINY):
    """f_mod returns zero instead of signalling a zero divisor."""

    @classmethod
    def f_mod(cls, a, b):
        if cls._raw(b) == 0:
            return cls(0)
        return super().f_mod(a, b)


class LcmBasedGcd(BoundedInteger, bounds=TINY):
    """gcd derived from lcm, which divides by zero on a zero operand."""

    @classmethod
    def gcd(cls, a, b):
        x, y = cls._raw(a), cls._raw(b)
        return cls(abs(x * y) // math.lcm(x, y))


class DoubleStep(BoundedInteger, bounds=TINY):
    @classmethod
    def succ(cls, x):
        return x + 2


class OverflowOnZeroDivisor(BoundedInteger, bounds=TINY.with_overflow(OverflowMode.ERROR)):
    """t_div signals a zero divisor as if it were an overflow."""

    @classmethod
    def t_div(cls, a, b):
        if cls._raw(b) == 0:
            raise OverflowError("division by zero")
        return super().t_div(a, b)


class GcdNeverComputes(BoundedInteger, bounds=TINY.with_overflow(OverflowMode.ERROR)):
    @classmethod
    def gcd(cls, a, b):
        raise OverflowError("gcd out of range")


# ---------------------------------------------------------------------------
# Factory produces verified types
# ---------------------------------------------------------------------------

class TestFactoryProducesVerified:
    @pytest.mark.parametrize("mode", list(OverflowMode))
    def test_tiny_bounds_every_policy(self, mode, verify_settings):
        tp = DarkFactory.create("Tiny", TINY.with_overflow(mode), verify_settings)
        assert issubclass(tp, BoundedInteger)
        assert tp.bounds.overflow is mode

    def test_small_bounds_sampled(self, verify_settings):
        tp = DarkFactory.create("Small", SMALL, verify_settings)
        reports = DarkFactory.verify(tp, verify_settings)
        assert all(r.passed for r in reports)
        assert not reports[0].exhaustive

    def test_unsigned_clamped(self, verify_settings):
        tp = DarkFactory.create("Percent", Bounds(0, 100, OverflowMode.CLAMP), verify_settings)
        assert tp(60) + 50 == 100
        assert tp(10) - 20 == 0

    def test_wide_type_sampled(self, verify_settings):
        tp = DarkFactory.create("Int16", INT16, verify_settings)
        assert tp.bounds == INT16

    def test_native_int_certified(self, verify_settings):
        assert DarkFactory.certify(int, verify_settings) is int

    def test_native_int_runs_integer_contract_only(self, verify_settings):
        reports = DarkFactory.verify(int, verify_settings)
        assert [r.contract_name for r in reports] == ["integer"]
        assert reports[0].passed
        assert not reports[0].exhaustive

    def test_modular_runs_both_contracts(self, verify_settings):
        tp = DarkFactory.create("Mod5", Bounds(0, 4), verify_settings)
        reports = DarkFactory.verify(tp, verify_settings)
        assert [r.contract_name for r in reports] == ["integer", "modular"]
        assert all(r.exhaustive for r in reports)

    def test_certified_logged(self, caplog, verify_settings):
        caplog.set_level(logging.INFO, logger="factory")
        DarkFactory.create("Logged", TINY, verify_settings)
        assert "Logged certified" in caplog.text


# ---------------------------------------------------------------------------
# Factory rejects broken implementations
# ---------------------------------------------------------------------------

class TestFactoryRejectsBroken:
    def test_floored_t_div_rejected(self, verify_settings):
        with pytest.raises(VerificationError) as exc_info:
            DarkFactory.certify(FlooredTDiv, verify_settings)
        failure = exc_info.value.report.failures[0]
        assert failure.law_name == "t_div_truncates"
        assert failure.counterexample == (-8, 3)

    def test_unsignalled_zero_divisor_rejected(self, verify_settings):
        with pytest.raises(VerificationError) as exc_info:
            DarkFactory.certify(SilentZeroMod, verify_settings)
        names = [r.law_name for r in exc_info.value.report.failures]
        assert names == ["zero_divisor_signalled"]

    def test_arithmetic_error_recorded(self, verify_settings):
        reports = DarkFactory.verify(LcmBasedGcd, verify_settings)
        failure = next(r for r in reports[0].failures if r.law_name == "gcd_zero_identity")
        assert failure.counterexample == (-7,)
        assert failure.error.startswith("ZeroDivisionError")

    def test_zero_divisor_signalled_as_overflow_rejected(self, verify_settings):
        with pytest.raises(VerificationError) as exc_info:
            DarkFactory.certify(OverflowOnZeroDivisor, verify_settings)
        failures = exc_info.value.report.failures
        assert [r.law_name for r in failures] == ["zero_divisor_signalled"]
        assert failures[0].counterexample == (-8,)

    def test_overflow_on_representable_result_rejected(self, verify_settings):
        with pytest.raises(VerificationError) as exc_info:
            DarkFactory.certify(GcdNeverComputes, verify_settings)
        failure = next(
            r for r in exc_info.value.report.failures if r.law_name == "gcd_zero_identity"
        )
        assert failure.counterexample == (-7,)
        assert failure.error == "OverflowError: gcd out of range"

    def test_error_policy_types_certified(self, verify_settings):
        tp = DarkFactory.create("TinyError", TINY.with_overflow(OverflowMode.ERROR), verify_settings)
        reports = DarkFactory.verify(tp, verify_settings)
        assert all(r.error is None for report in reports for r in report.results)

    def test_wrong_succ_rejected(self, verify_settings):
        with pytest.raises(VerificationError, match="succ_adds_one"):
            DarkFactory.certify(DoubleStep, verify_settings)

    def test_rejection_logged_with_law(self, caplog, verify_settings):
        caplog.set_level(logging.WARNING, logger="factory")
        with pytest.raises(VerificationError):
            DarkFactory.certify(FlooredTDiv, verify_settings)
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.law == "t_div_truncates"
        assert record.type_name == "FlooredTDiv"

    def test_custom_contract_counterexample(self, verify_settings):
        bad = Contract(name="bad")
        bad.add(Law(
            name="always_negative",
            description="every value is negative",
            arity=1,
            predicate=lambda impl, a: int(a) < 0,
        ))
        tiny = DarkFactory.create("Tiny", TINY, verify_settings)
        report = DarkFactory._verify_contract(bad, tiny, "Tiny", TINY, True, verify_settings)
        assert not report.passed
        assert report.results[0].counterexample == (0,)
        assert report.results[0].tests_run == 9
        assert "FAILED" in report.summary()
        assert "[FAIL] always_negative" in report.summary()


# ---------------------------------------------------------------------------
# Exhaustive verification coverage
# ---------------------------------------------------------------------------

class TestExhaustiveVerification:
    @pytest.fixture
    def tiny_reports(self, verify_settings):
        tiny = DarkFactory.create("Tiny", TINY, verify_settings)
        return DarkFactory.verify(tiny, verify_settings)

    def test_binary_laws_check_all_pairs(self, tiny_reports):
        result = next(r for r in tiny_reports[0].results if r.law_name == "truncated_identity")
        assert result.passed
        assert result.tests_run == TINY.width ** 2

    def test_unary_laws_check_all_values(self, tiny_reports):
        result = next(r for r in tiny_reports[0].results if r.law_name == "succ_adds_one")
        assert result.tests_run == TINY.width

    def test_nullary_laws_run_once(self, tiny_reports):
        result = next(r for r in tiny_reports[0].results if r.law_name == "gcd_zero_zero")
        assert result.tests_run == 1

    def test_every_law_reported(self, tiny_reports):
        integer_report, modular_report = tiny_reports
        assert len(integer_report.results) == len(integer_contract())
        assert len(modular_report.results) == len(modular_contract())
        assert "ALL PASSED" in modular_report.summary()
        assert "(exhaustive)" in modular_report.summary()


# ---------------------------------------------------------------------------
# Contract and sampling helpers
# ---------------------------------------------------------------------------

class TestContractObjects:
    def test_lookup_by_name(self):
        law = integer_contract()["gcd_zero_zero"]
        assert law.arity == 0

    def test_unknown_law(self):
        with pytest.raises(KeyError):
            modular_contract()["no_such_law"]

    def test_samples_cover_edges(self):
        import random

        samples = _generate_samples(-100, 100, 2, 80, random.Random(0))
        assert len(samples) == 80
        assert (-100, 100) in samples
        assert (0, 0) in samples
        assert all(-100 <= v <= 100 for s in samples for v in s)

    def test_nullary_sample(self):
        import random

        assert _generate_samples(0, 9, 0, 50, random.Random(0)) == [()]
