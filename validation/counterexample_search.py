"""Counterexample search across a matrix of integer-type configurations.

This module runs independently of the test suite.  For every
configuration it verifies the Integer and ModularInteger contract laws
and collects each violated law together with the input that broke it.
The built-in ``int`` is included as a sampled, unbounded configuration.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import sys
from dataclasses import dataclass, field

from bounded import bounded_type, modular_type
from bounds import Bounds, OverflowMode, INT32, TINY, UINT16
from config import Settings, get_settings
from factory import DarkFactory
from observability import setup_logging


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    configuration: str
    contract: str
    law: str
    inputs: tuple
    error: str | None = None


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.configuration} / {cx.contract} / {cx.law}")
                lines.append(f"      Inputs:   {cx.inputs}")
                if cx.error:
                    lines.append(f"      Error:    {cx.error}")
        else:
            lines.append("\nNo counterexamples found - all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Configurations
# ---------------------------------------------------------------------------

def default_configurations() -> list[tuple[str, type]]:
    """The matrix searched by ``main``."""
    return [
        ("WRAP  [-8, 7]", bounded_type("TinyWrap", TINY.with_overflow(OverflowMode.WRAP))),
        ("CLAMP [-8, 7]", bounded_type("TinyClamp", TINY.with_overflow(OverflowMode.CLAMP))),
        ("ERROR [-8, 7]", bounded_type("TinyError", TINY.with_overflow(OverflowMode.ERROR))),
        ("CLAMP [0, 15]", bounded_type("Nibble", Bounds(0, 15, OverflowMode.CLAMP))),
        ("MOD 5", modular_type("Mod5", 5)),
        ("WRAP  UINT16 (sampled)", bounded_type("UInt16", UINT16)),
        ("ERROR INT32 (sampled)", bounded_type("Int32Error", INT32.with_overflow(OverflowMode.ERROR))),
        ("int (sampled)", int),
    ]


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(
    configurations: list[tuple[str, type]],
    settings: Settings | None = None,
) -> SearchReport:
    """Verify every configuration and gather all violated laws."""
    report = SearchReport()
    for name, tp in configurations:
        for contract_report in DarkFactory.verify(tp, settings):
            for result in contract_report.results:
                report.checks_run += result.tests_run
                if not result.passed:
                    report.counterexamples.append(Counterexample(
                        configuration=name,
                        contract=contract_report.contract_name,
                        law=result.law_name,
                        inputs=result.counterexample,
                        error=result.error,
                    ))
    return report


def main() -> None:
    """Run counterexample search across the default configurations."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    report = run_search(default_configurations(), settings)
    print(report.summary())
    if not report.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()
