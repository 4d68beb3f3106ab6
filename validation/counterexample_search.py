"""Counterexample search — discovers gaps in implementation or tests.

This module runs independently of the test suite.  It checks every
operation in the ``Num`` contract against:

1. Postcondition violations: inputs where the implementation doesn't
   match the contract's expected output.
2. Error condition violations: inputs that should raise but don't, raise
   the wrong exception, or raise one with the wrong details.
3. Property violations: relationships between operations that fail for
   some input.

Inputs are the contract's edge windows (around -2^31, 0, 2^31 - 1, 2^32 - 1
and, for ``parse``, a catalogue of malformed and out-of-range literals)
plus seeded random samples.

Run directly::

    python -m validation.counterexample_search --window 8 --samples 20000
"""
from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Any, Callable

from bounds import INT32
from contract import NumContract, OperationSpec, build_contract
from num import Num


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchConfig:
    window: int = 4         # distance around each edge value
    samples: int = 2_000    # random inputs per operation and property
    seed: int = 0


@dataclass
class Counterexample:
    category: str
    operation: str
    inputs: tuple
    expected: str
    actual: str
    description: str


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
                lines.append(f"  [{i}] {cx.category} / {cx.operation}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found — all checks passed.")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

def invokers(num_cls: type) -> dict[str, Callable[[Any], Any]]:
    """Map each contract operation onto a one-argument call."""
    return {
        "from_signed": num_cls.from_signed,
        "from_unsigned": num_cls.from_unsigned,
        "to_signed": lambda x: num_cls(x).to_signed(),
        "to_unsigned": lambda x: num_cls(x).to_unsigned(),
        "abs": lambda x: num_cls(x).abs(),
        "parse": num_cls.parse,
    }


def operation_inputs(
    contract: NumContract, op_name: str, config: SearchConfig
) -> list[Any]:
    op = contract.operations[op_name]
    inputs = contract.candidate_inputs(op_name, config.window)
    if op.domain is not None:
        inputs += op.domain.sample(config.samples, config.seed)
    else:
        inputs += [str(v) for v in INT32.sample(config.samples, config.seed)]
    return inputs


def _should_error(op_spec: OperationSpec, x: Any) -> bool:
    return any(ec.trigger(x) for ec in op_spec.error_conditions)


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_postcondition_violations(
    num_cls: type,
    contract: NumContract,
    config: SearchConfig,
) -> tuple[list[Counterexample], int]:
    """Verify postconditions for every candidate input."""
    cxs: list[Counterexample] = []
    checks = 0
    calls = invokers(num_cls)

    for op_name, op_spec in contract.operations.items():
        op = calls[op_name]
        for x in operation_inputs(contract, op_name, config):
            checks += 1
            # Inputs that are supposed to error are covered separately
            if _should_error(op_spec, x):
                continue

            try:
                result = op(x)
            except Exception as e:
                cxs.append(Counterexample(
                    category="unexpected_error",
                    operation=op_name,
                    inputs=(x,),
                    expected="no error",
                    actual=f"{type(e).__name__}: {e}",
                    description="Operation raised an unexpected exception",
                ))
                continue

            for post in op_spec.postconditions:
                if not post.check(x, result):
                    cxs.append(Counterexample(
                        category="postcondition_violation",
                        operation=op_name,
                        inputs=(x,),
                        expected=post.description,
                        actual=f"result={result!r}",
                        description=f"Postcondition '{post.name}' violated",
                    ))

    return cxs, checks


def search_error_condition_violations(
    num_cls: type,
    contract: NumContract,
    config: SearchConfig,
) -> tuple[list[Counterexample], int]:
    """Verify every error condition raises the right exception."""
    cxs: list[Counterexample] = []
    checks = 0
    calls = invokers(num_cls)

    for op_name, op_spec in contract.operations.items():
        op = calls[op_name]
        for x in operation_inputs(contract, op_name, config):
            for ec in op_spec.error_conditions:
                if not ec.trigger(x):
                    continue
                checks += 1
                try:
                    result = op(x)
                except ec.exception as e:
                    if ec.detail is not None and not ec.detail(x, e):
                        cxs.append(Counterexample(
                            category="wrong_error_detail",
                            operation=op_name,
                            inputs=(x,),
                            expected=ec.description,
                            actual=f"{type(e).__name__}: {e} {vars(e)}",
                            description=(
                                f"Error condition '{ec.name}' raised with "
                                f"wrong details"
                            ),
                        ))
                except Exception as e:
                    cxs.append(Counterexample(
                        category="wrong_error",
                        operation=op_name,
                        inputs=(x,),
                        expected=ec.exception.__name__,
                        actual=f"{type(e).__name__}: {e}",
                        description=f"Wrong exception type for '{ec.name}'",
                    ))
                else:
                    cxs.append(Counterexample(
                        category="missing_error",
                        operation=op_name,
                        inputs=(x,),
                        expected=ec.exception.__name__,
                        actual=f"result={result!r}",
                        description=(
                            f"Error condition '{ec.name}' should have "
                            f"triggered but didn't"
                        ),
                    ))

    return cxs, checks


def search_property_violations(
    num_cls: type,
    contract: NumContract,
    config: SearchConfig,
) -> tuple[list[Counterexample], int]:
    """Check every property over its domain's edges and samples."""
    cxs: list[Counterexample] = []
    checks = 0

    for op_name, prop in contract.all_properties:
        inputs = prop.domain.edge_values(config.window)
        inputs += prop.domain.sample(config.samples, config.seed)
        for x in inputs:
            checks += 1
            try:
                ok = prop.check(num_cls, x)
            except Exception as e:
                ok = False
                actual = f"{type(e).__name__}: {e}"
            else:
                actual = "property does not hold"
            if not ok:
                cxs.append(Counterexample(
                    category="property_violation",
                    operation=op_name,
                    inputs=(x,),
                    expected=prop.description,
                    actual=actual,
                    description=f"Property '{prop.name}' violated",
                ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

def run_search(
    num_cls: type = Num,
    config: SearchConfig = SearchConfig(),
) -> SearchReport:
    """Run the complete counterexample search against ``num_cls``."""
    contract = build_contract()
    report = SearchReport()

    for search_fn in (
        search_postcondition_violations,
        search_error_condition_violations,
        search_property_violations,
    ):
        cxs, checks = search_fn(num_cls, contract, config)
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def parse_args(argv: list[str] | None = None) -> SearchConfig:
    parser = argparse.ArgumentParser(
        description="Search for counterexamples to the Num contract."
    )
    defaults = SearchConfig()
    parser.add_argument("--window", type=int, default=defaults.window)
    parser.add_argument("--samples", type=int, default=defaults.samples)
    parser.add_argument("--seed", type=int, default=defaults.seed)
    args = parser.parse_args(argv)
    return SearchConfig(window=args.window, samples=args.samples, seed=args.seed)


def main(argv: list[str] | None = None) -> None:
    config = parse_args(argv)
    print(
        f"--- Configuration: window={config.window} "
        f"samples={config.samples} seed={config.seed} ---"
    )
    report = run_search(Num, config)
    print(report.summary())
    if not report.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()
