"""Counterexample search over limb-boundary and random operands.

Runs outside the test suite.  Every operand pair is pushed through each
contract operation; a pair either raises the exception its error
condition names, or produces a result that satisfies every postcondition.
Algebraic properties are then checked over the same operands.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import random
import sys
from dataclasses import dataclass, field

from bigint import BigInteger
from contract import BOUNDARY_VALUES, EngineContract, OperationSpec, build_contract


@dataclass(frozen=True)
class Violation:
    operation: str
    operands: tuple
    check: str
    observed: str

    def __str__(self) -> str:
        args = ", ".join(str(v) for v in self.operands)
        return f"{self.operation}({args}): {self.check} -> {self.observed}"


@dataclass
class SearchReport:
    label: str
    checks: int = 0
    violations: list[Violation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    def render(self) -> str:
        status = "ok" if self.passed else f"{len(self.violations)} violation(s)"
        lines = [f"[{self.label}] {self.checks} checks, {status}"]
        lines.extend(f"  {v}" for v in self.violations)
        return "\n".join(lines)


def random_operands(count: int, max_bits: int = 160, seed: int = 0) -> list[int]:
    """Random signed operands up to ``max_bits`` wide, reproducible by seed."""
    rng = random.Random(seed)
    return [
        rng.getrandbits(rng.randint(1, max_bits)) * rng.choice((1, -1))
        for _ in range(count)
    ]


def _check_pair(name: str, op: OperationSpec, a: int, b: int) -> list[Violation]:
    expected_error = next(
        (ec for ec in op.error_conditions if ec.trigger(a, b)), None
    )
    try:
        result = getattr(BigInteger.from_integer(a), name)(BigInteger.from_integer(b))
    except Exception as exc:
        if expected_error is not None and isinstance(exc, expected_error.exception):
            return []
        return [Violation(name, (a, b), "no unexpected error", repr(exc))]

    if expected_error is not None:
        return [Violation(
            name, (a, b), expected_error.name, f"returned {result}",
        )]
    return [
        Violation(name, (a, b), post.name, f"returned {result}")
        for post in op.postconditions
        if not post.check(a, b, result)
    ]


def search(
    values: list[int],
    label: str = "operands",
    contract: EngineContract | None = None,
) -> SearchReport:
    """Check every operation and property over ``values``."""
    contract = contract or build_contract()
    report = SearchReport(label)

    for name, op in contract.operations.items():
        for a in values:
            for b in values:
                report.checks += 1
                report.violations.extend(_check_pair(name, op, a, b))

    bigs = [BigInteger.from_integer(v) for v in values]
    for name, prop in contract.all_properties:
        combos = [(x, y) for x in bigs for y in bigs] if prop.arity == 2 else [(x,) for x in bigs]
        for combo in combos:
            report.checks += 1
            if not prop.check(*combo):
                report.violations.append(Violation(
                    name, tuple(str(v) for v in combo), prop.name, "does not hold",
                ))
    return report


def main() -> None:
    reports = [
        search(list(BOUNDARY_VALUES), "limb and chunk boundaries"),
        search(random_operands(24, seed=1), "random, up to 160 bits"),
        search(random_operands(24, max_bits=32, seed=2), "random, up to 32 bits"),
    ]
    for report in reports:
        print(report.render())
    if not all(report.passed for report in reports):
        sys.exit(1)


if __name__ == "__main__":
    main()
