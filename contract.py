"""Formal contract for the big-integer engine.

Each operation is described as a collection of:
- postconditions: what the result must satisfy, checked against Python's
  built-in ``int`` as the reference implementation
- error conditions: which inputs must raise which exception
- algebraic properties: relationships that must hold between results

The contract is machine-readable.  Conformance tests and the
counterexample search iterate over it instead of restating each rule.

Layers
------
OperationSpec   per-operation contract (post/error/properties)
BranchSpec      every decision point that white-box tests must cover
EngineContract  the full contract
build_contract()  constructs the EngineContract
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from bigint import BigInteger, Ordering, Sign
from errors import DivisionByZeroError
from limbs import LIMB_BITS, LIMB_MASK


# ---------------------------------------------------------------------------
# Contract building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Postcondition:
    name: str
    description: str
    check: Callable[..., bool]


@dataclass(frozen=True)
class ErrorCondition:
    name: str
    description: str
    trigger: Callable[..., bool]
    exception: type


@dataclass(frozen=True)
class AlgebraicProperty:
    name: str
    description: str
    arity: int          # how many BigInteger inputs the check needs
    check: Callable[..., bool]


@dataclass(frozen=True)
class OperationSpec:
    name: str
    postconditions: list[Postcondition]
    error_conditions: list[ErrorCondition]
    properties: list[AlgebraicProperty]


@dataclass(frozen=True)
class BranchSpec:
    """A decision point in the implementation that must be exercised."""

    id: str
    description: str
    condition: str      # human-readable boolean expression
    operation: str      # which operation / helper this belongs to


@dataclass(frozen=True)
class EngineContract:
    """Complete contract for the engine."""

    operations: dict[str, OperationSpec]
    branches: list[BranchSpec]

    @property
    def all_properties(self) -> list[tuple[str, AlgebraicProperty]]:
        out: list[tuple[str, AlgebraicProperty]] = []
        for name, op in self.operations.items():
            for prop in op.properties:
                out.append((name, prop))
        return out

    @property
    def all_postconditions(self) -> list[tuple[str, Postcondition]]:
        out: list[tuple[str, Postcondition]] = []
        for name, op in self.operations.items():
            for post in op.postconditions:
                out.append((name, post))
        return out

    def branch_ids(self, operation: str | None = None) -> set[str]:
        return {
            b.id for b in self.branches
            if operation is None or b.operation == operation
        }


# ---------------------------------------------------------------------------
# Reference helpers used inside the predicates
# ---------------------------------------------------------------------------

def truncdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero (not floor division).

    Python's ``//`` rounds toward negative infinity; the engine truncates
    toward zero like C, Java and Rust.
    """
    q, r = divmod(a, b)
    # divmod rounds toward -inf; adjust when the result is negative
    # and there is a remainder.
    if r != 0 and (a < 0) != (b < 0):
        q += 1
    return q


def euclidean_mod(a: int, n: int) -> int:
    """Remainder in ``[0, |n|)`` for any signs of ``a`` and ``n``."""
    return a % abs(n)


def canonical_decimal(text: str) -> str:
    """Expected rendering of parser input that is known to be valid."""
    body = text.lstrip(" \t\n\r\v\f")
    negative = body.startswith("-")
    digits = body.lstrip("+-").lstrip("0") or "0"
    return "-" + digits if negative and digits != "0" else digits


def is_canonical(value: BigInteger) -> bool:
    """Magnitude is trimmed, every limb fits and zero is positive."""
    limbs = value.limbs
    if not limbs or any(not 0 <= limb <= LIMB_MASK for limb in limbs):
        return False
    if len(limbs) > 1 and limbs[-1] == 0:
        return False
    if limbs == (0,):
        return value.sign is Sign.POSITIVE
    return True


def _big(value: int) -> BigInteger:
    return BigInteger.from_integer(value)


def _matches(result: BigInteger, expected: int) -> bool:
    return int(result) == expected and is_canonical(result)


# ---------------------------------------------------------------------------
# Contract builder
# ---------------------------------------------------------------------------

def build_contract() -> EngineContract:
    """Construct the full engine contract."""

    # ------------------------------------------------------------------ add
    add_spec = OperationSpec(
        name="add",
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a + b",
                lambda a, b, result: _matches(result, a + b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "add(a, b) == add(b, a)", 2,
                lambda a, b: a.add(b) == b.add(a),
            ),
            AlgebraicProperty(
                "identity", "add(a, 0) == a", 1,
                lambda a: a.add(BigInteger.empty()) == a,
            ),
            AlgebraicProperty(
                "inverse", "add(a, -a) is canonical zero", 1,
                lambda a: _matches(a.add(a.negate()), 0),
            ),
            AlgebraicProperty(
                "operands_unchanged", "add leaves both operands untouched", 2,
                lambda a, b: _unchanged(BigInteger.add, a, b),
            ),
        ],
    )

    # ------------------------------------------------------------- subtract
    subtract_spec = OperationSpec(
        name="subtract",
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a - b",
                lambda a, b, result: _matches(result, a - b),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "self_inverse", "subtract(a, a) is canonical zero", 1,
                lambda a: _matches(a.subtract(a), 0),
            ),
            AlgebraicProperty(
                "anticommutativity", "subtract(a, b) == -subtract(b, a)", 2,
                lambda a, b: a.subtract(b) == b.subtract(a).negate(),
            ),
            AlgebraicProperty(
                "add_inverse", "add(subtract(a, b), b) == a", 2,
                lambda a, b: a.subtract(b).add(b) == a,
            ),
            AlgebraicProperty(
                "operands_unchanged", "subtract leaves both operands untouched", 2,
                lambda a, b: _unchanged(BigInteger.subtract, a, b),
            ),
        ],
    )

    # ------------------------------------------------------------- multiply
    multiply_spec = OperationSpec(
        name="multiply",
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a * b",
                lambda a, b, result: _matches(result, a * b),
            ),
            Postcondition(
                "sign_rule",
                "Negative iff exactly one operand is negative and neither is zero",
                lambda a, b, result: result.is_negative() == (
                    a != 0 and b != 0 and (a < 0) != (b < 0)
                ),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "commutativity", "multiply(a, b) == multiply(b, a)", 2,
                lambda a, b: a.multiply(b) == b.multiply(a),
            ),
            AlgebraicProperty(
                "identity", "multiply(a, 1) == a", 1,
                lambda a: a.multiply(_big(1)) == a,
            ),
            AlgebraicProperty(
                "zero", "multiply(a, 0) is canonical zero", 1,
                lambda a: _matches(a.multiply(BigInteger.empty()), 0),
            ),
            AlgebraicProperty(
                "operands_unchanged", "multiply leaves both operands untouched", 2,
                lambda a, b: _unchanged(BigInteger.multiply, a, b),
            ),
        ],
    )

    # --------------------------------------------------------------- divide
    divide_spec = OperationSpec(
        name="divide",
        postconditions=[
            Postcondition(
                "result_correct", "Result equals a / b truncated toward zero",
                lambda a, b, result: _matches(result, truncdiv(a, b)),
            ),
            Postcondition(
                "truncation_remainder",
                "a - q*b has the dividend's sign (or is 0) and |a - q*b| < |b|",
                lambda a, b, result: (
                    abs(a - int(result) * b) < abs(b)
                    and (a - int(result) * b == 0 or (a - int(result) * b < 0) == (a < 0))
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "division_by_zero",
                "DivisionByZeroError when the divisor is zero",
                lambda a, b: b == 0,
                DivisionByZeroError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "identity", "divide(a, 1) == a", 1,
                lambda a: a.divide(_big(1)) == a,
            ),
            AlgebraicProperty(
                "self", "divide(a, a) == 1 for a != 0", 1,
                lambda a: a.is_zero() or a.divide(a) == _big(1),
            ),
            AlgebraicProperty(
                "zero_numerator", "divide(0, b) == 0 for b != 0", 1,
                lambda b: b.is_zero() or _matches(BigInteger.empty().divide(b), 0),
            ),
            AlgebraicProperty(
                "multiply_inverse", "divide(multiply(a, b), b) == a for b != 0", 2,
                lambda a, b: b.is_zero() or a.multiply(b).divide(b) == a,
            ),
            AlgebraicProperty(
                "operands_unchanged", "divide leaves both operands untouched", 2,
                lambda a, b: b.is_zero() or _unchanged(BigInteger.divide, a, b),
            ),
        ],
    )

    # --------------------------------------------------------------- modulo
    modulo_spec = OperationSpec(
        name="modulo",
        postconditions=[
            Postcondition(
                "result_correct", "Result equals the Euclidean remainder of a by n",
                lambda a, n, result: _matches(result, euclidean_mod(a, n)),
            ),
            Postcondition(
                "in_range", "0 <= result < |n|",
                lambda a, n, result: 0 <= int(result) < abs(n),
            ),
            Postcondition(
                "quotient_link",
                "result is a - truncdiv(a, n)*n, plus |n| when that is negative",
                lambda a, n, result: int(result) == (
                    a - truncdiv(a, n) * n
                    + (abs(n) if a - truncdiv(a, n) * n < 0 else 0)
                ),
            ),
        ],
        error_conditions=[
            ErrorCondition(
                "modulo_by_zero",
                "DivisionByZeroError when the modulus is zero",
                lambda a, n: n == 0,
                DivisionByZeroError,
            ),
        ],
        properties=[
            AlgebraicProperty(
                "sign_of_modulus_irrelevant", "modulo(a, n) == modulo(a, -n)", 2,
                lambda a, n: n.is_zero() or a.modulo(n) == a.modulo(n.negate()),
            ),
            AlgebraicProperty(
                "idempotent", "modulo(modulo(a, n), n) == modulo(a, n)", 2,
                lambda a, n: n.is_zero() or a.modulo(n).modulo(n) == a.modulo(n),
            ),
            AlgebraicProperty(
                "operands_unchanged", "modulo leaves both operands untouched", 2,
                lambda a, n: n.is_zero() or _unchanged(BigInteger.modulo, a, n),
            ),
        ],
    )

    # -------------------------------------------------------------- compare
    compare_spec = OperationSpec(
        name="compare",
        postconditions=[
            Postcondition(
                "result_correct", "Ordering matches the reference ordering",
                lambda a, b, result: result == Ordering((a > b) - (a < b)),
            ),
        ],
        error_conditions=[],
        properties=[
            AlgebraicProperty(
                "antisymmetry", "compare(a, b) == -compare(b, a)", 2,
                lambda a, b: a.compare(b) == -b.compare(a),
            ),
            AlgebraicProperty(
                "reflexivity", "compare(a, a) is EQUAL", 1,
                lambda a: a.compare(a.copy()) is Ordering.EQUAL,
            ),
            AlgebraicProperty(
                "round_trip", "from_decimal_string(to_decimal_string(a)) == a", 1,
                lambda a: BigInteger.from_decimal_string(a.to_decimal_string()) == a,
            ),
        ],
    )

    # -------------------------------------------------------------- branches
    branches = [
        # Parsing
        BranchSpec("PARSE-NULL", "No text supplied", "text is None", "parse"),
        BranchSpec("PARSE-SIGN", "Explicit + or - consumed", "text[pos] in '+-'", "parse"),
        BranchSpec("PARSE-NO-DIGITS", "Nothing left after sign and whitespace", "not digits", "parse"),
        BranchSpec("PARSE-BAD-CHAR", "Non-digit character in the digit run", "ch not in '0123456789'", "parse"),
        BranchSpec("PARSE-NEG-ZERO", "'-0' normalized to positive zero", "negative and magnitude == [0]", "parse"),
        # Comparison
        BranchSpec("CMP-SIGN", "Signs differ", "a.sign != b.sign", "compare"),
        BranchSpec("CMP-LENGTH", "Magnitude lengths differ", "len(a) != len(b)", "compare"),
        BranchSpec("CMP-LIMB", "First differing limb decides", "a[i] != b[i]", "compare"),
        BranchSpec("CMP-EQUAL", "All limbs equal", "a == b", "compare"),
        # Addition
        BranchSpec("ADD-SAME-SIGN", "Magnitudes added", "a.sign == b.sign", "add"),
        BranchSpec("ADD-MIXED-SIGN", "Reduced to subtraction", "a.sign != b.sign", "add"),
        BranchSpec("ADD-CARRY-OUT", "Final carry extends the result", "carry after last limb", "add"),
        # Subtraction
        BranchSpec("SUB-MIXED-SIGN", "Reduced to addition of -b", "a.sign != b.sign", "subtract"),
        BranchSpec("SUB-EQUAL", "Equal magnitudes give zero", "|a| == |b|", "subtract"),
        BranchSpec("SUB-GREATER", "Result keeps the shared sign", "|a| > |b|", "subtract"),
        BranchSpec("SUB-LESS", "Result takes the negated shared sign", "|a| < |b|", "subtract"),
        BranchSpec("SUB-BORROW", "Limb borrows from the next", "minuend < subtrahend + borrow", "subtract"),
        # Multiplication
        BranchSpec("MUL-ZERO", "Zero operand shortcut", "a == 0 or b == 0", "multiply"),
        BranchSpec("MUL-CARRY-TAIL", "Carry propagated past the end of b", "j >= len(b) and carry", "multiply"),
        # Division / modulo
        BranchSpec("DIV-ZERO-DIVISOR", "DivisionByZeroError", "b == 0", "divide"),
        BranchSpec("DIV-ZERO-DIVIDEND", "Zero dividend shortcut", "a == 0", "divide"),
        BranchSpec("DIV-DOUBLING", "Quotient built by repeated doubling", "a != 0 and b != 0", "divide"),
        BranchSpec("MOD-ZERO-MODULUS", "DivisionByZeroError", "n == 0", "modulo"),
        BranchSpec("MOD-ADJUST", "Negative remainder shifted by |n|", "a - q*n < 0", "modulo"),
        # Rendering
        BranchSpec("STR-ZERO", "Zero renders as '0'", "magnitude == [0]", "render"),
        BranchSpec("STR-CHUNKS", "Base 10**9 chunks collected", "magnitude != [0]", "render"),
    ]

    return EngineContract(
        operations={
            "add": add_spec,
            "subtract": subtract_spec,
            "multiply": multiply_spec,
            "divide": divide_spec,
            "modulo": modulo_spec,
            "compare": compare_spec,
        },
        branches=branches,
    )


def _unchanged(op: Callable[[BigInteger, BigInteger], BigInteger],
               a: BigInteger, b: BigInteger) -> bool:
    before = (a.sign, a.limbs, b.sign, b.limbs)
    op(a, b)
    return (a.sign, a.limbs, b.sign, b.limbs) == before


# Handy operand values that sit on limb and chunk boundaries.
BOUNDARY_VALUES: tuple[int, ...] = tuple(sorted({
    sign * magnitude
    for sign in (1, -1)
    for magnitude in (
        0, 1, 2, 3, 7, 10, 17,
        10**9 - 1, 10**9, 10**9 + 1,
        LIMB_MASK - 1, LIMB_MASK, LIMB_MASK + 1, LIMB_MASK + 2,
        (1 << (2 * LIMB_BITS)) - 1, 1 << (2 * LIMB_BITS),
        (1 << (3 * LIMB_BITS)) + 12345,
        10**20 - 1, 10**20,
    )
}))
