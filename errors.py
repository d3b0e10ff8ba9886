"""Error kinds raised by the big-integer engine and its boundary.

Every error derives from ``BigIntegerError`` and from the builtin that
best describes it, so callers may catch either.  ``kind`` identifies the
error for collaborators that only pass a description along (e.g. the
HTTP layer).
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    NULL_INPUT = "null_input"
    PARSE_ERROR = "parse_error"
    DIVISION_BY_ZERO = "division_by_zero"
    ALLOCATION_FAILURE = "allocation_failure"
    OPERAND_TOO_LARGE = "operand_too_large"
    UNKNOWN_OPERATION = "unknown_operation"


class BigIntegerError(Exception):
    """Base class for all engine errors."""

    kind: ErrorKind


class NullInputError(BigIntegerError, TypeError):
    """Raised when no text (``None``) is supplied where a value is required."""

    kind = ErrorKind.NULL_INPUT

    def __init__(self, what: str = "operand") -> None:
        self.what = what
        super().__init__(f"no {what} supplied")


class ParseError(BigIntegerError, ValueError):
    """Raised when text does not hold a decimal integer."""

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"cannot parse {text!r} as an integer: {reason}")


class DivisionByZeroError(BigIntegerError, ZeroDivisionError):
    """Raised when a divisor or modulus is zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, operation: str = "division") -> None:
        self.operation = operation
        super().__init__(f"{operation} by zero")


class AllocationFailure(BigIntegerError, MemoryError):
    """Raised when limb storage cannot grow."""

    kind = ErrorKind.ALLOCATION_FAILURE

    def __init__(self, limbs: int) -> None:
        self.limbs = limbs
        super().__init__(f"cannot allocate storage for {limbs} limbs")


class OperandTooLargeError(BigIntegerError, ValueError):
    """Raised when an operand exceeds the configured digit limit."""

    kind = ErrorKind.OPERAND_TOO_LARGE

    def __init__(self, length: int, limit: int) -> None:
        self.length = length
        self.limit = limit
        super().__init__(
            f"operand has {length} characters, limit is {limit}"
        )


class UnknownOperationError(BigIntegerError, ValueError):
    """Raised when an operation selector names no known operation."""

    kind = ErrorKind.UNKNOWN_OPERATION

    def __init__(self, selector: object) -> None:
        self.selector = selector
        super().__init__(f"unknown operation: {selector!r}")
