"""Operation boundary between the engine and its collaborators.

Input providers hand over two decimal operands and an operation selector;
output sinks receive canonical decimal text or one of the ``errors``
exceptions.  The engine itself has no timeout, so callers bound latency
with digit limits: one for every operation and a much tighter one for
divide and modulo, whose doubling loop grows roughly with the cube of
the operand length.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from bigint import BigInteger, Ordering
from errors import NullInputError, OperandTooLargeError, UnknownOperationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_OPERAND_DIGITS = 10_000
# About a third of a second per request for a 120-digit dividend.
DEFAULT_MAX_DIVIDING_DIGITS = 120


class Operation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"

    @property
    def divides(self) -> bool:
        return self in (Operation.DIVIDE, Operation.MODULO)


# Menu numbers of the interactive front end, plus the usual symbols.
_ALIASES: dict[str, Operation] = {
    "1": Operation.ADD, "+": Operation.ADD,
    "2": Operation.SUBTRACT, "-": Operation.SUBTRACT,
    "3": Operation.MULTIPLY, "*": Operation.MULTIPLY, "x": Operation.MULTIPLY,
    "4": Operation.DIVIDE, "/": Operation.DIVIDE,
    "5": Operation.MODULO, "%": Operation.MODULO, "mod": Operation.MODULO,
}


def parse_operation(selector: Operation | str | int | None) -> Operation:
    """Resolve an operation name, symbol or menu number."""
    if isinstance(selector, Operation):
        return selector
    if selector is None or isinstance(selector, bool):
        raise UnknownOperationError(selector)
    key = str(selector).strip().lower()
    try:
        return Operation(key)
    except ValueError:
        pass
    try:
        return _ALIASES[key]
    except KeyError:
        raise UnknownOperationError(selector) from None


@dataclass(frozen=True)
class CalculatorConfig:
    """Caller-imposed operand limits, in characters.  ``0`` disables a limit."""

    max_operand_digits: int = DEFAULT_MAX_OPERAND_DIGITS
    max_dividing_digits: int = DEFAULT_MAX_DIVIDING_DIGITS

    def __post_init__(self) -> None:
        for name in ("max_operand_digits", "max_dividing_digits"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    def limit_for(self, operation: Operation) -> int:
        """Effective limit for ``operation``; 0 means unlimited."""
        limits = [self.max_operand_digits]
        if operation.divides:
            limits.append(self.max_dividing_digits)
        active = [limit for limit in limits if limit]
        return min(active) if active else 0


@dataclass(frozen=True)
class Calculator:
    config: CalculatorConfig = field(default_factory=CalculatorConfig)

    # -- internal helpers ---------------------------------------------------

    def _operand(self, text: str | None, role: str, limit: int) -> BigInteger:
        if text is None:
            raise NullInputError(role)
        if limit and isinstance(text, str) and len(text.strip()) > limit:
            raise OperandTooLargeError(len(text.strip()), limit)
        return BigInteger.from_decimal_string(text)

    # -- public operations --------------------------------------------------

    def apply(
        self,
        operation: Operation | str | int,
        left: BigInteger,
        right: BigInteger,
    ) -> BigInteger:
        op = parse_operation(operation)
        if op is Operation.ADD:
            return left.add(right)
        if op is Operation.SUBTRACT:
            return left.subtract(right)
        if op is Operation.MULTIPLY:
            return left.multiply(right)
        if op is Operation.DIVIDE:
            return left.divide(right)
        if op is Operation.MODULO:
            return left.modulo(right)
        raise UnknownOperationError(operation)

    def evaluate(
        self,
        left: str | None,
        right: str | None,
        operation: Operation | str | int,
    ) -> str:
        """Parse both operands, apply the operation and render the result."""
        op = parse_operation(operation)
        limit = self.config.limit_for(op)
        a = self._operand(left, "left operand", limit)
        b = self._operand(right, "right operand", limit)
        logger.debug(
            "%s on operands of %d and %d limbs", op.value, len(a.limbs), len(b.limbs)
        )
        return self.apply(op, a, b).to_decimal_string()

    def compare(self, left: str | None, right: str | None) -> Ordering:
        limit = self.config.max_operand_digits
        a = self._operand(left, "left operand", limit)
        b = self._operand(right, "right operand", limit)
        return a.compare(b)
