"""Request and response models for the arithmetic API.

Operands travel as decimal text so values of any size survive JSON.  The
models do not validate the digits themselves: malformed or missing
operands are reported by the engine with its own error kinds.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from calculator import Operation
from errors import ErrorKind


class CalculationRequest(BaseModel):
    """Two decimal operands and the operation to apply."""

    left: str | None = Field(default=None, description="Left operand, decimal text")
    right: str | None = Field(default=None, description="Right operand, decimal text")
    operation: str = Field(
        ...,
        min_length=1,
        max_length=16,
        description="Operation name, symbol or menu number, e.g. 'add', '+', '1'",
    )


class CalculationResponse(BaseModel):
    operation: Operation
    left: str
    right: str
    result: str


class ComparisonRequest(BaseModel):
    left: str | None = None
    right: str | None = None


class Relation(str, Enum):
    LESS = "less"
    EQUAL = "equal"
    GREATER = "greater"


class ComparisonResponse(BaseModel):
    ordering: int = Field(..., ge=-1, le=1)
    relation: Relation


class OperationsResponse(BaseModel):
    operations: list[Operation]


class ErrorDetail(BaseModel):
    """Body of the ``detail`` field on error responses."""

    kind: ErrorKind
    message: str
