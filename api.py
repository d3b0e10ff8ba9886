"""FastAPI REST endpoints for big-integer arithmetic.

Routes
------
POST   /calculate     Apply an operation to two decimal operands
POST   /compare       Order two decimal operands
GET    /operations    List the supported operations
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from bigint import Ordering
from calculator import Calculator, Operation, parse_operation
from errors import (
    AllocationFailure,
    BigIntegerError,
    DivisionByZeroError,
)
from models import (
    CalculationRequest,
    CalculationResponse,
    ComparisonRequest,
    ComparisonResponse,
    ErrorDetail,
    OperationsResponse,
    Relation,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["arithmetic"])

# The calculator instance is injected by the app factory (see app.py).
_calculator: Calculator | None = None


def set_calculator(calculator: Calculator) -> None:
    """Inject the calculator instance. Called once at app startup."""
    global _calculator
    _calculator = calculator


def get_calculator() -> Calculator:
    assert _calculator is not None, "Calculator not initialized"
    return _calculator


# ---------------------------------------------------------------------------
# Error helpers
# ---------------------------------------------------------------------------

_RELATIONS = {
    Ordering.LESS: Relation.LESS,
    Ordering.EQUAL: Relation.EQUAL,
    Ordering.GREATER: Relation.GREATER,
}


def _status_for(e: BigIntegerError) -> int:
    if isinstance(e, DivisionByZeroError):
        return 400
    if isinstance(e, AllocationFailure):
        return 507
    return 422


def _engine_error(e: BigIntegerError) -> HTTPException:
    logger.info("rejected request: %s (%s)", e, e.kind.value)
    detail = ErrorDetail(kind=e.kind, message=str(e))
    return HTTPException(status_code=_status_for(e), detail=detail.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/calculate", response_model=CalculationResponse)
def calculate(payload: CalculationRequest) -> CalculationResponse:
    """Apply ``operation`` to ``left`` and ``right``."""
    calculator = get_calculator()
    try:
        operation = parse_operation(payload.operation)
        result = calculator.evaluate(payload.left, payload.right, operation)
    except BigIntegerError as e:
        raise _engine_error(e) from e
    return CalculationResponse(
        operation=operation,
        left=payload.left,
        right=payload.right,
        result=result,
    )


@router.post("/compare", response_model=ComparisonResponse)
def compare(payload: ComparisonRequest) -> ComparisonResponse:
    """Order ``left`` relative to ``right``."""
    calculator = get_calculator()
    try:
        ordering = calculator.compare(payload.left, payload.right)
    except BigIntegerError as e:
        raise _engine_error(e) from e
    return ComparisonResponse(ordering=int(ordering), relation=_RELATIONS[ordering])


@router.get("/operations", response_model=OperationsResponse)
def list_operations() -> OperationsResponse:
    """List the supported operations."""
    return OperationsResponse(operations=list(Operation))
