"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_calculator
from calculator import Calculator


def create_app(calculator: Calculator | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional calculator for testing; creates a default one if
    omitted.
    """
    if calculator is None:
        calculator = Calculator()

    set_calculator(calculator)

    app = FastAPI(
        title="Big Integer API",
        description=(
            "Exact integer arithmetic on operands of any size. Operands and "
            "results travel as decimal text; division truncates toward zero "
            "and modulo always returns a non-negative remainder."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
