"""Shared fixtures and Hypothesis strategies for engine tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from hypothesis import settings
from hypothesis import strategies as st

from app import create_app
from bigint import BigInteger
from calculator import Calculator, CalculatorConfig

# Doubling division is quadratic in quotient bits; per-example timing varies
# too much for Hypothesis' default deadline.
settings.register_profile("engine", deadline=None)
settings.load_profile("engine")

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Wide enough to span several limbs; division is quadratic in quotient bits,
# so divisor-side strategies stay narrower.
wide_ints = st.integers(min_value=-(10**60), max_value=10**60)
medium_ints = st.integers(min_value=-(10**30), max_value=10**30)
nonzero_ints = st.integers(min_value=-(10**12), max_value=10**12).filter(lambda n: n != 0)

decimal_texts = st.from_regex(r"[ \t]{0,2}[+-]?[0-9]{1,80}", fullmatch=True)


def big(value: int) -> BigInteger:
    return BigInteger.from_integer(value)


def parse(text: str) -> BigInteger:
    return BigInteger.from_decimal_string(text)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def calculator() -> Calculator:
    return Calculator()


@pytest.fixture
def small_limit_calculator() -> Calculator:
    return Calculator(CalculatorConfig(max_operand_digits=12))


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(calculator=Calculator()))
