"""Tests for the FastAPI REST endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app import create_app
from calculator import DEFAULT_MAX_DIVIDING_DIGITS, Calculator, CalculatorConfig
from errors import AllocationFailure


def _calc_payload(left, right, operation) -> dict:
    return {"left": left, "right": right, "operation": operation}


class _ExhaustedCalculator(Calculator):
    """Calculator whose storage always runs out."""

    def evaluate(self, left, right, operation):
        raise AllocationFailure(1 << 40)


# ---------------------------------------------------------------------------
# POST /calculate
# ---------------------------------------------------------------------------

class TestCalculateEndpoint:

    def test_add_returns_200(self, client):
        resp = client.post("/calculate", json=_calc_payload("99999999999999999999", "1", "add"))
        assert resp.status_code == 200
        data = resp.json()
        assert data["result"] == "100000000000000000000"
        assert data["operation"] == "add"
        assert data["left"] == "99999999999999999999"
        assert data["right"] == "1"

    @pytest.mark.parametrize("op,expected", [
        ("subtract", "150"),
        ("multiply", "-5000"),
        ("divide", "-2"),
        ("modulo", "0"),
    ])
    def test_each_operation(self, client, op, expected):
        resp = client.post("/calculate", json=_calc_payload("100", "-50", op))
        assert resp.status_code == 200
        assert resp.json()["result"] == expected

    def test_menu_number_selector(self, client):
        resp = client.post("/calculate", json=_calc_payload("-7", "2", "5"))
        assert resp.status_code == 200
        assert resp.json() == {
            "operation": "modulo", "left": "-7", "right": "2", "result": "1",
        }

    def test_huge_operands(self, client):
        left = "9" * 300
        resp = client.post("/calculate", json=_calc_payload(left, "1", "+"))
        assert resp.json()["result"] == "1" + "0" * 300

    def test_parse_error_422(self, client):
        resp = client.post("/calculate", json=_calc_payload("12a", "1", "add"))
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "parse_error"

    def test_missing_operand_422(self, client):
        resp = client.post("/calculate", json={"right": "1", "operation": "add"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "null_input"

    def test_unknown_operation_422(self, client):
        resp = client.post("/calculate", json=_calc_payload("1", "1", "pow"))
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "unknown_operation"

    def test_missing_operation_field_422(self, client):
        resp = client.post("/calculate", json={"left": "1", "right": "1"})
        assert resp.status_code == 422

    def test_division_by_zero_400(self, client):
        resp = client.post("/calculate", json=_calc_payload("1", "0", "divide"))
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail["kind"] == "division_by_zero"
        assert "zero" in detail["message"]

    def test_operand_limit_422(self):
        client = TestClient(create_app(Calculator(CalculatorConfig(max_operand_digits=5))))
        resp = client.post("/calculate", json=_calc_payload("123456", "1", "add"))
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "operand_too_large"

    def test_dividing_limit_422(self, client):
        left = "9" * (DEFAULT_MAX_DIVIDING_DIGITS + 1)
        resp = client.post("/calculate", json=_calc_payload(left, "3", "divide"))
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["kind"] == "operand_too_large"
        assert str(DEFAULT_MAX_DIVIDING_DIGITS) in detail["message"]

    def test_allocation_failure_507(self):
        client = TestClient(create_app(_ExhaustedCalculator()))
        resp = client.post("/calculate", json=_calc_payload("1", "1", "add"))
        assert resp.status_code == 507
        assert resp.json()["detail"]["kind"] == "allocation_failure"


# ---------------------------------------------------------------------------
# POST /compare
# ---------------------------------------------------------------------------

class TestCompareEndpoint:

    @pytest.mark.parametrize("left,right,ordering,relation", [
        ("1", "2", -1, "less"),
        ("-0", "0", 0, "equal"),
        ("18446744073709551616", "-1", 1, "greater"),
    ])
    def test_compare(self, client, left, right, ordering, relation):
        resp = client.post("/compare", json={"left": left, "right": right})
        assert resp.status_code == 200
        assert resp.json() == {"ordering": ordering, "relation": relation}

    def test_compare_parse_error(self, client):
        resp = client.post("/compare", json={"left": "x", "right": "1"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["kind"] == "parse_error"


# ---------------------------------------------------------------------------
# GET /operations
# ---------------------------------------------------------------------------

class TestOperationsEndpoint:

    def test_lists_all_operations(self, client):
        resp = client.get("/operations")
        assert resp.status_code == 200
        assert resp.json()["operations"] == [
            "add", "subtract", "multiply", "divide", "modulo",
        ]
