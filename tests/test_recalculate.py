from decimal import Decimal

import pytest

from app.models.operation import Operation
from app.services.totals import recalculate_operation_totals


def _totals(op: dict) -> tuple:
    return tuple(Decimal(op[k]) for k in ("total_selling", "total_cost", "total_profit", "profit_margin"))


def test_end_to_end_completed_operation(client, make_operation, make_fee):
    operation = make_operation(status="completed")
    fee = make_fee("Handling")

    r = client.post(
        "/invoices/",
        json={
            "invoice_number": "FAT-E2E",
            "operation_id": operation["id"],
            "client_id": operation["client_id"],
            "dollar_value": "5.0",
            "total_amount": "100",
            "iof_amount": "0",
            "items": [
                {
                    "fee_id": fee["id"],
                    "value": "100",
                    "currency": "BRL",
                    "cost_value": "20",
                    "cost_currency": "USD",
                }
            ],
        },
    )
    assert r.status_code == 201, r.text
    assert Decimal(r.json()["final_amount"]) == Decimal("100")

    op = client.get(f"/operations/{operation['id']}").json()
    assert Decimal(op["total_selling"]) == Decimal("100")
    assert Decimal(op["total_cost"]) == Decimal("100")
    assert Decimal(op["total_profit"]) == Decimal("0")
    assert Decimal(op["profit_margin"]) == Decimal("0")


@pytest.mark.parametrize("status", ["pending", "in_progress", "cancelled"])
def test_uncompleted_operation_has_zero_totals(client, make_operation, make_invoice, status):
    operation = make_operation(status=status)
    make_invoice(operation, total_amount="500", iof_amount="20")

    op = client.get(f"/operations/{operation['id']}").json()
    assert _totals(op) == (0, 0, 0, 0)


def test_completed_operation_sums_all_invoices(client, make_operation, make_invoice):
    operation = make_operation(status="completed")
    make_invoice(operation, total_amount="100")
    make_invoice(operation, total_amount="50")

    op = client.get(f"/operations/{operation['id']}").json()
    assert Decimal(op["total_selling"]) == Decimal("150")


def test_margin_with_cost(client, make_operation, make_invoice, make_fee):
    operation = make_operation(status="completed")
    fee = make_fee()
    make_invoice(
        operation,
        total_amount="150",
        items=[{"fee_id": fee["id"], "value": "150", "cost_value": "10", "cost_currency": "USD"}],
        dollar_value="5",
    )

    op = client.get(f"/operations/{operation['id']}").json()
    assert _totals(op) == (Decimal("150"), Decimal("50"), Decimal("100"), Decimal("66.67"))


def test_missing_operation_is_noop(db):
    assert recalculate_operation_totals(db, 9999) is None
    assert db.query(Operation).count() == 0


def test_recalculate_returns_and_persists(db, client, make_operation, make_invoice):
    operation = make_operation(status="completed")
    make_invoice(operation, total_amount="80", iof_amount="2.80")

    totals = recalculate_operation_totals(db, operation["id"])
    assert totals.total_selling == Decimal("82.80")

    stored = db.get(Operation, operation["id"])
    assert stored.total_selling == Decimal("82.80")
    assert stored.profit_margin == Decimal("100.00")


def test_cost_far_above_selling(client, make_operation, make_invoice, make_fee):
    operation = make_operation(status="completed")
    fee = make_fee()
    make_invoice(
        operation,
        total_amount="10",
        items=[{"fee_id": fee["id"], "value": "10", "cost_value": "40", "cost_currency": "USD"}],
    )

    op = client.get(f"/operations/{operation['id']}").json()
    assert _totals(op) == (Decimal("10"), Decimal("200"), Decimal("-190"), Decimal("-1900"))
