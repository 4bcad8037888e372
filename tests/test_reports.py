from decimal import Decimal


def test_summary_counts_only_completed_profit(client, make_operation, make_invoice, make_fee):
    fee = make_fee()
    done = make_operation(status="completed")
    make_invoice(
        done,
        total_amount="200",
        items=[{"fee_id": fee["id"], "value": "200", "cost_value": "10", "cost_currency": "USD"}],
    )
    open_op = make_operation(status="in_progress")
    make_invoice(open_op, total_amount="1000")

    body = client.get("/reports/summary").json()
    assert body["total_operations"] == 2
    assert body["completed_operations"] == 1
    assert Decimal(body["total_selling"]) == Decimal("200")
    assert Decimal(body["total_cost"]) == Decimal("50")
    assert Decimal(body["total_profit"]) == Decimal("150")
    assert Decimal(body["average_margin"]) == Decimal("75")


def test_summary_empty(client):
    body = client.get("/reports/summary").json()
    assert body["total_operations"] == 0
    assert Decimal(body["average_margin"]) == 0


def test_profit_by_operation(client, make_operation, make_invoice):
    operation = make_operation(status="completed")
    make_invoice(operation, total_amount="100")

    body = client.get(f"/reports/profit/operation/{operation['id']}").json()
    assert Decimal(body["total_selling"]) == Decimal("100")
    assert client.get("/reports/profit/operation/999").json() is None


def test_profit_by_period(client, make_operation, make_invoice):
    operation = make_operation(status="completed")
    make_invoice(operation, total_amount="100")

    r = client.get("/reports/profit/period", params={"start": "2000-01-01T00:00:00", "end": "2100-01-01T00:00:00"})
    assert r.status_code == 200
    body = r.json()
    assert [op["id"] for op in body["operations"]] == [operation["id"]]
    assert Decimal(body["total_selling"]) == Decimal("100")
    assert Decimal(body["profit_margin"]) == Decimal("100")

    r = client.get("/reports/profit/period", params={"start": "2000-01-01T00:00:00", "end": "2000-12-31T00:00:00"})
    assert r.json()["operations"] == []


def test_period_end_before_start(client):
    r = client.get("/reports/profit/period", params={"start": "2026-02-01T00:00:00", "end": "2026-01-01T00:00:00"})
    assert r.status_code == 422


def test_profit_by_client(client, make_client, make_operation, make_invoice, make_fee):
    fee = make_fee()
    c = make_client()
    first = make_operation(status="completed", client_id=c["id"])
    second = make_operation(status="completed", client_id=c["id"])
    make_invoice(first, total_amount="100", items=[{"fee_id": fee["id"], "value": "100", "cost_value": "60"}])
    make_invoice(second, total_amount="300", items=[{"fee_id": fee["id"], "value": "300", "cost_value": "140"}])
    make_invoice(make_operation(status="completed"), total_amount="999")

    body = client.get(f"/reports/profit/client/{c['id']}").json()
    assert len(body["operations"]) == 2
    assert Decimal(body["total_selling"]) == Decimal("400")
    assert Decimal(body["total_cost"]) == Decimal("200")
    assert Decimal(body["total_profit"]) == Decimal("200")
    assert Decimal(body["profit_margin"]) == Decimal("50")
