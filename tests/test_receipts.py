import pytest

from app.models.receipt import Receipt


@pytest.fixture
def invoice(make_operation, make_invoice):
    return make_invoice(make_operation())


def _receipt(client, invoice, number="REC-1", **overrides):
    payload = {
        "receipt_number": number,
        "invoice_id": invoice["id"],
        "amount": "100.00",
        "payment_date": "2026-10-05T00:00:00",
        "payment_method": "TED",
    }
    payload.update(overrides)
    return client.post("/receipts/", json=payload)


def test_receipt_inherits_operation_and_client(client, invoice):
    r = _receipt(client, invoice)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["operation_id"] == invoice["operation_id"]
    assert body["client_id"] == invoice["client_id"]


def test_duplicate_receipt_number(client, invoice):
    _receipt(client, invoice)
    r = _receipt(client, invoice)
    assert r.status_code == 409


def test_receipt_for_missing_invoice(client):
    r = client.post(
        "/receipts/",
        json={
            "receipt_number": "REC-X",
            "invoice_id": 999,
            "amount": "10",
            "payment_date": "2026-10-05T00:00:00",
        },
    )
    assert r.status_code == 404


def test_amount_must_be_positive(client, invoice):
    assert _receipt(client, invoice, amount="0").status_code == 422


def test_update_and_delete(client, invoice):
    receipt = _receipt(client, invoice).json()

    r = client.put(f"/receipts/{receipt['id']}", json={"amount": "55.10", "notes": "Parcial"})
    assert r.status_code == 200
    assert r.json()["amount"] in ("55.10", "55.1")
    assert r.json()["notes"] == "Parcial"

    assert client.delete(f"/receipts/{receipt['id']}").status_code == 204
    assert client.get(f"/receipts/{receipt['id']}").json() is None
    assert client.delete(f"/receipts/{receipt['id']}").status_code == 404


def test_list_by_invoice(client, make_operation, make_invoice):
    operation = make_operation()
    first = make_invoice(operation)
    second = make_invoice(operation)
    _receipt(client, first, "REC-A")
    _receipt(client, first, "REC-B")
    _receipt(client, second, "REC-C")

    assert len(client.get("/receipts/").json()) == 3
    numbers = {r["receipt_number"] for r in client.get(f"/receipts/by-invoice/{first['id']}").json()}
    assert numbers == {"REC-A", "REC-B"}


def test_deleting_invoice_removes_its_receipts(client, invoice):
    receipt = _receipt(client, invoice).json()

    assert client.delete(f"/invoices/{invoice['id']}").status_code == 204
    assert client.get(f"/receipts/{receipt['id']}").json() is None


def test_unknown_operation_or_client_is_rejected(client, db, invoice):
    assert _receipt(client, invoice, operation_id=9999).status_code == 404
    assert _receipt(client, invoice, client_id=8888).status_code == 404
    assert db.query(Receipt).count() == 0


def test_operation_must_match_invoice(client, invoice, make_operation):
    other = make_operation()
    r = _receipt(client, invoice, operation_id=other["id"])
    assert r.status_code == 409


def test_explicit_matching_references(client, invoice):
    r = _receipt(client, invoice, operation_id=invoice["operation_id"], client_id=invoice["client_id"])
    assert r.status_code == 201
    assert r.json()["operation_id"] == invoice["operation_id"]
