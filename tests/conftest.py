from __future__ import annotations

import itertools

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from main import create_app

_seq = itertools.count(1)


def _cnpj(n: int) -> str:
    return f"{n:014d}"


@pytest.fixture
def app():
    settings = Settings(database_url="sqlite://", cors_origins=[], log_level="WARNING")
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client):
    session = client.app.state.database.session()
    yield session
    session.close()


@pytest.fixture
def make_client(client):
    def _make(**overrides) -> dict:
        n = next(_seq)
        payload = {
            "shipper": "Ningbo Trading Co.",
            "consignee": f"Importadora {n} Ltda",
            "cnpj": _cnpj(n),
            "port_origin": "Ningbo",
            "port_destination": "Santos",
            "bl": f"BL{n:05d}",
            "bl_date": "2026-09-01T00:00:00",
            "reference_number": f"CLI-{n}",
            "freight_type": "FOB",
        }
        payload.update(overrides)
        r = client.post("/clients/", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_supplier(client):
    def _make(**overrides) -> dict:
        n = next(_seq)
        payload = {
            "name": f"Despachante {n}",
            "cnpj": _cnpj(10_000 + n),
            "service_type": "Despacho aduaneiro",
        }
        payload.update(overrides)
        r = client.post("/suppliers/", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_fee(client):
    def _make(name: str = "Ocean Freight") -> dict:
        r = client.post("/fees/", json={"name": name})
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_operation(client, make_client, make_supplier):
    def _make(status: str = "pending", client_id: int | None = None) -> dict:
        n = next(_seq)
        payload = {
            "reference_number": f"OP-{n}",
            "client_id": client_id or make_client()["id"],
            "supplier_id": make_supplier()["id"],
            "status": status,
        }
        r = client.post("/operations/", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_invoice(client, make_fee):
    def _make(operation: dict, items: list | None = None, **overrides) -> dict:
        n = next(_seq)
        if items is None:
            fee = make_fee()
            items = [{"fee_id": fee["id"], "value": "100", "currency": "BRL"}]
        payload = {
            "invoice_number": f"FAT-{n}",
            "operation_id": operation["id"],
            "client_id": operation["client_id"],
            "dollar_value": "5.0",
            "total_amount": "100",
            "iof_amount": "0",
            "items": items,
        }
        payload.update(overrides)
        r = client.post("/invoices/", json=payload)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
