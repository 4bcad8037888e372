from sqlalchemy.exc import OperationalError


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_store_unavailable_is_503(client, monkeypatch):
    def boom(db):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr("app.services.clients.list_clients", boom)
    r = client.get("/clients/")
    assert r.status_code == 503
    assert "indisponível" in r.json()["detail"]


def test_routers_are_mounted(app):
    paths = {route.path for route in app.routes}
    for prefix in ("/clients/", "/suppliers/", "/fees/", "/operations/", "/invoices/", "/receipts/"):
        assert prefix in paths
    assert "/reports/summary" in paths
    assert "/exchange/usd-brl" in paths
