import asyncio
from decimal import Decimal

import httpx
import pytest

from app.services.exchange import ExchangeRateError, fetch_usd_brl_rate

URL = "https://cotacao.test/json/last/USD-BRL"


def _fetch(handler):
    return asyncio.run(fetch_usd_brl_rate(url=URL, transport=httpx.MockTransport(handler)))


def test_reads_bid():
    def handler(request):
        assert str(request.url) == URL
        return httpx.Response(200, json={"USDBRL": {"code": "USD", "bid": "5.4321", "ask": "5.4400"}})

    assert _fetch(handler) == Decimal("5.4321")


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"message": "erro"}),
        httpx.Response(200, json={"message": "moeda não encontrada"}),
        httpx.Response(200, json={"USDBRL": {"bid": "abc"}}),
    ],
)
def test_bad_responses_raise(response):
    with pytest.raises(ExchangeRateError):
        _fetch(lambda request: response)


def test_network_error_raises():
    def handler(request):
        raise httpx.ConnectError("sem rede", request=request)

    with pytest.raises(ExchangeRateError):
        _fetch(handler)


def test_route_returns_rate(client, monkeypatch):
    async def fake(url=None, transport=None):
        return Decimal("5.10")

    monkeypatch.setattr("app.api.exchange.fetch_usd_brl_rate", fake)
    body = client.get("/exchange/usd-brl").json()
    assert body["pair"] == "USD-BRL"
    assert Decimal(body["rate"]) == Decimal("5.10")


def test_route_maps_failure_to_502(client, monkeypatch):
    async def fake(url=None, transport=None):
        raise ExchangeRateError("Não foi possível obter a cotação do dólar.")

    monkeypatch.setattr("app.api.exchange.fetch_usd_brl_rate", fake)
    r = client.get("/exchange/usd-brl")
    assert r.status_code == 502
