from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


class ExchangeRateError(RuntimeError):
    pass


async def fetch_usd_brl_rate(
    url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Decimal:
    """Cotação atual USD-BRL (bid), para pré-preencher o câmbio da fatura."""
    url = url or settings.USD_BRL_URL
    try:
        async with httpx.AsyncClient(timeout=10, transport=transport) as client:
            r = await client.get(url)
            r.raise_for_status()
            data = r.json()
        bid = data["USDBRL"]["bid"]  # string tipo "5.2345"
        return Decimal(bid)
    except (httpx.HTTPError, KeyError, TypeError, ValueError, InvalidOperation) as exc:
        logger.exception("Falha ao consultar cotação USD-BRL em %s", url)
        raise ExchangeRateError("Não foi possível obter a cotação do dólar.") from exc
