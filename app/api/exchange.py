from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

from app.schemas.report import ExchangeRateOut
from app.services.exchange import ExchangeRateError, fetch_usd_brl_rate

router = APIRouter(prefix="/exchange", tags=["exchange"])


@router.get("/usd-brl", response_model=ExchangeRateOut)
async def get_usd_brl(request: Request) -> ExchangeRateOut:
    try:
        rate = await fetch_usd_brl_rate(url=request.app.state.settings.USD_BRL_URL)
    except ExchangeRateError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return ExchangeRateOut(rate=rate)
