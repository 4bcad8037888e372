from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from app.schemas.operation import OperationOut


class ProfitSummaryOut(BaseModel):
    total_operations: int
    completed_operations: int
    total_cost: Decimal
    total_selling: Decimal
    total_profit: Decimal
    average_margin: Decimal


class ExchangeRateOut(BaseModel):
    pair: str = "USD-BRL"
    rate: Decimal


class ProfitReportOut(BaseModel):
    operations: list[OperationOut]
    total_cost: Decimal
    total_selling: Decimal
    total_profit: Decimal
    profit_margin: Decimal
