from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReceiptCreate(BaseModel):
    receipt_number: str = Field(min_length=1, max_length=100)
    invoice_id: int = Field(gt=0)
    # Se omitidos, herdados da fatura
    operation_id: Optional[int] = Field(default=None, gt=0)
    client_id: Optional[int] = Field(default=None, gt=0)
    amount: Decimal = Field(gt=0)
    payment_date: datetime
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None


class ReceiptUpdate(BaseModel):
    receipt_number: Optional[str] = Field(default=None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(default=None, gt=0)
    payment_date: Optional[datetime] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None


class ReceiptOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    receipt_number: str
    invoice_id: int
    operation_id: int
    client_id: int
    amount: Decimal
    payment_date: datetime
    payment_method: Optional[str]
    notes: Optional[str]
    created_at: datetime
    updated_at: datetime
