from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Currency


InvoiceStatus = Literal["pending", "paid", "cancelled"]


class InvoiceItemIn(BaseModel):
    fee_id: int = Field(gt=0)
    value: Decimal = Field(ge=0)
    currency: Currency = "BRL"
    cost_value: Decimal = Field(default=Decimal("0"), ge=0)
    cost_currency: Currency = "BRL"


class InvoiceItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    fee_id: int
    value: Decimal
    currency: Currency
    cost_value: Decimal
    cost_currency: Currency
    created_at: datetime


class InvoiceCreate(BaseModel):
    invoice_number: str = Field(min_length=1, max_length=100)
    operation_id: int = Field(gt=0)
    client_id: int = Field(gt=0)
    dollar_value: Decimal = Field(gt=0)

    # Se não vier, é a soma de venda dos itens convertida para BRL
    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    iof_amount: Decimal = Field(default=Decimal("0"), ge=0)
    # Aceito por compatibilidade com o formulário, mas sempre recalculado no servidor
    final_amount: Optional[Decimal] = None

    due_date: Optional[datetime] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    items: list[InvoiceItemIn] = Field(default_factory=list)


class InvoiceUpdate(BaseModel):
    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=100)
    operation_id: Optional[int] = Field(default=None, gt=0)
    client_id: Optional[int] = Field(default=None, gt=0)
    dollar_value: Optional[Decimal] = Field(default=None, gt=0)
    status: Optional[InvoiceStatus] = None

    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    iof_amount: Optional[Decimal] = Field(default=None, ge=0)
    final_amount: Optional[Decimal] = None

    due_date: Optional[datetime] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    notes: Optional[str] = None

    # None = não mexe nos itens; lista (mesmo vazia) = substitui todos
    items: Optional[list[InvoiceItemIn]] = None


class InvoicePayment(BaseModel):
    payment_date: datetime
    payment_method: Optional[str] = Field(default=None, max_length=50)


class InvoiceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    operation_id: int
    client_id: int
    dollar_value: Decimal
    status: InvoiceStatus
    total_amount: Decimal
    iof_amount: Decimal
    final_amount: Decimal
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class InvoiceDetailOut(InvoiceOut):
    items: list[InvoiceItemOut] = Field(default_factory=list)


class InvoicePreviewIn(BaseModel):
    dollar_value: Decimal = Field(gt=0)
    iof_amount: Decimal = Field(default=Decimal("0"), ge=0)
    items: list[InvoiceItemIn] = Field(default_factory=list)


class InvoicePreviewOut(BaseModel):
    total_selling: Decimal
    total_cost: Decimal
    total_profit: Decimal
    profit_margin: Decimal
    final_amount: Decimal
