from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


OperationStatus = Literal["pending", "in_progress", "completed", "cancelled"]


class OperationCreate(BaseModel):
    reference_number: str = Field(min_length=1, max_length=100)
    client_id: int = Field(gt=0)
    supplier_id: int = Field(gt=0)
    status: OperationStatus = "pending"
    notes: Optional[str] = None


class OperationUpdate(BaseModel):
    reference_number: Optional[str] = Field(default=None, min_length=1, max_length=100)
    client_id: Optional[int] = Field(default=None, gt=0)
    supplier_id: Optional[int] = Field(default=None, gt=0)
    status: Optional[OperationStatus] = None
    notes: Optional[str] = None


class OperationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reference_number: str
    client_id: int
    supplier_id: int
    status: OperationStatus

    # Totais derivados (somente leitura)
    total_cost: Decimal
    total_selling: Decimal
    total_profit: Decimal
    profit_margin: Decimal

    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
