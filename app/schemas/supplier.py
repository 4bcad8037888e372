# app/schemas/supplier.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import FormModel, normalize_cnpj


class SupplierBase(FormModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    cnpj: Optional[str] = None
    service_type: Optional[str] = Field(default=None, min_length=1, max_length=100)

    contact_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(default=None, max_length=2)
    zip_code: Optional[str] = Field(default=None, max_length=10)

    bank_name: Optional[str] = None
    bank_agency: Optional[str] = None
    bank_account: Optional[str] = None

    notes: Optional[str] = None

    @field_validator("cnpj", mode="before")
    @classmethod
    def _cnpj(cls, value):
        return normalize_cnpj(value)


class SupplierCreate(SupplierBase):
    name: str = Field(min_length=1, max_length=255)
    cnpj: str
    service_type: str = Field(min_length=1, max_length=100)


class SupplierUpdate(SupplierBase):
    is_active: Optional[bool] = None


class SupplierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    cnpj: str
    service_type: str
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    bank_name: Optional[str] = None
    bank_agency: Optional[str] = None
    bank_account: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
