# app/schemas/client.py

from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import FormModel, normalize_cnpj


FreightType = Literal["FOB", "EXW"]


class ClientBase(FormModel):
    shipper: str = Field(min_length=1, max_length=255)
    consignee: str = Field(min_length=1, max_length=255)
    cnpj: str

    port_origin: str = Field(min_length=1, max_length=100)
    port_destination: str = Field(min_length=1, max_length=100)

    weight: Optional[Decimal] = None
    notify: Optional[str] = None

    bl: str = Field(min_length=1, max_length=100)
    bl_date: datetime

    invoice_number: Optional[str] = None
    reference_number: str = Field(min_length=1, max_length=100)
    birth_date: Optional[datetime] = None
    freight_type: FreightType

    contact_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(default=None, max_length=2)
    zip_code: Optional[str] = Field(default=None, max_length=10)
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    @field_validator("cnpj", mode="before")
    @classmethod
    def _cnpj(cls, value):
        return normalize_cnpj(value)


class ClientUpdate(FormModel):
    shipper: Optional[str] = Field(default=None, min_length=1, max_length=255)
    consignee: Optional[str] = Field(default=None, min_length=1, max_length=255)
    cnpj: Optional[str] = None
    port_origin: Optional[str] = None
    port_destination: Optional[str] = None
    weight: Optional[Decimal] = None
    notify: Optional[str] = None
    bl: Optional[str] = None
    bl_date: Optional[datetime] = None
    invoice_number: Optional[str] = None
    reference_number: Optional[str] = None
    birth_date: Optional[datetime] = None
    freight_type: Optional[FreightType] = None
    contact_name: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(default=None, max_length=2)
    zip_code: Optional[str] = Field(default=None, max_length=10)
    notes: Optional[str] = None

    @field_validator("cnpj", mode="before")
    @classmethod
    def _cnpj(cls, value):
        return normalize_cnpj(value)


class ClientOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    shipper: str
    consignee: str
    cnpj: str
    port_origin: Optional[str] = None
    port_destination: Optional[str] = None
    port_route: str = ""
    weight: Optional[Decimal] = None
    notify: Optional[str] = None
    bl: str
    bl_date: datetime
    invoice_number: Optional[str] = None
    reference_number: str
    birth_date: Optional[datetime] = None
    freight_type: FreightType
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
