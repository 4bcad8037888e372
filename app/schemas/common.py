from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, field_validator


Currency = Literal["USD", "BRL"]


def normalize_cnpj(value: Any) -> Any:
    """Remove pontuação e exige 14 dígitos. Vazio vira None."""
    if value is None:
        return value
    if isinstance(value, str) and not value.strip():
        return None
    digits = re.sub(r"\D", "", str(value))
    if len(digits) != 14:
        raise ValueError("O CNPJ deve ter 14 dígitos")
    return digits


def format_cnpj(cnpj: str | None) -> str:
    if not cnpj:
        return "N/A"
    digits = re.sub(r"\D", "", cnpj)
    if len(digits) != 14:
        return cnpj
    return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"


class FormModel(BaseModel):
    """Base dos formulários: string vazia vira None."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value
