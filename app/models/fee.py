# app/models/fee.py

from datetime import datetime
from sqlalchemy import Boolean, Column, Integer, String, Text, DateTime
from app.core.database import Base


class Fee(Base):
    """
    Catálogo de taxas (Ocean Freight, Handling, TRS...).
    Não guarda valor: o valor é definido em cada item de fatura.
    """
    __tablename__ = "fees"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
