# app/models/operation.py

from datetime import datetime
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    Numeric,
    Enum,
    ForeignKey,
)
from sqlalchemy.orm import relationship
from app.core.database import Base

OPERATION_STATUSES = ("pending", "in_progress", "completed", "cancelled")


class Operation(Base):
    __tablename__ = "operations"

    id = Column(Integer, primary_key=True, index=True)
    reference_number = Column(String(100), unique=True, index=True, nullable=False)

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id"), nullable=False, index=True)

    status = Column(
        Enum(*OPERATION_STATUSES, name="operation_status"),
        nullable=False,
        default="pending",
    )

    # Totais derivados das faturas (recalculados em services/totals.py, nunca editados à mão)
    total_cost = Column(Numeric(12, 2), nullable=False, default=0)
    total_selling = Column(Numeric(12, 2), nullable=False, default=0)
    total_profit = Column(Numeric(12, 2), nullable=False, default=0)
    profit_margin = Column(Numeric(12, 2), nullable=False, default=0)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    client = relationship("Client", back_populates="operations")
    supplier = relationship("Supplier", back_populates="operations")
    invoices = relationship("Invoice", back_populates="operation")
