# app/models/invoice.py

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

INVOICE_STATUSES = ("pending", "paid", "cancelled")
CURRENCIES = ("USD", "BRL")


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(100), unique=True, index=True, nullable=False)

    operation_id = Column(Integer, ForeignKey("operations.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)

    dollar_value = Column(Numeric(12, 4), nullable=False)  # câmbio congelado desta fatura
    status = Column(
        Enum(*INVOICE_STATUSES, name="invoice_status"),
        nullable=False,
        default="pending",
    )

    total_amount = Column(Numeric(12, 2), nullable=False)
    iof_amount = Column(Numeric(12, 2), nullable=False, default=0)
    final_amount = Column(Numeric(12, 2), nullable=False)  # total_amount + iof_amount

    due_date = Column(DateTime, nullable=True)
    paid_date = Column(DateTime, nullable=True)
    payment_method = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    operation = relationship("Operation", back_populates="invoices")
    items = relationship("InvoiceItem", back_populates="invoice", order_by="InvoiceItem.id")


class InvoiceItem(Base):
    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    fee_id = Column(Integer, ForeignKey("fees.id"), nullable=False)

    # Venda (cobrado do cliente)
    value = Column(Numeric(12, 2), nullable=False)
    currency = Column(Enum(*CURRENCIES, name="currency"), nullable=False, default="BRL")

    # Custo (pago ao fornecedor)
    cost_value = Column(Numeric(12, 2), nullable=False, default=0)
    cost_currency = Column(Enum(*CURRENCIES, name="cost_currency"), nullable=False, default="BRL")

    created_at = Column(DateTime, default=datetime.utcnow)

    invoice = relationship("Invoice", back_populates="items")
    fee = relationship("Fee")
