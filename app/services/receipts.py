from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.client import Client
from app.models.invoice import Invoice
from app.models.operation import Operation
from app.models.receipt import Receipt
from app.schemas.receipt import ReceiptCreate, ReceiptUpdate


def get_receipt_by_number(db: Session, receipt_number: str) -> Optional[Receipt]:
    return db.query(Receipt).filter(Receipt.receipt_number == receipt_number).first()


def create_receipt(db: Session, payload: ReceiptCreate) -> Receipt:
    if get_receipt_by_number(db, payload.receipt_number):
        raise ConflictError(f'Já existe um recibo com o número "{payload.receipt_number}".')

    invoice = db.get(Invoice, payload.invoice_id)
    if invoice is None:
        raise NotFoundError("Fatura não encontrada.")

    if payload.operation_id is not None:
        if db.get(Operation, payload.operation_id) is None:
            raise NotFoundError("Operação não encontrada.")
        if payload.operation_id != invoice.operation_id:
            raise ConflictError("A fatura não pertence à operação informada.")
    if payload.client_id is not None and db.get(Client, payload.client_id) is None:
        raise NotFoundError("Cliente não encontrado.")

    data = payload.model_dump()
    data["operation_id"] = payload.operation_id or invoice.operation_id
    data["client_id"] = payload.client_id or invoice.client_id

    receipt = Receipt(**data)
    db.add(receipt)
    db.commit()
    db.refresh(receipt)
    return receipt


def list_receipts(db: Session, invoice_id: Optional[int] = None) -> list[Receipt]:
    query = db.query(Receipt)
    if invoice_id is not None:
        query = query.filter(Receipt.invoice_id == invoice_id)
    return query.order_by(Receipt.created_at.desc(), Receipt.id.desc()).all()


def update_receipt(db: Session, receipt_id: int, payload: ReceiptUpdate) -> Receipt:
    receipt = db.get(Receipt, receipt_id)
    if receipt is None:
        raise NotFoundError("Recibo não encontrado.")

    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k in ("payment_method", "notes")}
    number = data.get("receipt_number")
    if number:
        existing = get_receipt_by_number(db, number)
        if existing and existing.id != receipt_id:
            raise ConflictError(f'Já existe um recibo com o número "{number}".')

    for field, value in data.items():
        setattr(receipt, field, value)

    db.commit()
    db.refresh(receipt)
    return receipt


def delete_receipt(db: Session, receipt_id: int) -> None:
    receipt = db.get(Receipt, receipt_id)
    if receipt is None:
        raise NotFoundError("Recibo não encontrado.")
    db.delete(receipt)
    db.commit()
