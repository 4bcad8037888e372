"""
Composição de faturas: cabeçalho + itens, com o valor final sempre
calculado no servidor. Toda mudança dispara o recálculo da operação.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.client import Client
from app.models.fee import Fee
from app.models.invoice import Invoice, InvoiceItem
from app.models.operation import Operation
from app.models.receipt import Receipt
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceItemIn,
    InvoicePreviewIn,
    InvoicePreviewOut,
    InvoiceUpdate,
)
from app.services.totals import (
    OperationTotals,
    invoice_subtotals,
    raw_subtotals,
    recalculate_operation_totals,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def final_amount_for(total_amount: Optional[Decimal], iof_amount: Optional[Decimal]) -> Decimal:
    return (total_amount or ZERO) + (iof_amount or ZERO)


def get_invoice_by_number(db: Session, invoice_number: str) -> Optional[Invoice]:
    return db.query(Invoice).filter(Invoice.invoice_number == invoice_number).first()


def _duplicate_number(invoice_number: str) -> ConflictError:
    return ConflictError(f'Já existe uma fatura com o número "{invoice_number}".')


def _ensure_fees(db: Session, items: Iterable[InvoiceItemIn]) -> None:
    fee_ids = {item.fee_id for item in items}
    if not fee_ids:
        return
    found = {row.id for row in db.query(Fee.id).filter(Fee.id.in_(fee_ids))}
    missing = sorted(fee_ids - found)
    if missing:
        raise NotFoundError(f"Taxa(s) não encontrada(s): {', '.join(str(i) for i in missing)}.")


def _add_items(db: Session, invoice_id: int, items: Iterable[InvoiceItemIn]) -> None:
    for item in items:
        db.add(
            InvoiceItem(
                invoice_id=invoice_id,
                fee_id=item.fee_id,
                value=item.value,
                currency=item.currency,
                cost_value=item.cost_value,
                cost_currency=item.cost_currency,
            )
        )


def create_invoice(db: Session, payload: InvoiceCreate) -> Invoice:
    if get_invoice_by_number(db, payload.invoice_number):
        raise _duplicate_number(payload.invoice_number)

    if db.get(Operation, payload.operation_id) is None:
        raise NotFoundError("Operação não encontrada.")
    if db.get(Client, payload.client_id) is None:
        raise NotFoundError("Cliente não encontrado.")
    _ensure_fees(db, payload.items)

    total_amount = payload.total_amount
    if total_amount is None:
        total_amount, _ = invoice_subtotals(payload.items, payload.dollar_value)
    iof_amount = payload.iof_amount or ZERO

    invoice = Invoice(
        invoice_number=payload.invoice_number,
        operation_id=payload.operation_id,
        client_id=payload.client_id,
        dollar_value=payload.dollar_value,
        total_amount=total_amount,
        iof_amount=iof_amount,
        # o final_amount enviado pelo cliente é ignorado
        final_amount=final_amount_for(total_amount, iof_amount),
        due_date=payload.due_date,
        payment_method=payload.payment_method,
        notes=payload.notes,
    )
    db.add(invoice)
    db.commit()
    db.refresh(invoice)

    if payload.items:
        _add_items(db, invoice.id, payload.items)
        db.commit()

    logger.info(
        "Fatura %s criada na operação %s (final=%s, %s item(ns))",
        invoice.invoice_number,
        invoice.operation_id,
        invoice.final_amount,
        len(payload.items),
    )

    recalculate_operation_totals(db, invoice.operation_id)
    db.refresh(invoice)
    return invoice


def list_invoices(
    db: Session,
    client_id: Optional[int] = None,
    operation_id: Optional[int] = None,
) -> list[Invoice]:
    query = db.query(Invoice)
    if client_id is not None:
        query = query.filter(Invoice.client_id == client_id)
    if operation_id is not None:
        query = query.filter(Invoice.operation_id == operation_id)
    return query.order_by(Invoice.created_at.desc(), Invoice.id.desc()).all()


def list_items(db: Session, invoice_id: int) -> list[InvoiceItem]:
    return (
        db.query(InvoiceItem)
        .filter(InvoiceItem.invoice_id == invoice_id)
        .order_by(InvoiceItem.id)
        .all()
    )


def update_invoice(db: Session, invoice_id: int, payload: InvoiceUpdate) -> Invoice:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        raise NotFoundError("Fatura não encontrada.")

    data = payload.model_dump(exclude_unset=True, exclude={"items", "final_amount"})
    data = {k: v for k, v in data.items() if v is not None or k in ("due_date", "payment_method", "notes")}

    invoice_number = data.get("invoice_number")
    if invoice_number:
        existing = get_invoice_by_number(db, invoice_number)
        if existing and existing.id != invoice_id:
            raise _duplicate_number(invoice_number)

    if "operation_id" in data and db.get(Operation, data["operation_id"]) is None:
        raise NotFoundError("Operação não encontrada.")
    if "client_id" in data and db.get(Client, data["client_id"]) is None:
        raise NotFoundError("Cliente não encontrado.")
    if payload.items is not None:
        _ensure_fees(db, payload.items)

    previous_operation_id = invoice.operation_id

    for field, value in data.items():
        setattr(invoice, field, value)

    # Sempre recalculado no servidor, com os valores já mesclados
    invoice.final_amount = final_amount_for(invoice.total_amount, invoice.iof_amount)
    db.commit()

    if payload.items is not None:
        # Substituição completa: apaga todos os itens e insere a nova lista
        removed = (
            db.query(InvoiceItem)
            .filter(InvoiceItem.invoice_id == invoice_id)
            .delete(synchronize_session=False)
        )
        _add_items(db, invoice_id, payload.items)
        db.commit()
        logger.info(
            "Itens da fatura %s substituídos: %s removido(s), %s inserido(s)",
            invoice.invoice_number,
            removed,
            len(payload.items),
        )

    recalculate_operation_totals(db, invoice.operation_id)
    if previous_operation_id != invoice.operation_id:
        recalculate_operation_totals(db, previous_operation_id)

    db.refresh(invoice)
    return invoice


def delete_invoice(db: Session, invoice_id: int) -> None:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        raise NotFoundError("Fatura não encontrada.")

    operation_id = invoice.operation_id

    db.query(Receipt).filter(Receipt.invoice_id == invoice_id).delete(synchronize_session=False)
    db.query(InvoiceItem).filter(InvoiceItem.invoice_id == invoice_id).delete(synchronize_session=False)
    db.delete(invoice)
    db.commit()
    logger.info("Fatura %s excluída", invoice_id)

    recalculate_operation_totals(db, operation_id)


def add_item(db: Session, invoice_id: int, payload: InvoiceItemIn) -> InvoiceItem:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        raise NotFoundError("Fatura não encontrada.")
    _ensure_fees(db, [payload])

    item = InvoiceItem(invoice_id=invoice_id, **payload.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)

    recalculate_operation_totals(db, invoice.operation_id)
    return item


def remove_item(db: Session, item_id: int) -> None:
    item = db.get(InvoiceItem, item_id)
    if item is None:
        raise NotFoundError("Item de fatura não encontrado.")

    operation_id = item.invoice.operation_id
    db.delete(item)
    db.commit()

    recalculate_operation_totals(db, operation_id)


def mark_invoice_paid(
    db: Session,
    invoice_id: int,
    payment_date: datetime,
    payment_method: Optional[str] = None,
) -> Invoice:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        raise NotFoundError("Fatura não encontrada.")

    invoice.status = "paid"
    invoice.paid_date = payment_date
    invoice.payment_method = payment_method
    db.commit()
    db.refresh(invoice)
    return invoice


def preview_totals(payload: InvoicePreviewIn) -> InvoicePreviewOut:
    """Totais de uma fatura ainda não gravada (usado pelo formulário)."""
    selling, cost = raw_subtotals(payload.items, payload.dollar_value)
    totals = OperationTotals.from_amounts(selling, cost)
    return InvoicePreviewOut(
        total_selling=totals.total_selling,
        total_cost=totals.total_cost,
        total_profit=totals.total_profit,
        profit_margin=totals.profit_margin,
        final_amount=final_amount_for(totals.total_selling, payload.iof_amount),
    )
