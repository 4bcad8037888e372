from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.client import Client
from app.models.invoice import Invoice, InvoiceItem
from app.models.operation import Operation
from app.models.receipt import Receipt
from app.models.supplier import Supplier
from app.schemas.operation import OperationCreate, OperationUpdate
from app.services.totals import recalculate_operation_totals

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    "pending": "Pendente",
    "in_progress": "Em Progresso",
    "completed": "Concluída",
    "cancelled": "Cancelada",
}

# Status da operação -> status que as faturas passam a ter.
# "cancelled" não mexe nas faturas.
INVOICE_STATUS_FOR = {
    "completed": "paid",
    "pending": "pending",
    "in_progress": "pending",
}


def get_operation_by_reference(db: Session, reference_number: str) -> Optional[Operation]:
    return db.query(Operation).filter(Operation.reference_number == reference_number).first()


def _ensure_parties(db: Session, client_id: Optional[int], supplier_id: Optional[int]) -> None:
    if client_id is not None and db.get(Client, client_id) is None:
        raise NotFoundError("Cliente não encontrado.")
    if supplier_id is not None and db.get(Supplier, supplier_id) is None:
        raise NotFoundError("Fornecedor não encontrado.")


def create_operation(db: Session, payload: OperationCreate) -> Operation:
    if get_operation_by_reference(db, payload.reference_number):
        raise ConflictError(
            f'Já existe uma operação com o número de referência "{payload.reference_number}".'
        )
    _ensure_parties(db, payload.client_id, payload.supplier_id)

    operation = Operation(**payload.model_dump())
    db.add(operation)
    db.commit()
    db.refresh(operation)

    logger.info(
        "Nova operação de desembaraço %s para o cliente %s",
        operation.reference_number,
        operation.client.consignee,
    )
    return operation


def list_operations(db: Session, client_id: Optional[int] = None) -> list[Operation]:
    query = db.query(Operation)
    if client_id is not None:
        query = query.filter(Operation.client_id == client_id)
    return query.order_by(Operation.created_at.desc(), Operation.id.desc()).all()


def sync_invoice_status(db: Session, operation_id: int, operation_status: str) -> int:
    """Alinha o status de todas as faturas ao status da operação."""
    invoice_status = INVOICE_STATUS_FOR.get(operation_status)
    if invoice_status is None:
        return 0

    count = (
        db.query(Invoice)
        .filter(Invoice.operation_id == operation_id)
        .update({Invoice.status: invoice_status}, synchronize_session=False)
    )
    db.commit()
    return count


def update_operation(db: Session, operation_id: int, payload: OperationUpdate) -> Operation:
    operation = db.get(Operation, operation_id)
    if operation is None:
        raise NotFoundError("Operação não encontrada.")

    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "notes"}

    reference_number = data.get("reference_number")
    if reference_number:
        existing = get_operation_by_reference(db, reference_number)
        if existing and existing.id != operation_id:
            raise ConflictError(
                f'Já existe uma operação com o número de referência "{reference_number}".'
            )
    _ensure_parties(db, data.get("client_id"), data.get("supplier_id"))

    previous_status = operation.status
    for field, value in data.items():
        setattr(operation, field, value)
    db.commit()

    new_status = data.get("status")
    if new_status and new_status != previous_status:
        logger.info(
            "Operação %s atualizada para: %s",
            operation.reference_number,
            STATUS_LABELS[new_status],
        )

    # Transições não são restritas: qualquer status pode ir para qualquer outro
    if new_status:
        synced = sync_invoice_status(db, operation_id, new_status)
        logger.debug("%s fatura(s) da operação %s sincronizada(s)", synced, operation_id)

    recalculate_operation_totals(db, operation_id)

    db.refresh(operation)
    return operation


def delete_operation(db: Session, operation_id: int) -> None:
    operation = db.get(Operation, operation_id)
    if operation is None:
        raise NotFoundError("Operação não encontrada.")

    invoice_ids = [row.id for row in db.query(Invoice.id).filter(Invoice.operation_id == operation_id)]

    # 1) Apagar antes o que depende da operação
    db.query(Receipt).filter(Receipt.operation_id == operation_id).delete(synchronize_session=False)
    if invoice_ids:
        db.query(InvoiceItem).filter(InvoiceItem.invoice_id.in_(invoice_ids)).delete(
            synchronize_session=False
        )
        db.query(Invoice).filter(Invoice.id.in_(invoice_ids)).delete(synchronize_session=False)

    # 2) Agora apagar a operação
    db.delete(operation)
    db.commit()

    logger.info("Operação %s excluída com %s fatura(s)", operation_id, len(invoice_ids))
