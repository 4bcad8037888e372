from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.supplier import Supplier
from app.schemas.supplier import SupplierCreate, SupplierUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CNPJ = "Já existe um fornecedor cadastrado com este CNPJ."


def get_supplier_by_cnpj(db: Session, cnpj: str) -> Optional[Supplier]:
    return db.query(Supplier).filter(Supplier.cnpj == cnpj).first()


def create_supplier(db: Session, payload: SupplierCreate) -> Supplier:
    if get_supplier_by_cnpj(db, payload.cnpj):
        raise ConflictError(DUPLICATE_CNPJ)

    supplier = Supplier(**payload.model_dump())
    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    return supplier


def list_suppliers(db: Session) -> list[Supplier]:
    # Só ativos: fornecedor excluído é desativado, não apagado
    return (
        db.query(Supplier)
        .filter(Supplier.is_active.is_(True))
        .order_by(Supplier.created_at.desc(), Supplier.id.desc())
        .all()
    )


def update_supplier(db: Session, supplier_id: int, payload: SupplierUpdate) -> Supplier:
    supplier = db.get(Supplier, supplier_id)
    if supplier is None:
        raise NotFoundError("Fornecedor não encontrado.")

    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k not in ("name", "cnpj", "service_type", "is_active")
    }
    if data.get("cnpj"):
        existing = get_supplier_by_cnpj(db, data["cnpj"])
        if existing and existing.id != supplier_id:
            raise ConflictError(DUPLICATE_CNPJ)

    for field, value in data.items():
        setattr(supplier, field, value)

    db.commit()
    db.refresh(supplier)
    return supplier


def deactivate_supplier(db: Session, supplier_id: int) -> None:
    supplier = db.get(Supplier, supplier_id)
    if supplier is None:
        raise NotFoundError("Fornecedor não encontrado.")

    supplier.is_active = False
    db.commit()
    logger.info("Fornecedor %s desativado", supplier_id)
