from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.client import Client
from app.models.operation import Operation
from app.schemas.client import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

# Campos NOT NULL: None no update significa "não alterar"
REQUIRED_FIELDS = {"shipper", "consignee", "cnpj", "bl", "bl_date", "reference_number", "freight_type"}


def get_client_by_cnpj(db: Session, cnpj: str) -> Optional[Client]:
    return db.query(Client).filter(Client.cnpj == cnpj).first()


def get_client_by_reference(db: Session, reference_number: str) -> Optional[Client]:
    return db.query(Client).filter(Client.reference_number == reference_number).first()


def _check_unique(db: Session, cnpj: Optional[str], reference_number: Optional[str], client_id: Optional[int] = None) -> None:
    if cnpj:
        existing = get_client_by_cnpj(db, cnpj)
        if existing and existing.id != client_id:
            raise ConflictError("Já existe um cliente cadastrado com este CNPJ.")

    if reference_number:
        existing = get_client_by_reference(db, reference_number)
        if existing and existing.id != client_id:
            raise ConflictError(
                f'Já existe um cliente cadastrado com o número de referência "{reference_number}".'
            )


def create_client(db: Session, payload: ClientCreate) -> Client:
    _check_unique(db, payload.cnpj, payload.reference_number)

    client = Client(**payload.model_dump())
    db.add(client)
    db.commit()
    db.refresh(client)

    logger.info("Cliente %s criado (ref %s)", client.id, client.reference_number)
    return client


def list_clients(db: Session) -> list[Client]:
    return db.query(Client).order_by(Client.created_at.desc(), Client.id.desc()).all()


def update_client(db: Session, client_id: int, payload: ClientUpdate) -> Client:
    client = db.get(Client, client_id)
    if client is None:
        raise NotFoundError("Cliente não encontrado.")

    data = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True).items()
        if v is not None or k not in REQUIRED_FIELDS
    }
    _check_unique(db, data.get("cnpj"), data.get("reference_number"), client_id=client_id)

    for field, value in data.items():
        setattr(client, field, value)

    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client_id: int) -> None:
    client = db.get(Client, client_id)
    if client is None:
        raise NotFoundError("Cliente não encontrado.")

    has_operations = db.query(Operation.id).filter(Operation.client_id == client_id).first()
    if has_operations:
        raise ConflictError("Cliente possui operações cadastradas e não pode ser excluído.")

    db.delete(client)
    db.commit()
    logger.info("Cliente %s excluído", client_id)
