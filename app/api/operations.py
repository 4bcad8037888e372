# app/api/operations.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.operation import Operation
from app.schemas.operation import OperationCreate, OperationOut, OperationUpdate
from app.services import operations as service


router = APIRouter(prefix="/operations", tags=["operations"])


@router.get("/", response_model=List[OperationOut])
def list_operations(db: Session = Depends(get_db)):
    return service.list_operations(db)


@router.get("/by-client/{client_id}", response_model=List[OperationOut])
def list_operations_by_client(client_id: int, db: Session = Depends(get_db)):
    return service.list_operations(db, client_id=client_id)


@router.post("/", response_model=OperationOut, status_code=status.HTTP_201_CREATED)
def create_operation(payload: OperationCreate, db: Session = Depends(get_db)):
    return service.create_operation(db, payload)


@router.get("/{operation_id}", response_model=OperationOut | None)
def get_operation(operation_id: int, db: Session = Depends(get_db)):
    return db.get(Operation, operation_id)


@router.put("/{operation_id}", response_model=OperationOut)
def update_operation(operation_id: int, payload: OperationUpdate, db: Session = Depends(get_db)):
    """
    Atualiza a operação. Mudança de status sincroniza o status das faturas
    (concluída -> pagas; pendente/em progresso -> pendentes) e recalcula os totais.
    """
    return service.update_operation(db, operation_id, payload)


@router.delete("/{operation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_operation(operation_id: int, db: Session = Depends(get_db)):
    service.delete_operation(db, operation_id)
    return None
