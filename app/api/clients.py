# app/api/clients.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.client import Client
from app.schemas.client import ClientCreate, ClientOut, ClientUpdate
from app.services import clients as service


router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("/", response_model=List[ClientOut])
def list_clients(db: Session = Depends(get_db)):
    """
    Lista os clientes, mais recentes primeiro.
    """
    return service.list_clients(db)


@router.post("/", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(payload: ClientCreate, db: Session = Depends(get_db)):
    """
    Cria um cliente. CNPJ e número de referência são únicos (409 se repetidos).
    """
    return service.create_client(db, payload)


@router.get("/{client_id}", response_model=ClientOut | None)
def get_client(client_id: int, db: Session = Depends(get_db)):
    return db.get(Client, client_id)


@router.put("/{client_id}", response_model=ClientOut)
def update_client(client_id: int, payload: ClientUpdate, db: Session = Depends(get_db)):
    return service.update_client(db, client_id, payload)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(client_id: int, db: Session = Depends(get_db)):
    service.delete_client(db, client_id)
    return None
