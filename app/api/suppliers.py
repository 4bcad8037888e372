# app/api/suppliers.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.supplier import Supplier
from app.schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate
from app.services import suppliers as service


router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("/", response_model=List[SupplierOut])
def list_suppliers(db: Session = Depends(get_db)):
    """
    Lista apenas fornecedores ativos.
    """
    return service.list_suppliers(db)


@router.post("/", response_model=SupplierOut, status_code=status.HTTP_201_CREATED)
def create_supplier(payload: SupplierCreate, db: Session = Depends(get_db)):
    return service.create_supplier(db, payload)


@router.get("/{supplier_id}", response_model=SupplierOut | None)
def get_supplier(supplier_id: int, db: Session = Depends(get_db)):
    return db.get(Supplier, supplier_id)


@router.put("/{supplier_id}", response_model=SupplierOut)
def update_supplier(supplier_id: int, payload: SupplierUpdate, db: Session = Depends(get_db)):
    return service.update_supplier(db, supplier_id, payload)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier(supplier_id: int, db: Session = Depends(get_db)):
    """
    Exclusão lógica: o fornecedor fica inativo e some da listagem.
    """
    service.deactivate_supplier(db, supplier_id)
    return None
