# app/api/receipts.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.receipt import Receipt
from app.schemas.receipt import ReceiptCreate, ReceiptOut, ReceiptUpdate
from app.services import receipts as service


router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.get("/", response_model=List[ReceiptOut])
def list_receipts(db: Session = Depends(get_db)):
    return service.list_receipts(db)


@router.get("/by-invoice/{invoice_id}", response_model=List[ReceiptOut])
def list_receipts_by_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return service.list_receipts(db, invoice_id=invoice_id)


@router.post("/", response_model=ReceiptOut, status_code=status.HTTP_201_CREATED)
def create_receipt(payload: ReceiptCreate, db: Session = Depends(get_db)):
    return service.create_receipt(db, payload)


@router.get("/{receipt_id}", response_model=ReceiptOut | None)
def get_receipt(receipt_id: int, db: Session = Depends(get_db)):
    return db.get(Receipt, receipt_id)


@router.put("/{receipt_id}", response_model=ReceiptOut)
def update_receipt(receipt_id: int, payload: ReceiptUpdate, db: Session = Depends(get_db)):
    return service.update_receipt(db, receipt_id, payload)


@router.delete("/{receipt_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_receipt(receipt_id: int, db: Session = Depends(get_db)):
    service.delete_receipt(db, receipt_id)
    return None
