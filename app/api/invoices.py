# app/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.client import Client
from app.models.fee import Fee
from app.models.invoice import Invoice
from app.models.operation import Operation
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetailOut,
    InvoiceItemIn,
    InvoiceItemOut,
    InvoiceOut,
    InvoicePayment,
    InvoicePreviewIn,
    InvoicePreviewOut,
    InvoiceUpdate,
)
from app.services import invoices as service
from app.services.invoice_pdf import pdf_filename, render_invoice_pdf


router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/", response_model=List[InvoiceOut])
def list_invoices(db: Session = Depends(get_db)):
    return service.list_invoices(db)


@router.get("/by-client/{client_id}", response_model=List[InvoiceOut])
def list_invoices_by_client(client_id: int, db: Session = Depends(get_db)):
    return service.list_invoices(db, client_id=client_id)


@router.get("/by-operation/{operation_id}", response_model=List[InvoiceOut])
def list_invoices_by_operation(operation_id: int, db: Session = Depends(get_db)):
    return service.list_invoices(db, operation_id=operation_id)


@router.post("/", response_model=InvoiceDetailOut, status_code=status.HTTP_201_CREATED)
def create_invoice(payload: InvoiceCreate, db: Session = Depends(get_db)):
    """
    Cria a fatura com seus itens.
    - valor final = total + IOF, sempre calculado aqui
    - total omitido = soma de venda dos itens em BRL
    - recalcula os totais da operação
    """
    return service.create_invoice(db, payload)


@router.post("/preview", response_model=InvoicePreviewOut)
def preview_invoice(payload: InvoicePreviewIn):
    """
    Calcula venda, custo, lucro e margem de uma fatura ainda não salva.
    """
    return service.preview_totals(payload)


@router.get("/{invoice_id}", response_model=InvoiceDetailOut | None)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return db.get(Invoice, invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceDetailOut)
def update_invoice(invoice_id: int, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    """
    Atualização parcial. Se `items` vier, substitui todos os itens da fatura.
    """
    return service.update_invoice(db, invoice_id, payload)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    service.delete_invoice(db, invoice_id)
    return None


@router.post("/{invoice_id}/pay", response_model=InvoiceOut)
def mark_as_paid(invoice_id: int, payload: InvoicePayment, db: Session = Depends(get_db)):
    return service.mark_invoice_paid(
        db,
        invoice_id,
        payment_date=payload.payment_date,
        payment_method=payload.payment_method,
    )


@router.get("/{invoice_id}/items", response_model=List[InvoiceItemOut])
def get_items(invoice_id: int, db: Session = Depends(get_db)):
    return service.list_items(db, invoice_id)


@router.post(
    "/{invoice_id}/items",
    response_model=InvoiceItemOut,
    status_code=status.HTTP_201_CREATED,
)
def add_item(invoice_id: int, payload: InvoiceItemIn, db: Session = Depends(get_db)):
    return service.add_item(db, invoice_id, payload)


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(item_id: int, db: Session = Depends(get_db)):
    service.remove_item(db, item_id)
    return None


@router.get("/{invoice_id}/pdf")
def download_invoice_pdf(invoice_id: int, request: Request, db: Session = Depends(get_db)):
    """
    Demonstrativo de taxas em PDF.
    """
    invoice = db.get(Invoice, invoice_id)
    if not invoice:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Fatura não encontrada.",
        )

    client = db.get(Client, invoice.client_id)
    operation = db.get(Operation, invoice.operation_id)
    items = service.list_items(db, invoice_id)
    fees = db.query(Fee).all()

    pdf = render_invoice_pdf(invoice, client, operation, items, fees, config=request.app.state.settings)

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf_filename(invoice)}"'},
    )
