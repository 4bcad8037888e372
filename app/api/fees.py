# app/api/fees.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.fee import Fee
from app.schemas.fee import FeeCreate, FeeOut, FeeUpdate


router = APIRouter(prefix="/fees", tags=["fees"])


@router.get("/", response_model=List[FeeOut])
def list_fees(db: Session = Depends(get_db)):
    """
    Lista o catálogo de taxas ativas.
    """
    return (
        db.query(Fee)
        .filter(Fee.is_active.is_(True))
        .order_by(Fee.created_at.desc(), Fee.id.desc())
        .all()
    )


@router.post("/", response_model=FeeOut, status_code=status.HTTP_201_CREATED)
def create_fee(payload: FeeCreate, db: Session = Depends(get_db)):
    fee = Fee(name=payload.name, description=payload.description)

    db.add(fee)
    db.commit()
    db.refresh(fee)

    return fee


@router.get("/{fee_id}", response_model=FeeOut | None)
def get_fee(fee_id: int, db: Session = Depends(get_db)):
    return db.get(Fee, fee_id)


@router.put("/{fee_id}", response_model=FeeOut)
def update_fee(fee_id: int, payload: FeeUpdate, db: Session = Depends(get_db)):
    fee = db.get(Fee, fee_id)
    if not fee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Taxa não encontrada.",
        )

    data = payload.model_dump(exclude_unset=True)
    if data.get("name") is None:
        data.pop("name", None)

    for field, value in data.items():
        setattr(fee, field, value)

    db.commit()
    db.refresh(fee)

    return fee


@router.delete("/{fee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fee(fee_id: int, db: Session = Depends(get_db)):
    fee = db.get(Fee, fee_id)
    if not fee:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Taxa não encontrada.",
        )

    # Itens de fatura antigos continuam apontando para a taxa: só desativa
    fee.is_active = False
    db.commit()

    return None
