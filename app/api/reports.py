from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.operation import Operation
from app.schemas.operation import OperationOut
from app.schemas.report import ProfitReportOut, ProfitSummaryOut
from app.services import reports as service
from app.services.operations import list_operations

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/summary", response_model=ProfitSummaryOut)
def get_summary(db: Session = Depends(get_db)) -> ProfitSummaryOut:
    return service.profit_summary(db)


@router.get("/profit/operation/{operation_id}", response_model=OperationOut | None)
def get_profit_by_operation(operation_id: int, db: Session = Depends(get_db)) -> Operation | None:
    return db.get(Operation, operation_id)


@router.get("/profit/period", response_model=ProfitReportOut)
def get_profit_by_period(start: datetime, end: datetime, db: Session = Depends(get_db)) -> ProfitReportOut:
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Data final anterior à data inicial.",
        )
    operations = service.profit_by_period(db, start, end)
    return ProfitReportOut(
        operations=[OperationOut.model_validate(op) for op in operations],
        **service.totals_of(operations),
    )


@router.get("/profit/client/{client_id}", response_model=ProfitReportOut)
def get_profit_by_client(client_id: int, db: Session = Depends(get_db)) -> ProfitReportOut:
    operations = list_operations(db, client_id=client_id)
    return ProfitReportOut(
        operations=[OperationOut.model_validate(op) for op in operations],
        **service.totals_of(operations),
    )
