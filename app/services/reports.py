from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.models.operation import Operation
from app.schemas.report import ProfitSummaryOut
from app.services.totals import compute_totals, load_operation_invoices, margin_pct


def profit_summary(db: Session) -> ProfitSummaryOut:
    """
    Resumo do painel. Venda e custo são recalculados a partir das faturas
    das operações concluídas, não lidos dos totais gravados.
    """
    total_operations = db.query(Operation).count()
    completed = db.query(Operation).filter(Operation.status == "completed").all()

    invoices = []
    for operation in completed:
        invoices.extend(load_operation_invoices(db, operation.id))

    totals = compute_totals(invoices)

    return ProfitSummaryOut(
        total_operations=total_operations,
        completed_operations=len(completed),
        total_cost=totals.total_cost,
        total_selling=totals.total_selling,
        total_profit=totals.total_profit,
        average_margin=totals.profit_margin,
    )


def profit_by_period(db: Session, start: datetime, end: datetime) -> list[Operation]:
    return (
        db.query(Operation)
        .filter(Operation.created_at >= start, Operation.created_at <= end)
        .order_by(Operation.created_at.desc(), Operation.id.desc())
        .all()
    )


def totals_of(operations: list[Operation]) -> dict[str, Decimal]:
    """Soma dos totais gravados de uma lista de operações (filtros da tela de lucro)."""
    cost = sum((op.total_cost or Decimal("0") for op in operations), Decimal("0"))
    selling = sum((op.total_selling or Decimal("0") for op in operations), Decimal("0"))
    profit = sum((op.total_profit or Decimal("0") for op in operations), Decimal("0"))
    margin = margin_pct(profit, selling)
    return {
        "total_cost": cost,
        "total_selling": selling,
        "total_profit": profit,
        "profit_margin": margin,
    }
