"""
Totais financeiros das operações.

Uma operação só mostra lucro quando está concluída. Nesse caso:

- venda = soma do valor final (total + IOF) das faturas
- custo = soma do custo dos itens, convertido para BRL com o câmbio da fatura
- lucro = venda - custo
- margem = lucro / venda * 100 (0 quando não há venda)

Qualquer outro status zera os totais.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Tuple

from sqlalchemy import update
from sqlalchemy.orm import Session, selectinload

from app.models.invoice import Invoice
from app.models.operation import Operation

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
CENT = Decimal("0.01")
MARGIN_LIMIT = Decimal("9999999999.99")


def _dec(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_brl(value, currency: str, dollar_value) -> Decimal:
    """Converte um valor para BRL. Só USD é multiplicado pelo câmbio."""
    amount = _dec(value)
    if currency == "USD":
        # Fatura sem câmbio conta como 1:1
        rate = _dec(dollar_value) if dollar_value is not None else ONE
        return amount * rate
    return amount


def item_sale_brl(item, dollar_value) -> Decimal:
    return to_brl(item.value, item.currency, dollar_value)


def item_cost_brl(item, dollar_value) -> Decimal:
    return to_brl(item.cost_value, item.cost_currency, dollar_value)


def raw_subtotals(items: Iterable, dollar_value) -> Tuple[Decimal, Decimal]:
    """(venda, custo) em BRL de um conjunto de itens, sem arredondar."""
    selling = ZERO
    cost = ZERO
    for item in items:
        selling += item_sale_brl(item, dollar_value)
        cost += item_cost_brl(item, dollar_value)
    return selling, cost


def invoice_subtotals(items: Iterable, dollar_value) -> Tuple[Decimal, Decimal]:
    """(venda, custo) em BRL de um conjunto de itens, arredondados em centavos."""
    selling, cost = raw_subtotals(items, dollar_value)
    return _money(selling), _money(cost)


def margin_pct(profit: Decimal, selling: Decimal) -> Decimal:
    if selling <= 0:
        return _money(ZERO)
    margin = _money(profit / selling * 100)
    # Limite da coluna profit_margin (Numeric(12, 2))
    return max(-MARGIN_LIMIT, min(MARGIN_LIMIT, margin))


@dataclass(frozen=True)
class OperationTotals:
    total_selling: Decimal
    total_cost: Decimal
    total_profit: Decimal
    profit_margin: Decimal

    @classmethod
    def zero(cls) -> "OperationTotals":
        z = _money(ZERO)
        return cls(total_selling=z, total_cost=z, total_profit=z, profit_margin=z)

    @classmethod
    def from_amounts(cls, selling: Decimal, cost: Decimal) -> "OperationTotals":
        # Lucro e margem sobre as somas sem arredondar
        profit = selling - cost
        return cls(
            total_selling=_money(selling),
            total_cost=_money(cost),
            total_profit=_money(profit),
            profit_margin=margin_pct(profit, selling),
        )

    def as_values(self) -> dict:
        return {
            "total_selling": self.total_selling,
            "total_cost": self.total_cost,
            "total_profit": self.total_profit,
            "profit_margin": self.profit_margin,
        }


def compute_totals(invoices: Iterable) -> OperationTotals:
    """Agrega faturas (com seus itens) nos totais de uma operação concluída."""
    selling = ZERO
    cost = ZERO

    for invoice in invoices:
        if invoice.status == "cancelled":
            continue

        selling += _dec(invoice.final_amount)
        for item in invoice.items:
            cost += item_cost_brl(item, invoice.dollar_value)

    return OperationTotals.from_amounts(selling, cost)


def load_operation_invoices(db: Session, operation_id: int) -> list[Invoice]:
    return (
        db.query(Invoice)
        .options(selectinload(Invoice.items))
        .filter(Invoice.operation_id == operation_id)
        .execution_options(populate_existing=True)
        .all()
    )


def recalculate_operation_totals(db: Session, operation_id: int) -> Optional[OperationTotals]:
    """
    Recalcula e grava os totais da operação.

    Operação inexistente não é erro: retorna None sem gravar nada.
    Os quatro campos são gravados em um único UPDATE.
    """
    operation = db.get(Operation, operation_id)
    if operation is None:
        logger.debug("Operação %s não encontrada; recálculo ignorado", operation_id)
        return None

    if operation.status != "completed":
        totals = OperationTotals.zero()
    else:
        totals = compute_totals(load_operation_invoices(db, operation_id))

    db.execute(
        update(Operation)
        .where(Operation.id == operation_id)
        .values(**totals.as_values())
    )
    db.commit()

    logger.info(
        "Totais da operação %s (%s): venda=%s custo=%s lucro=%s margem=%s%%",
        operation.reference_number,
        operation.status,
        totals.total_selling,
        totals.total_cost,
        totals.total_profit,
        totals.profit_margin,
    )
    return totals
