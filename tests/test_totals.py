from decimal import Decimal
from types import SimpleNamespace

import pytest

from app.services.totals import (
    MARGIN_LIMIT,
    OperationTotals,
    compute_totals,
    invoice_subtotals,
    item_cost_brl,
    item_sale_brl,
    margin_pct,
    to_brl,
)


def _item(value="0", currency="BRL", cost_value="0", cost_currency="BRL"):
    return SimpleNamespace(
        value=Decimal(value),
        currency=currency,
        cost_value=Decimal(cost_value),
        cost_currency=cost_currency,
    )


def _invoice(final_amount, dollar_value="1", items=(), status="pending"):
    return SimpleNamespace(
        final_amount=Decimal(final_amount),
        dollar_value=Decimal(dollar_value),
        items=list(items),
        status=status,
    )


class TestConversion:
    def test_usd_cost_uses_invoice_rate(self):
        assert item_cost_brl(_item(cost_value="10", cost_currency="USD"), Decimal("5")) == Decimal("50")

    def test_brl_cost_ignores_rate(self):
        assert item_cost_brl(_item(cost_value="10", cost_currency="BRL"), Decimal("5")) == Decimal("10")
        assert item_cost_brl(_item(cost_value="10", cost_currency="BRL"), Decimal("123.4567")) == Decimal("10")

    def test_sale_value_follows_same_rule(self):
        assert item_sale_brl(_item(value="20", currency="USD"), Decimal("5.25")) == Decimal("105.00")
        assert item_sale_brl(_item(value="20", currency="BRL"), Decimal("5.25")) == Decimal("20")

    def test_missing_rate_counts_as_one(self):
        assert to_brl(Decimal("7"), "USD", None) == Decimal("7")

    def test_accepts_strings_and_none(self):
        assert to_brl("2.5", "USD", "4") == Decimal("10.0")
        assert to_brl(None, "USD", "4") == Decimal("0")


class TestMargin:
    def test_zero_selling_is_zero_margin(self):
        assert margin_pct(Decimal("-50"), Decimal("0")) == Decimal("0.00")

    def test_rounded_to_two_places(self):
        assert margin_pct(Decimal("50"), Decimal("150")) == Decimal("33.33")
        assert margin_pct(Decimal("2"), Decimal("3")) == Decimal("66.67")

    def test_negative_margin(self):
        assert margin_pct(Decimal("-25"), Decimal("100")) == Decimal("-25.00")

    def test_large_negative_margin_is_kept(self):
        assert margin_pct(Decimal("-190"), Decimal("10")) == Decimal("-1900.00")

    def test_clamped_to_column_range(self):
        assert margin_pct(Decimal("-1000000000"), Decimal("0.01")) == -MARGIN_LIMIT


class TestComputeTotals:
    def test_sums_final_amounts(self):
        totals = compute_totals([_invoice("100"), _invoice("50")])
        assert totals.total_selling == Decimal("150")
        assert totals.total_cost == Decimal("0")
        assert totals.total_profit == Decimal("150")
        assert totals.profit_margin == Decimal("100.00")

    def test_cost_converted_per_invoice_rate(self):
        totals = compute_totals(
            [
                _invoice("300", "5", [_item(cost_value="10", cost_currency="USD")]),
                _invoice("200", "6", [_item(cost_value="10", cost_currency="USD"), _item(cost_value="40")]),
            ]
        )
        # 10*5 + 10*6 + 40
        assert totals.total_cost == Decimal("150")
        assert totals.total_selling == Decimal("500")
        assert totals.total_profit == Decimal("350")
        assert totals.profit_margin == Decimal("70.00")

    def test_cancelled_invoices_are_skipped(self):
        totals = compute_totals(
            [
                _invoice("100", items=[_item(cost_value="30")]),
                _invoice("900", items=[_item(cost_value="800")], status="cancelled"),
            ]
        )
        assert totals.total_selling == Decimal("100")
        assert totals.total_cost == Decimal("30")

    def test_no_invoices(self):
        assert compute_totals([]) == OperationTotals.zero()

    def test_cost_above_selling(self):
        totals = compute_totals([_invoice("0", "5", [_item(cost_value="10", cost_currency="USD")])])
        assert totals.total_profit == Decimal("-50")
        assert totals.profit_margin == Decimal("0")

    def test_money_rounded_to_cents(self):
        totals = compute_totals([_invoice("10", "5.1234", [_item(cost_value="1", cost_currency="USD")])])
        assert totals.total_cost == Decimal("5.12")

    def test_margin_uses_unrounded_cost(self):
        # custo 0,67 USD * 1,5 = 1,005
        totals = compute_totals([_invoice("3.00", "1.5", [_item(cost_value="0.67", cost_currency="USD")])])
        assert totals.total_cost == Decimal("1.01")
        assert totals.total_profit == Decimal("2.00")
        assert totals.profit_margin == Decimal("66.50")


@pytest.mark.parametrize(
    "items, rate, expected",
    [
        ([], "5", (Decimal("0"), Decimal("0"))),
        ([_item(value="100", cost_value="20", cost_currency="USD")], "5", (Decimal("100"), Decimal("100"))),
        ([_item(value="10.005", currency="USD")], "1", (Decimal("10.01"), Decimal("0"))),
    ],
)
def test_invoice_subtotals(items, rate, expected):
    assert invoice_subtotals(items, Decimal(rate)) == expected
