"""
Quote aggregation: subtotal, discount, tax and grand total.
"""
from dataclasses import replace

import pytest

from pricer.engine import Product, Quote, QuoteItem, compute_quote_totals
from pricer.engine.quote_aggregator import (
    grand_total,
    subtotal_after_discount,
    subtotal_before_discount,
    tax_amount,
    total_discount_amount,
)


@pytest.fixture
def mixed_quote(rush_line, delivery, widget):
    """A discountable rush line plus a line with a non-discountable fixed charge."""
    hauled = QuoteItem(
        product=replace(widget, id="gadget", name="Gadget", base_price=40.0),
        quantity=3,
        applied_multipliers=(delivery,),
        partial_multiplier_quantities={"delivery": 3},
    )
    return Quote(items=(rush_line, hauled), tax_rate=8.0, global_discount_rate=10.0)


@pytest.mark.parametrize("tax_rate,discount_rate", [(0.0, 0.0), (8.0, 10.0), (25.0, 150.0)])
def test_empty_quote_is_all_zero(tax_rate, discount_rate):
    totals = compute_quote_totals(Quote(tax_rate=tax_rate, global_discount_rate=discount_rate))

    assert totals.subtotal_before_discount == 0
    assert totals.total_discount == 0
    assert totals.subtotal_after_discount == 0
    assert totals.tax_amount == 0
    assert totals.grand_total == 0


def test_tax_without_discount():
    """taxRate 8, no discount, subtotal 100 -> tax 8, grand total 108."""
    item = QuoteItem(product=Product(id="p", base_price=100.0), quantity=1)
    totals = compute_quote_totals(Quote(items=(item,), tax_rate=8.0))

    assert totals.subtotal_before_discount == pytest.approx(100.0)
    assert totals.total_discount == 0
    assert totals.tax_amount == pytest.approx(8.0)
    assert totals.grand_total == pytest.approx(108.0)


def test_discount_then_tax(mixed_quote):
    # rush line: 220 all discountable; gadget line: 120 base + 15 delivery (not discountable)
    totals = compute_quote_totals(mixed_quote)

    assert totals.subtotal_before_discount == pytest.approx(355.0)
    assert totals.total_discount == pytest.approx(22.0 + 12.0)
    assert totals.subtotal_after_discount == pytest.approx(321.0)
    # Tax is charged on the discounted subtotal
    assert totals.tax_amount == pytest.approx(321.0 * 0.08)
    assert totals.grand_total == pytest.approx(321.0 * 1.08)


def test_totals_identities(mixed_quote):
    totals = compute_quote_totals(mixed_quote)

    assert totals.subtotal_after_discount == totals.subtotal_before_discount - totals.total_discount
    assert totals.grand_total == totals.subtotal_after_discount + totals.tax_amount


def test_compute_totals_matches_individual_accessors(mixed_quote):
    totals = compute_quote_totals(mixed_quote)

    assert totals.subtotal_before_discount == subtotal_before_discount(mixed_quote)
    assert totals.total_discount == total_discount_amount(mixed_quote)
    assert totals.subtotal_after_discount == subtotal_after_discount(mixed_quote)
    assert totals.tax_amount == tax_amount(mixed_quote)
    assert totals.grand_total == grand_total(mixed_quote)


def test_totals_are_idempotent(mixed_quote):
    assert compute_quote_totals(mixed_quote) == compute_quote_totals(mixed_quote)


def test_line_order_does_not_change_subtotal(mixed_quote):
    reversed_quote = replace(mixed_quote, items=tuple(reversed(mixed_quote.items)))
    assert subtotal_before_discount(reversed_quote) == pytest.approx(subtotal_before_discount(mixed_quote))


@pytest.mark.parametrize("rate", [0.0, -20.0])
def test_non_positive_discount_rate_means_no_discount(mixed_quote, rate):
    quote = replace(mixed_quote, global_discount_rate=rate)
    assert total_discount_amount(quote) == 0.0
    assert subtotal_after_discount(quote) == subtotal_before_discount(quote)


def test_non_discountable_base_survives_discount(rush_line):
    """With the base excluded at 50%, only the adjustment is discounted."""
    line = replace(rush_line, is_base_item_discountable=False)
    totals = compute_quote_totals(Quote(items=(line,), global_discount_rate=50.0))

    assert totals.total_discount == pytest.approx(10.0)
    # The 200 base cost remains in full
    assert totals.subtotal_after_discount == pytest.approx(200.0 + 10.0)


def test_discount_over_100_percent_is_not_clamped(rush_line):
    totals = compute_quote_totals(Quote(items=(rush_line,), global_discount_rate=150.0))

    assert totals.total_discount == pytest.approx(330.0)
    assert totals.subtotal_after_discount == pytest.approx(-110.0)


def test_quote_totals_to_dict(mixed_quote):
    data = compute_quote_totals(mixed_quote).to_dict()
    assert set(data) == {
        "subtotal_before_discount", "total_discount", "subtotal_after_discount",
        "tax_amount", "grand_total",
    }
