"""
Quote Aggregator - rolls line totals up into quote totals.

Order of operations is fixed: the global discount is taken first, tax is
charged on the discounted subtotal.
"""
import logging

from .line_calculator import discount_amount, line_total_before_discount
from .models import Quote, QuoteTotals

logger = logging.getLogger(__name__)


def subtotal_before_discount(quote: Quote) -> float:
    return sum((line_total_before_discount(item) for item in quote.items), 0.0)


def total_discount_amount(quote: Quote) -> float:
    """Sum of per-line discounts at the quote's global rate."""
    rate = quote.global_discount_rate
    if rate <= 0:
        return 0.0
    return sum((discount_amount(item, rate) for item in quote.items), 0.0)


def subtotal_after_discount(quote: Quote) -> float:
    # Not clamped: rates over 100% yield a negative subtotal
    return subtotal_before_discount(quote) - total_discount_amount(quote)


def tax_amount(quote: Quote) -> float:
    return subtotal_after_discount(quote) * (quote.tax_rate / 100.0)


def grand_total(quote: Quote) -> float:
    return subtotal_after_discount(quote) + tax_amount(quote)


def compute_totals(quote: Quote) -> QuoteTotals:
    """
    Bundle all five quote totals into one QuoteTotals.

    Values match the individual accessors above exactly.
    """
    before = subtotal_before_discount(quote)
    discount = total_discount_amount(quote)
    after = before - discount
    tax = after * (quote.tax_rate / 100.0)
    totals = QuoteTotals(
        subtotal_before_discount=before,
        total_discount=discount,
        subtotal_after_discount=after,
        tax_amount=tax,
        grand_total=after + tax,
    )
    logger.debug("Quote %s (%d items): %s", quote.id, len(quote.items), totals)
    return totals
