"""Engine subpackage - quote line and quote total calculation."""
from .models import (
    AppliedMultiplier,
    Catalog,
    Multiplier,
    MultiplierType,
    Product,
    Quote,
    QuoteItem,
    QuoteTotals,
)
from .line_calculator import (
    Adjustment,
    discount_amount,
    discountable_amount,
    line_total_before_discount,
)
from .quote_aggregator import compute_totals


def compute_line_total(item: QuoteItem) -> float:
    """Line total before the quote-wide discount."""
    return line_total_before_discount(item)


def compute_line_discountable_amount(item: QuoteItem) -> float:
    """Portion of the line eligible for the quote-wide discount."""
    return discountable_amount(item)


def compute_line_discount(item: QuoteItem, global_rate_percent: float) -> float:
    """Discount the line receives at the given quote-wide rate."""
    return discount_amount(item, global_rate_percent)


def compute_quote_totals(quote: Quote) -> QuoteTotals:
    """Subtotal, discount, discounted subtotal, tax and grand total."""
    return compute_totals(quote)


__all__ = [
    'Adjustment', 'AppliedMultiplier', 'Catalog', 'Multiplier', 'MultiplierType',
    'Product', 'Quote', 'QuoteItem', 'QuoteTotals',
    'compute_line_total', 'compute_line_discountable_amount',
    'compute_line_discount', 'compute_quote_totals',
]
