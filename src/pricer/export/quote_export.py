"""
Quote export helpers - display formatting and tabular line breakdowns.

Consumers such as the quote preview and PDF export read their numbers from
here so that every surface shows the same engine results.
"""
import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from ..config.settings import get_settings
from ..engine.line_calculator import (
    base_total,
    discount_amount,
    discountable_amount,
    line_total_before_discount,
    multiplier_adjustment,
)
from ..engine.models import AppliedMultiplier, MultiplierType, Quote
from ..engine.quote_aggregator import compute_totals

logger = logging.getLogger(__name__)

LINE_COLUMNS = [
    'Item', 'Unit', 'Quantity', 'Unit Price', 'Base Total', 'Multiplier Adj',
    'Line Total', 'Discountable', 'Discount', 'Multipliers',
]


def format_currency(value: float, symbol: Optional[str] = None) -> str:
    """Format an amount as e.g. "$1,234.56" ("-$5.00" for negatives)."""
    symbol = get_settings().currency if symbol is None else symbol
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: float) -> str:
    """12.5 -> "12.50%"."""
    return f"{value:.2f}%"


def describe_multiplier(applied: AppliedMultiplier, symbol: Optional[str] = None) -> str:
    if applied.type == MultiplierType.PERCENTAGE:
        return f"{applied.name} ({format_percentage(applied.applied_value)})"
    return f"{applied.name} ({format_currency(applied.applied_value, symbol)}/unit)"


def summary_rows(quote: Quote, symbol: Optional[str] = None) -> list[tuple[str, str]]:
    """
    Labelled total rows for a quote footer.

    The discount rows only appear when the quote actually has a discount.
    """
    totals = compute_totals(quote)
    rows = [("Subtotal", format_currency(totals.subtotal_before_discount, symbol))]

    if totals.total_discount > 0:
        rows.append((
            f"Discount ({format_percentage(quote.global_discount_rate)})",
            f"-{format_currency(totals.total_discount, symbol)}"
        ))
        rows.append(("Subtotal After Discount", format_currency(totals.subtotal_after_discount, symbol)))

    rows.append((f"Tax ({format_percentage(quote.tax_rate)})", format_currency(totals.tax_amount, symbol)))
    rows.append(("Grand Total", format_currency(totals.grand_total, symbol)))
    return rows


def line_frame(quote: Quote) -> pd.DataFrame:
    """One row per quote line with its pricing breakdown (numbers unformatted)."""
    records = []
    for item in quote.items:
        records.append({
            'Item': item.product.name,
            'Unit': item.product.unit_type,
            'Quantity': item.quantity,
            'Unit Price': item.product.base_price,
            'Base Total': base_total(item),
            'Multiplier Adj': multiplier_adjustment(item),
            'Line Total': line_total_before_discount(item),
            'Discountable': discountable_amount(item),
            'Discount': discount_amount(item, quote.global_discount_rate),
            'Multipliers': "; ".join(describe_multiplier(m) for m in item.applied_multipliers),
        })
    return pd.DataFrame(records, columns=LINE_COLUMNS)


def export_csv(quote: Quote, path: Optional[Path] = None) -> Path:
    """
    Write the quote's line breakdown to CSV.

    Defaults to <export_dir>/quote_<id>.csv; parent directories are created.
    """
    if path is None:
        path = get_settings().export_dir / f"quote_{quote.id}.csv"
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    line_frame(quote).to_csv(path, index=False)
    logger.info("Exported %d quote lines to %s", len(quote.items), path)
    return path
