"""
Build a sample quote and print its pricing breakdown.

Usage:
    python scripts/debug_quote.py [--csv]
"""
import sys
from pathlib import Path

import pandas as pd

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from pricer.builder.quote_builder import build_quote
from pricer.engine import Catalog, Multiplier, MultiplierType, Product, compute_quote_totals
from pricer.export.quote_export import export_csv, line_frame, summary_rows


def sample_catalog() -> Catalog:
    return Catalog(
        id="demo",
        name="Demo Catalog",
        products=[
            Product(id="deck", name="Deck Board", unit_type="board", base_price=100.0),
            Product(id="permit", name="Permit Fee", unit_type="each", base_price=75.0, is_discountable=False),
        ],
        multipliers=[
            Multiplier(id="rush", name="Rush", type=MultiplierType.PERCENTAGE, value=10.0),
            Multiplier(id="haul", name="Haul Away", type=MultiplierType.FIXED_PER_UNIT, value=5.0, is_discountable=False),
        ],
    )


def debug():
    quote = build_quote(
        sample_catalog(),
        quantities={"deck": "12", "permit": "1"},
        assignments={"deck": {"rush": "4", "haul": "12"}},
        tax_rate=8.0,
        discount_rate=10.0,
        customer_name="Demo Customer",
    )

    with pd.option_context('display.width', 160, 'display.max_columns', None):
        print(line_frame(quote).to_string(index=False))
    print()
    for label, value in summary_rows(quote):
        print(f"{label:>28}  {value}")
    print()
    print(compute_quote_totals(quote))

    if "--csv" in sys.argv:
        print(f"\nWrote {export_csv(quote)}")

if __name__ == "__main__":
    debug()
