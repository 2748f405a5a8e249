"""
Quote Builder - assembles engine inputs from catalog state.

Turns the editing layer's raw state (per-product quantities, per-product
multiplier assignments, tax/discount rates) into immutable Quote records.
User input is cleaned here rather than in the engine: bad numbers are dropped
or clamped, never raised.
"""
import logging
import math
from dataclasses import replace
from typing import Mapping, Optional

from ..config.settings import get_settings
from ..engine.models import AppliedMultiplier, Catalog, Product, Quote, QuoteItem

logger = logging.getLogger(__name__)


def normalize_discount_rate(rate: float) -> float:
    """Clamp a global discount rate into 0-100 percent; NaN/inf become 0."""
    if not math.isfinite(rate):
        return 0.0
    return min(max(rate, 0.0), 100.0)


def normalize_tax_rate(rate: float) -> float:
    """Negative and non-finite tax rates become zero."""
    if not math.isfinite(rate):
        return 0.0
    return rate if rate >= 0 else 0.0


def _parse_int(raw) -> Optional[int]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def parse_quantity(raw) -> int:
    """Parse a quantity field; anything unparseable counts as 0."""
    value = _parse_int(raw)
    return value if value is not None else 0


def parse_assignments(raw: Mapping[str, object]) -> dict[str, int]:
    """
    Clean a {multiplier_id: quantity} assignment map.

    Entries whose quantity is not an integer or is not positive are dropped.
    """
    cleaned = {}
    for multiplier_id, raw_qty in raw.items():
        qty = _parse_int(raw_qty)
        if qty is not None and qty > 0:
            cleaned[multiplier_id] = qty
    return cleaned


def build_quote_item(
    product: Product,
    quantity: int,
    assignments: Mapping[str, int],
    catalog: Catalog,
    overrides: Optional[Mapping[str, float]] = None,
) -> QuoteItem:
    """
    Build one quote line, snapshotting the product and assigned multipliers.

    Assigned ids missing from the catalog get no applied snapshot; their
    assignment entries are kept and the calculator skips them. `overrides`
    replaces the catalog value of a multiplier for this line only.
    """
    overrides = overrides or {}

    applied = []
    for multiplier_id in assignments:
        multiplier = catalog.find_multiplier(multiplier_id)
        if multiplier is None:
            logger.debug("Multiplier %s not in catalog, not applied to '%s'", multiplier_id, product.name)
            continue
        applied.append(AppliedMultiplier.from_multiplier(multiplier, overrides.get(multiplier_id)))

    assigned_sum = sum(assignments.values())
    if quantity > 0 and assigned_sum > quantity:
        logger.warning(
            "Assigned multiplier quantities (%d) exceed item quantity (%d) for product %s; "
            "multipliers will apply independently",
            assigned_sum, quantity, product.id
        )

    return QuoteItem(
        product=replace(product),
        quantity=quantity,
        applied_multipliers=tuple(applied),
        partial_multiplier_quantities=dict(assignments),
        is_base_item_discountable=product.is_discountable,
    )


def build_quote(
    catalog: Catalog,
    quantities: Mapping[str, object],
    assignments: Optional[Mapping[str, Mapping[str, object]]] = None,
    tax_rate: Optional[float] = None,
    discount_rate: Optional[float] = None,
    customer_name: str = "",
    customer_email: str = "",
    customer_phone: str = "",
    company_name: str = "",
    custom_message: str = "",
    quote_id: Optional[str] = None,
) -> Optional[Quote]:
    """
    Build a quote from catalog state.

    Args:
        catalog: Active catalog; its product order is the quote's line order
        quantities: {product_id: quantity}, raw strings accepted
        assignments: {product_id: {multiplier_id: quantity}}, raw strings accepted
        tax_rate / discount_rate: Percent; settings defaults when omitted
        quote_id: Keep an existing quote's id when rebuilding it

    Returns:
        The Quote, or None when no product has a positive quantity
    """
    settings = get_settings()
    assignments = assignments or {}
    tax = normalize_tax_rate(settings.tax_rate if tax_rate is None else tax_rate)
    discount = normalize_discount_rate(
        settings.discount_rate if discount_rate is None else discount_rate
    )

    items = []
    for product in catalog.products:
        qty = parse_quantity(quantities.get(product.id, 0))
        if qty <= 0:
            continue
        item_assignments = parse_assignments(assignments.get(product.id, {}))
        items.append(build_quote_item(product, qty, item_assignments, catalog))

    if not items:
        logger.info("Quote empty: no products with a positive quantity")
        return None

    quote_kwargs = {} if quote_id is None else {"id": quote_id}
    quote = Quote(
        customer_name=customer_name,
        customer_email=customer_email,
        customer_phone=customer_phone,
        company_name=company_name,
        custom_message=custom_message,
        items=tuple(items),
        tax_rate=tax,
        global_discount_rate=discount,
        **quote_kwargs,
    )
    logger.info("Quote %s built: %d items, tax %s%%, discount %s%%", quote.id, len(items), tax, discount)
    return quote


def remove_item(quote: Quote, item_id: str) -> Optional[Quote]:
    """Return the quote without the given line, or None if no lines remain."""
    remaining = tuple(item for item in quote.items if item.id != item_id)
    if not remaining:
        return None
    return replace(quote, items=remaining)


def with_rates(quote: Quote, tax_rate: Optional[float] = None, discount_rate: Optional[float] = None) -> Quote:
    """Return the quote with new (normalized) tax and/or discount rates."""
    changes = {}
    if tax_rate is not None:
        changes['tax_rate'] = normalize_tax_rate(tax_rate)
    if discount_rate is not None:
        changes['global_discount_rate'] = normalize_discount_rate(discount_rate)
    return replace(quote, **changes) if changes else quote
