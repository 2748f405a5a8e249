"""
Line Item Calculator - prices a single quote line.

A line total is the product's base cost plus one adjustment per applied
multiplier. Each multiplier is charged against its own partial quantity,
clamped to the line quantity:

    effective_qty = min(partial_qty, quantity)
    PERCENTAGE      -> base_price * (applied_value / 100) * effective_qty
    FIXED_PER_UNIT  -> applied_value * effective_qty

Partial-quantity entries with no matching applied multiplier, or with a
quantity <= 0, contribute nothing. Every function here is pure and total:
nothing is validated or raised.
"""
import logging
from dataclasses import dataclass

from .models import AppliedMultiplier, MultiplierType, QuoteItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Adjustment:
    """The amount one applied multiplier adds to a line."""
    multiplier_id: str
    name: str
    type: MultiplierType
    applied_value: float
    effective_quantity: int
    amount: float
    is_discountable: bool


def _adjustment_amount(applied: AppliedMultiplier, base_price: float, effective_qty: int) -> float:
    if applied.type == MultiplierType.PERCENTAGE:
        return base_price * (applied.applied_value / 100.0) * effective_qty
    return applied.applied_value * effective_qty


def multiplier_adjustments(item: QuoteItem) -> list[Adjustment]:
    """
    Resolve the partial-quantity map of a line into charged adjustments.

    Entries are visited in the map's insertion order. Each multiplier is
    clamped against the line quantity on its own, so the effective quantities
    of different multipliers may add up to more than the line quantity.
    """
    adjustments = []
    base_price = item.product.base_price

    for multiplier_id, partial_qty in item.partial_multiplier_quantities:
        if partial_qty <= 0:
            continue
        applied = item.find_applied(multiplier_id)
        if applied is None:
            logger.debug("Line %s: no applied multiplier for id %s, skipped", item.id, multiplier_id)
            continue

        effective_qty = min(partial_qty, item.quantity)
        amount = _adjustment_amount(applied, base_price, effective_qty)
        logger.debug(
            "Line %s: '%s' on %s of %s units = %s",
            item.id, applied.name, effective_qty, item.quantity, amount
        )
        adjustments.append(Adjustment(
            multiplier_id=multiplier_id,
            name=applied.name,
            type=applied.type,
            applied_value=applied.applied_value,
            effective_quantity=effective_qty,
            amount=amount,
            is_discountable=applied.is_discountable,
        ))

    return adjustments


def base_total(item: QuoteItem) -> float:
    """Base cost of the line: base price times quantity."""
    return item.product.base_price * item.quantity


def multiplier_adjustment(item: QuoteItem) -> float:
    """Sum of all multiplier adjustments on the line."""
    total = 0.0
    for adjustment in multiplier_adjustments(item):
        total += adjustment.amount
    return total


def line_total_before_discount(item: QuoteItem) -> float:
    """Line value before the quote-wide discount."""
    total = base_total(item) + multiplier_adjustment(item)
    logger.debug("Line %s: '%s' qty %s total before discount = %s",
                 item.id, item.product.name, item.quantity, total)
    return total


def discountable_amount(item: QuoteItem) -> float:
    """
    Portion of the line eligible for the quote-wide discount.

    Includes the base cost only when the line's base item is discountable, and
    each adjustment only when its multiplier is discountable.
    """
    amount = base_total(item) if item.is_base_item_discountable else 0.0
    for adjustment in multiplier_adjustments(item):
        if adjustment.is_discountable:
            amount += adjustment.amount
    logger.debug("Line %s: discountable amount = %s", item.id, amount)
    return amount


def discount_amount(item: QuoteItem, global_discount_rate: float) -> float:
    """Discount for this line at the given percent rate; zero for rates <= 0."""
    if global_discount_rate <= 0:
        return 0.0
    return discountable_amount(item) * (global_discount_rate / 100.0)
