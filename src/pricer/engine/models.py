"""
Data models for the quote pricing engine.

All records are frozen dataclasses: a quote line carries value snapshots of the
product and multipliers it was priced with, so later catalog edits never change
a historical quote.
"""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


def _new_id() -> str:
    return str(uuid.uuid4())


class MultiplierType(str, Enum):
    """How a multiplier's value is applied to a line."""
    PERCENTAGE = "PERCENTAGE"          # percent of the product base price, per unit
    FIXED_PER_UNIT = "FIXED_PER_UNIT"  # flat currency amount, per unit


@dataclass(frozen=True)
class Product:
    """A catalog product."""
    id: str = field(default_factory=_new_id)
    name: str = ""
    description: str = ""
    unit_type: str = "unit"
    base_price: float = 0.0
    category: str = "Default"
    is_discountable: bool = True


@dataclass(frozen=True)
class Multiplier:
    """A catalog-level multiplier definition (e.g. "Rush", "Material Surcharge")."""
    id: str = field(default_factory=_new_id)
    name: str = ""
    type: MultiplierType = MultiplierType.PERCENTAGE
    value: float = 0.0  # percentage points (10.0 = 10%) or currency per unit
    is_discountable: bool = True


@dataclass(frozen=True)
class AppliedMultiplier:
    """A multiplier as it was applied to one quote line."""
    multiplier_id: str  # display/lookup only, not a live reference
    name: str
    type: MultiplierType
    applied_value: float
    is_discountable: bool = True

    @classmethod
    def from_multiplier(cls, multiplier: Multiplier, override_value: Optional[float] = None) -> 'AppliedMultiplier':
        """Snapshot a catalog multiplier, optionally overriding its value for this line."""
        return cls(
            multiplier_id=multiplier.id,
            name=multiplier.name,
            type=multiplier.type,
            applied_value=multiplier.value if override_value is None else override_value,
            is_discountable=multiplier.is_discountable,
        )


@dataclass(frozen=True)
class QuoteItem:
    """
    A single priced line of a quote.

    `partial_multiplier_quantities` pairs multiplier id with the number of the
    line's units that multiplier applies to, in insertion order. A mapping or
    an iterable of (id, qty) pairs is accepted; it is stored as a tuple of
    pairs and read back through `partial_quantities()`. Entries are independent
    of each other and need not sum to `quantity`. `is_base_item_discountable`
    defaults to the product's own flag when omitted.
    """
    product: Product
    quantity: int
    applied_multipliers: tuple[AppliedMultiplier, ...] = ()
    partial_multiplier_quantities: tuple[tuple[str, int], ...] = ()
    is_base_item_discountable: Optional[bool] = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        # Copy caller containers so the line cannot be mutated through them
        object.__setattr__(self, 'applied_multipliers', tuple(self.applied_multipliers))
        object.__setattr__(
            self, 'partial_multiplier_quantities',
            tuple(dict(self.partial_multiplier_quantities).items())
        )
        if self.is_base_item_discountable is None:
            object.__setattr__(self, 'is_base_item_discountable', self.product.is_discountable)

    def partial_quantities(self) -> Mapping[str, int]:
        """Read-only {multiplier_id: partial_qty} view, in insertion order."""
        return MappingProxyType(dict(self.partial_multiplier_quantities))

    def find_applied(self, multiplier_id: str) -> Optional[AppliedMultiplier]:
        """Return the first applied multiplier with the given id, if any."""
        for applied in self.applied_multipliers:
            if applied.multiplier_id == multiplier_id:
                return applied
        return None


@dataclass(frozen=True)
class Quote:
    """A customer quote. Totals are always derived, never stored."""
    id: str = field(default_factory=_new_id)
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    company_name: str = ""
    custom_message: str = ""
    items: tuple[QuoteItem, ...] = ()
    tax_rate: float = 0.0             # percent
    global_discount_rate: float = 0.0  # percent

    def __post_init__(self):
        object.__setattr__(self, 'items', tuple(self.items))


@dataclass(frozen=True)
class QuoteTotals:
    """Computed quote-level totals."""
    subtotal_before_discount: float
    total_discount: float
    subtotal_after_discount: float
    tax_amount: float
    grand_total: float

    def to_dict(self) -> dict:
        return {
            "subtotal_before_discount": self.subtotal_before_discount,
            "total_discount": self.total_discount,
            "subtotal_after_discount": self.subtotal_after_discount,
            "tax_amount": self.tax_amount,
            "grand_total": self.grand_total,
        }


@dataclass(frozen=True)
class Catalog:
    """A named set of products and global multiplier definitions."""
    id: str = field(default_factory=_new_id)
    name: str = "Default Catalog"
    company_name: str = ""
    products: tuple[Product, ...] = ()
    multipliers: tuple[Multiplier, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'products', tuple(self.products))
        object.__setattr__(self, 'multipliers', tuple(self.multipliers))

    def find_product(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    def find_multiplier(self, multiplier_id: str) -> Optional[Multiplier]:
        return next((m for m in self.multipliers if m.id == multiplier_id), None)
