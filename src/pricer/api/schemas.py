"""
Request/response models for the pricing API.

Pydantic models validate the payload shape and convert into the engine's
frozen records.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..engine.models import AppliedMultiplier, MultiplierType, Product, Quote, QuoteItem


class ProductIn(BaseModel):
    id: str
    name: str = ""
    description: str = ""
    unit_type: str = "unit"
    base_price: float = 0.0
    category: str = "Default"
    is_discountable: bool = True

    def to_record(self) -> Product:
        return Product(**self.model_dump())


class AppliedMultiplierIn(BaseModel):
    multiplier_id: str
    name: str = ""
    type: MultiplierType = MultiplierType.PERCENTAGE
    applied_value: float = 0.0
    is_discountable: bool = True

    def to_record(self) -> AppliedMultiplier:
        return AppliedMultiplier(**self.model_dump())


class QuoteItemIn(BaseModel):
    """A quote line. Omitting is_base_item_discountable uses the product's flag."""
    id: Optional[str] = None
    product: ProductIn
    quantity: int
    applied_multipliers: List[AppliedMultiplierIn] = Field(default_factory=list)
    partial_multiplier_quantities: Dict[str, int] = Field(default_factory=dict)
    is_base_item_discountable: Optional[bool] = None

    def to_record(self) -> QuoteItem:
        extra = {} if self.id is None else {"id": self.id}
        return QuoteItem(
            product=self.product.to_record(),
            quantity=self.quantity,
            applied_multipliers=tuple(m.to_record() for m in self.applied_multipliers),
            partial_multiplier_quantities=dict(self.partial_multiplier_quantities),
            is_base_item_discountable=self.is_base_item_discountable,
            **extra,
        )


class LineRequest(BaseModel):
    item: QuoteItemIn
    global_discount_rate: float = 0.0


class QuoteIn(BaseModel):
    id: Optional[str] = None
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    company_name: str = ""
    custom_message: str = ""
    items: List[QuoteItemIn] = Field(default_factory=list)
    tax_rate: float = 0.0
    global_discount_rate: float = 0.0

    def to_record(self) -> Quote:
        data = self.model_dump(exclude={"items", "id"})
        if self.id is not None:
            data["id"] = self.id
        return Quote(items=tuple(i.to_record() for i in self.items), **data)


class AdjustmentOut(BaseModel):
    multiplier_id: str
    name: str
    type: MultiplierType
    applied_value: float
    effective_quantity: int
    amount: float
    is_discountable: bool


class LineResponse(BaseModel):
    item_id: str
    base_total: float
    multiplier_adjustment: float
    line_total: float
    discountable_amount: float
    discount: float
    adjustments: List[AdjustmentOut]


class TotalsResponse(BaseModel):
    quote_id: str
    subtotal_before_discount: float
    total_discount: float
    subtotal_after_discount: float
    tax_amount: float
    grand_total: float
    summary: List[List[str]]
