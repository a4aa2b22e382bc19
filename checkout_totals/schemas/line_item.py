from decimal import Decimal
from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, PositiveInt

Money = Decimal
ZERO = Decimal("0")

class NoDiscount(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"

class Promotional(BaseModel):
    """Purchase-with-purchase reward line. unit_price is already the charged price."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["promotional"] = "promotional"
    discount_amount_per_unit: Money = ZERO

class VariantSale(BaseModel):
    """Admin-set markdown on a variant."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["variant_sale"] = "variant_sale"
    discount_amount_per_unit: Money = ZERO
    # absent on records created before original prices were captured
    original_unit_price: Money | None = None

class WholesaleTier(BaseModel):
    """Quantity-tier pricing. unit_price is already the tier price."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["wholesale_tier"] = "wholesale_tier"
    original_unit_price: Money | None = None

DiscountTag = Annotated[
    Union[NoDiscount, Promotional, VariantSale, WholesaleTier],
    Field(discriminator="kind"),
]

class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    variant_id: str | None = None
    title: str | None = None
    unit_price: Money
    quantity: PositiveInt
    discount: DiscountTag = Field(default_factory=NoDiscount)
