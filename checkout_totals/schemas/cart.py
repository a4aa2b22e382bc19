from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from checkout_totals.schemas.line_item import LineItem, Money, ZERO

class CartLevelDiscounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    # raw coupon-engine total, may already include promotional line discounts
    coupon_total: Money = ZERO
    coupon_code: str | None = None
    points_redeemed: int = Field(default=0, ge=0)
    points_discount: Money = ZERO
    membership_promo_discount: Money = ZERO
    membership_promo_name: str | None = None
    tier_discount: Money = ZERO
    tier_discount_percentage: Decimal | None = None
    tier_name: str | None = None
    free_shipping_applied: bool = False
    original_shipping_cost: Money = ZERO
    shipping_total: Money = ZERO

class OrderSnapshot(BaseModel):
    """Read-only view of a cart or order taken at computation time."""
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    currency_code: str
    items: tuple[LineItem, ...] = ()
    discounts: CartLevelDiscounts = Field(default_factory=CartLevelDiscounts)
    tax_total: Money = ZERO
