from pydantic import BaseModel, ConfigDict

from checkout_totals.schemas.line_item import Money, ZERO

class ResolvedPrice(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_unit_price: Money
    effective_unit_price: Money
    line_discount_amount: Money

class ItemDiscountTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_subtotal: Money = ZERO
    promotional_discount: Money = ZERO
    variant_sale_discount: Money = ZERO
    wholesale_tier_discount: Money = ZERO
    subtotal_after_item_discounts: Money = ZERO

class CartDiscountAmounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    coupon_discount: Money = ZERO
    points_discount: Money = ZERO
    membership_promo_discount: Money = ZERO
    tier_discount: Money = ZERO
    shipping: Money = ZERO
    original_shipping: Money = ZERO
    free_shipping_applied: bool = False

class OrderTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_subtotal: Money
    promotional_discount: Money
    variant_sale_discount: Money
    wholesale_tier_discount: Money
    coupon_discount: Money
    points_discount: Money
    membership_promo_discount: Money
    tier_discount: Money
    shipping: Money
    tax: Money
    grand_total: Money
    subtotal_after_item_discounts: Money
    # display only: the shipping cost that was waived
    original_shipping: Money
    free_shipping_applied: bool

class SummaryLine(BaseModel):
    key: str
    label: str
    amount: Money
    is_discount: bool = False
    struck_amount: Money | None = None

class RevenueBreakdown(BaseModel):
    gross: Money
    net: Money
    discount: Money
    shipping: Money

class TotalsResponse(BaseModel):
    id: str | None
    currency_code: str
    totals: OrderTotals
    lines: list[SummaryLine]
    revenue: RevenueBreakdown

class UpdateAmountRequest(BaseModel):
    cart_id: str

class PaymentAdjustment(BaseModel):
    payment_collection_id: str
    cart_id: str
    currency_code: str
    previous_amount: int
    new_amount: int
    changed: bool
