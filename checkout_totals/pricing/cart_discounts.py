import structlog

from checkout_totals.pricing.money import clamp
from checkout_totals.schemas.cart import CartLevelDiscounts
from checkout_totals.schemas.line_item import Money, ZERO
from checkout_totals.schemas.totals import CartDiscountAmounts

logger = structlog.get_logger()

def resolve_cart_discounts(discounts: CartLevelDiscounts, promotional_discount: Money) -> CartDiscountAmounts:
    """Cart level amounts to subtract, with the coupon de-duplicated.

    The coupon engine's total may already contain the promotional line
    discounts, so those are taken back out before the coupon is applied.
    """
    coupon_total = clamp(discounts.coupon_total)
    coupon_discount = clamp(coupon_total - clamp(promotional_discount))
    if coupon_total > ZERO and coupon_total < promotional_discount:
        logger.warning(
            "coupon_total_below_promotional_discount",
            coupon_total=str(coupon_total),
            promotional_discount=str(promotional_discount),
        )

    membership_promo_discount = clamp(discounts.membership_promo_discount)
    tier_discount = clamp(discounts.tier_discount)
    if membership_promo_discount > ZERO and tier_discount > ZERO:
        logger.warning(
            "membership_promo_and_tier_discount_both_applied",
            membership_promo_discount=str(membership_promo_discount),
            tier_discount=str(tier_discount),
        )

    shipping_total = clamp(discounts.shipping_total)
    if discounts.free_shipping_applied:
        shipping = ZERO
        original_shipping = clamp(discounts.original_shipping_cost) or shipping_total
    else:
        shipping = shipping_total
        original_shipping = shipping_total

    return CartDiscountAmounts(
        coupon_discount=coupon_discount,
        points_discount=clamp(discounts.points_discount),
        membership_promo_discount=membership_promo_discount,
        tier_discount=tier_discount,
        shipping=shipping,
        original_shipping=original_shipping,
        free_shipping_applied=discounts.free_shipping_applied,
    )
