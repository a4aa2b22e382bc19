from checkout_totals.pricing.money import clamp
from checkout_totals.schemas.line_item import Money
from checkout_totals.schemas.totals import CartDiscountAmounts, ItemDiscountTotals, OrderTotals

def compose_totals(items: ItemDiscountTotals, cart: CartDiscountAmounts, tax: Money) -> OrderTotals:
    """Assemble the final breakdown. grand_total is what gets charged."""
    tax = clamp(tax)
    grand_total = clamp(
        items.subtotal_after_item_discounts
        + cart.shipping
        + tax
        - cart.coupon_discount
        - cart.points_discount
        - cart.membership_promo_discount
        - cart.tier_discount
    )

    return OrderTotals(
        original_subtotal=clamp(items.original_subtotal),
        promotional_discount=clamp(items.promotional_discount),
        variant_sale_discount=clamp(items.variant_sale_discount),
        wholesale_tier_discount=clamp(items.wholesale_tier_discount),
        coupon_discount=cart.coupon_discount,
        points_discount=cart.points_discount,
        membership_promo_discount=cart.membership_promo_discount,
        tier_discount=cart.tier_discount,
        shipping=cart.shipping,
        tax=tax,
        grand_total=grand_total,
        subtotal_after_item_discounts=clamp(items.subtotal_after_item_discounts),
        original_shipping=cart.original_shipping,
        free_shipping_applied=cart.free_shipping_applied,
    )
