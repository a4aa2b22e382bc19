from typing import Iterable, Mapping

from checkout_totals.pricing.item_price import resolve_item_price
from checkout_totals.pricing.money import clamp
from checkout_totals.schemas.line_item import LineItem, Money, Promotional, VariantSale, WholesaleTier, ZERO
from checkout_totals.schemas.totals import ItemDiscountTotals

# each tag feeds exactly one category, lines without a tag feed none
_CATEGORY_BY_TAG = {
    Promotional: "promotional_discount",
    VariantSale: "variant_sale_discount",
    WholesaleTier: "wholesale_tier_discount",
}

def aggregate_item_discounts(
    items: Iterable[LineItem],
    base_prices: Mapping[str, Money] | None = None,
) -> ItemDiscountTotals:
    base_prices = base_prices or {}
    original_subtotal = ZERO
    categories = {name: ZERO for name in _CATEGORY_BY_TAG.values()}

    for item in items:
        base_price = base_prices.get(item.variant_id) if item.variant_id else None
        resolved = resolve_item_price(item, base_price)
        original_subtotal += resolved.original_unit_price * item.quantity

        category = _CATEGORY_BY_TAG.get(type(item.discount))
        if category is not None:
            categories[category] += resolved.line_discount_amount

    return ItemDiscountTotals(
        original_subtotal=original_subtotal,
        subtotal_after_item_discounts=clamp(original_subtotal - sum(categories.values(), ZERO)),
        **categories,
    )
