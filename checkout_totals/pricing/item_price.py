from checkout_totals.pricing.money import clamp
from checkout_totals.schemas.line_item import (
    LineItem,
    Money,
    NoDiscount,
    Promotional,
    VariantSale,
    WholesaleTier,
    ZERO,
)
from checkout_totals.schemas.totals import ResolvedPrice

def _promotional(unit_price: Money, tag: Promotional):
    # the reward engine already discounted unit_price
    return unit_price + clamp(tag.discount_amount_per_unit), unit_price

def _variant_sale(unit_price: Money, tag: VariantSale):
    discount = clamp(tag.discount_amount_per_unit)
    if tag.original_unit_price is not None and tag.original_unit_price > ZERO:
        original = tag.original_unit_price
    else:
        original = unit_price + discount
    # unit_price may have drifted from the discount fields on older records
    return original, clamp(original - discount)

def _wholesale_tier(unit_price: Money, tag: WholesaleTier, base_price: Money | None):
    original = unit_price
    for candidate in (base_price, tag.original_unit_price):
        if candidate is not None and candidate > ZERO:
            original = candidate
            break
    # a base price under the tier price shows no discount
    return max(original, unit_price), unit_price

def resolve_item_price(item: LineItem, base_price: Money | None = None) -> ResolvedPrice:
    """Resolve the undiscounted and charged unit price of one line.

    `base_price` is the caller's lookup of the variant's undiscounted price and
    is only consulted for wholesale tier lines.
    """
    unit_price = clamp(item.unit_price)
    tag = item.discount

    if isinstance(tag, NoDiscount):
        original, effective = unit_price, unit_price
    elif isinstance(tag, Promotional):
        original, effective = _promotional(unit_price, tag)
    elif isinstance(tag, VariantSale):
        original, effective = _variant_sale(unit_price, tag)
    elif isinstance(tag, WholesaleTier):
        original, effective = _wholesale_tier(unit_price, tag, base_price)
    else:
        raise TypeError(f"Unknown discount tag: {type(tag).__name__}")

    return ResolvedPrice(
        original_unit_price=original,
        effective_unit_price=effective,
        line_discount_amount=clamp(original - effective) * item.quantity,
    )
