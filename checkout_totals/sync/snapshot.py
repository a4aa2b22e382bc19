import structlog

from checkout_totals.config import settings
from checkout_totals.pricing.money import to_money
from checkout_totals.schemas.cart import CartLevelDiscounts, OrderSnapshot
from checkout_totals.schemas.line_item import LineItem, NoDiscount, Promotional, VariantSale, WholesaleTier, ZERO

logger = structlog.get_logger()

def is_flag_set(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    return False

def _as_dict(value, field: str) -> dict:
    if isinstance(value, dict):
        return value
    if value is not None:
        logger.warning("malformed_object", field=field, value_type=type(value).__name__)
    return {}

def _optional_money(value, field: str):
    amount = to_money(value, field)
    return amount if amount > ZERO else None

def discount_tag_from_metadata(metadata: dict | None, line_id: str | None = None):
    """Pick the single discount tag a line's metadata flags describe.

    When several flags are set the promotional flag wins, then the variant
    sale flag, then the wholesale flag.
    """
    metadata = _as_dict(metadata, "items.metadata")
    flags = [
        name for name in ("is_pwp_item", "is_variant_discount", "is_bulk_price")
        if is_flag_set(metadata.get(name))
    ]
    if len(flags) > 1:
        logger.warning("conflicting_discount_flags", line_id=line_id, flags=flags, selected=flags[0])

    if not flags:
        return NoDiscount()

    if flags[0] == "is_pwp_item":
        return Promotional(
            discount_amount_per_unit=to_money(metadata.get("pwp_discount_amount"), "pwp_discount_amount"),
        )
    if flags[0] == "is_variant_discount":
        return VariantSale(
            discount_amount_per_unit=to_money(metadata.get("variant_discount_amount"), "variant_discount_amount"),
            original_unit_price=_optional_money(metadata.get("original_unit_price"), "original_unit_price"),
        )
    return WholesaleTier(
        original_unit_price=_optional_money(metadata.get("original_unit_price"), "original_unit_price"),
    )

def _optional_str(value):
    return str(value) if value is not None else None

def _optional_text(value, field: str):
    """Display text such as names and codes. Numbers are kept as text, anything else is dropped."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    logger.warning("malformed_text", field=field, value_type=type(value).__name__)
    return None

def _quantity(value) -> int:
    quantity = to_money(value, "quantity")
    if quantity != quantity.to_integral_value():
        logger.warning("fractional_quantity", value=str(value))
    return int(quantity)

def line_items_from_raw(raw_items: list | None) -> tuple[LineItem, ...]:
    if raw_items is not None and not isinstance(raw_items, list):
        logger.warning("malformed_items", value_type=type(raw_items).__name__)
        return ()

    items = []
    for raw in raw_items or []:
        if not isinstance(raw, dict):
            logger.warning("skipping_malformed_line", value_type=type(raw).__name__)
            continue

        line_id = _optional_str(raw.get("id"))
        quantity = _quantity(raw.get("quantity"))
        if quantity <= 0:
            logger.warning("skipping_line_without_quantity", line_id=line_id, quantity=raw.get("quantity"))
            continue

        items.append(LineItem(
            id=line_id,
            variant_id=_optional_str(raw.get("variant_id")),
            title=_optional_text(raw.get("title"), "title"),
            unit_price=to_money(raw.get("unit_price"), "unit_price"),
            quantity=quantity,
            discount=discount_tag_from_metadata(raw.get("metadata"), line_id),
        ))
    return tuple(items)

def cart_discounts_from_raw(raw: dict) -> CartLevelDiscounts:
    metadata = _as_dict(raw.get("metadata"), "metadata")

    points_redeemed = int(to_money(metadata.get("points_to_redeem"), "points_to_redeem"))
    tier_percentage = to_money(metadata.get("tier_discount_percentage"), "tier_discount_percentage")

    return CartLevelDiscounts(
        coupon_total=to_money(raw.get("discount_total"), "discount_total"),
        coupon_code=_optional_text(metadata.get("applied_coupon_code"), "applied_coupon_code"),
        points_redeemed=max(points_redeemed, 0),
        points_discount=to_money(metadata.get("points_discount_amount"), "points_discount_amount"),
        membership_promo_discount=to_money(
            metadata.get("applied_membership_promo_discount"), "applied_membership_promo_discount"
        ),
        membership_promo_name=_optional_text(
            metadata.get("applied_membership_promo_name"), "applied_membership_promo_name"
        ),
        tier_discount=to_money(metadata.get("tier_discount_amount"), "tier_discount_amount"),
        tier_discount_percentage=tier_percentage if tier_percentage > ZERO else None,
        tier_name=_optional_text(metadata.get("tier_name"), "tier_name"),
        free_shipping_applied=is_flag_set(metadata.get("free_shipping_applied")),
        original_shipping_cost=to_money(metadata.get("original_shipping_cost"), "original_shipping_cost"),
        shipping_total=to_money(raw.get("shipping_total"), "shipping_total"),
    )

def snapshot_from_raw(raw: dict) -> OrderSnapshot:
    """Build an immutable snapshot from a commerce-backend cart or order payload."""
    currency_code = _optional_text(raw.get("currency_code"), "currency_code") or settings.DEFAULT_CURRENCY
    return OrderSnapshot(
        id=_optional_str(raw.get("id")),
        currency_code=currency_code.lower(),
        items=line_items_from_raw(raw.get("items")),
        discounts=cart_discounts_from_raw(raw),
        tax_total=to_money(raw.get("tax_total"), "tax_total"),
    )
