from checkout_totals.schemas.cart import CartLevelDiscounts
from checkout_totals.schemas.line_item import ZERO
from checkout_totals.schemas.totals import OrderTotals, RevenueBreakdown, SummaryLine

def _with_detail(label: str, detail: str | None) -> str:
    return f"{label} ({detail})" if detail else label

def _format_percentage(value) -> str:
    return f"{value.normalize():f}%"

def summary_lines(totals: OrderTotals, discounts: CartLevelDiscounts) -> list[SummaryLine]:
    """Display lines for an order summary, in the order they are rendered.

    Zero discounts and zero tax are left out. Subtotal, Shipping and Total
    are always present.
    """
    lines = [SummaryLine(key="subtotal", label="Subtotal", amount=totals.original_subtotal)]

    item_discounts = (
        ("promotional_discount", "PWP Discount", totals.promotional_discount),
        ("variant_sale_discount", "Product Discount", totals.variant_sale_discount),
        ("wholesale_tier_discount", "Bulk Discount", totals.wholesale_tier_discount),
    )
    for key, label, amount in item_discounts:
        if amount > ZERO:
            lines.append(SummaryLine(key=key, label=label, amount=amount, is_discount=True))

    if totals.free_shipping_applied:
        lines.append(SummaryLine(
            key="shipping",
            label="Shipping (Free)",
            amount=totals.shipping,
            struck_amount=totals.original_shipping if totals.original_shipping > ZERO else None,
        ))
    else:
        lines.append(SummaryLine(key="shipping", label="Shipping", amount=totals.shipping))

    if totals.tax > ZERO:
        lines.append(SummaryLine(key="tax", label="Tax", amount=totals.tax))

    tier_label = discounts.tier_name or "Member"
    if discounts.tier_discount_percentage:
        tier_label = f"{tier_label} ({_format_percentage(discounts.tier_discount_percentage)} off)"
    points_detail = f"{discounts.points_redeemed} pts" if discounts.points_redeemed else None

    cart_discounts = (
        ("coupon_discount", _with_detail("Coupon Discount", discounts.coupon_code), totals.coupon_discount),
        ("points_discount", _with_detail("Points Discount", points_detail), totals.points_discount),
        ("membership_promo_discount", _with_detail("Member Discount", discounts.membership_promo_name), totals.membership_promo_discount),
        ("tier_discount", tier_label, totals.tier_discount),
    )
    for key, label, amount in cart_discounts:
        if amount > ZERO:
            lines.append(SummaryLine(key=key, label=label, amount=amount, is_discount=True))

    lines.append(SummaryLine(key="total", label="Total", amount=totals.grand_total))
    return lines

def revenue_breakdown(totals: OrderTotals) -> RevenueBreakdown:
    """Revenue figures for analytics. Tax is not revenue and is left out."""
    discount = (
        totals.promotional_discount
        + totals.variant_sale_discount
        + totals.wholesale_tier_discount
        + totals.coupon_discount
        + totals.points_discount
        + totals.membership_promo_discount
        + totals.tier_discount
    )
    gross = totals.original_subtotal
    net = gross + totals.shipping - discount
    return RevenueBreakdown(
        gross=gross,
        net=net if net > ZERO else ZERO,
        discount=discount,
        shipping=totals.shipping,
    )
