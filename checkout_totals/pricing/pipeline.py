from typing import Mapping

from checkout_totals.pricing.cart_discounts import resolve_cart_discounts
from checkout_totals.pricing.composer import compose_totals
from checkout_totals.pricing.item_discounts import aggregate_item_discounts
from checkout_totals.schemas.cart import OrderSnapshot
from checkout_totals.schemas.line_item import Money
from checkout_totals.schemas.totals import OrderTotals

def compute_order_totals(snapshot: OrderSnapshot, base_prices: Mapping[str, Money] | None = None) -> OrderTotals:
    """Compute the totals of a cart or order snapshot.

    Every surface that shows or charges a total goes through here. The
    result is never cached: call again whenever the snapshot changes.
    """
    item_totals = aggregate_item_discounts(snapshot.items, base_prices)
    cart_amounts = resolve_cart_discounts(snapshot.discounts, item_totals.promotional_discount)
    return compose_totals(item_totals, cart_amounts, snapshot.tax_total)
