import structlog

from checkout_totals.agents.postgres import PostgresAgent
from checkout_totals.agents.store import StoreAgent
from checkout_totals.errors import CartNotFoundError, OrderNotFoundError
from checkout_totals.pricing.pipeline import compute_order_totals
from checkout_totals.pricing.summary import revenue_breakdown, summary_lines
from checkout_totals.schemas.cart import OrderSnapshot
from checkout_totals.schemas.line_item import WholesaleTier
from checkout_totals.schemas.totals import OrderTotals, TotalsResponse
from checkout_totals.sync.snapshot import snapshot_from_raw

logger = structlog.get_logger()

async def fetch_base_prices(snapshot: OrderSnapshot, postgres_agent: PostgresAgent | None = None):
    """Base prices for the wholesale lines of a snapshot, keyed by variant id."""
    variant_ids = sorted({
        item.variant_id for item in snapshot.items
        if isinstance(item.discount, WholesaleTier) and item.variant_id
    })
    if not variant_ids:
        return {}

    postgres_agent = postgres_agent or PostgresAgent()
    return await postgres_agent.get_base_prices(variant_ids, snapshot.currency_code)

async def totals_for_snapshot(snapshot: OrderSnapshot, postgres_agent: PostgresAgent | None = None) -> OrderTotals:
    base_prices = await fetch_base_prices(snapshot, postgres_agent)
    totals = compute_order_totals(snapshot, base_prices)
    logger.info(
        "totals_computed",
        snapshot_id=snapshot.id,
        currency_code=snapshot.currency_code,
        grand_total=str(totals.grand_total),
    )
    return totals

async def build_totals_response(snapshot: OrderSnapshot, postgres_agent: PostgresAgent | None = None) -> TotalsResponse:
    totals = await totals_for_snapshot(snapshot, postgres_agent)
    return TotalsResponse(
        id=snapshot.id,
        currency_code=snapshot.currency_code,
        totals=totals,
        lines=summary_lines(totals, snapshot.discounts),
        revenue=revenue_breakdown(totals),
    )

async def fetch_cart_snapshot(cart_id: str, store_agent: StoreAgent | None = None) -> OrderSnapshot:
    raw_cart = await (store_agent or StoreAgent()).get_cart(cart_id)
    if raw_cart is None:
        raise CartNotFoundError(f"Cart with id {cart_id} not found")
    return snapshot_from_raw(raw_cart)

async def fetch_order_snapshot(order_id: str, store_agent: StoreAgent | None = None) -> OrderSnapshot:
    raw_order = await (store_agent or StoreAgent()).get_order(order_id)
    if raw_order is None:
        raise OrderNotFoundError(f"Order with id {order_id} not found")
    return snapshot_from_raw(raw_order)
