import asyncio
from collections import Counter
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog

from checkout_totals.agents.payment import PaymentAgent
from checkout_totals.agents.postgres import PostgresAgent
from checkout_totals.agents.store import StoreAgent
from checkout_totals.errors import PaymentCollectionNotFoundError
from checkout_totals.pricing.money import to_minor_units, to_money
from checkout_totals.schemas.totals import PaymentAdjustment
from checkout_totals.sync.totals import fetch_cart_snapshot, totals_for_snapshot

logger = structlog.get_logger()

# one lock per cart, so a double submit cannot interleave two adjustments;
# an entry lives only while some adjustment for that cart holds or awaits it
_cart_locks: dict[str, asyncio.Lock] = {}
_cart_lock_users: Counter = Counter()

@asynccontextmanager
async def _cart_lock(cart_id: str):
    lock = _cart_locks.setdefault(cart_id, asyncio.Lock())
    _cart_lock_users[cart_id] += 1
    try:
        async with lock:
            yield
    finally:
        _cart_lock_users[cart_id] -= 1
        if _cart_lock_users[cart_id] <= 0:
            del _cart_lock_users[cart_id]
            del _cart_locks[cart_id]

async def adjust_payment_amount(
    payment_collection_id: str,
    cart_id: str,
    store_agent: StoreAgent | None = None,
    payment_agent: PaymentAgent | None = None,
    postgres_agent: PostgresAgent | None = None,
) -> PaymentAdjustment:
    """Bring the payment collection amount in line with the cart's grand total.

    The total is recomputed from the latest cart snapshot on every call, right
    before the customer pays.
    """
    payment_agent = payment_agent or PaymentAgent()

    async with _cart_lock(cart_id):
        snapshot = await fetch_cart_snapshot(cart_id, store_agent)
        totals = await totals_for_snapshot(snapshot, postgres_agent)
        correct_amount = to_minor_units(totals.grand_total, snapshot.currency_code)

        payment_collection = await payment_agent.get_payment_collection(payment_collection_id)
        if payment_collection is None:
            raise PaymentCollectionNotFoundError(f"Payment collection {payment_collection_id} not found")

        current_amount = int(to_money(payment_collection.get("amount"), "amount"))
        if current_amount == correct_amount:
            logger.info("payment_amount_already_correct", cart_id=cart_id, amount=correct_amount)
            return PaymentAdjustment(
                payment_collection_id=payment_collection_id,
                cart_id=cart_id,
                currency_code=snapshot.currency_code,
                previous_amount=current_amount,
                new_amount=correct_amount,
                changed=False,
            )

        await payment_agent.update_amount(
            payment_collection_id,
            correct_amount,
            {
                "cart_id": cart_id,
                "original_amount": str(current_amount),
                "corrected_amount": str(correct_amount),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        logger.info(
            "payment_amount_updated",
            cart_id=cart_id,
            payment_collection_id=payment_collection_id,
            previous_amount=current_amount,
            new_amount=correct_amount,
        )

        return PaymentAdjustment(
            payment_collection_id=payment_collection_id,
            cart_id=cart_id,
            currency_code=snapshot.currency_code,
            previous_amount=current_amount,
            new_amount=correct_amount,
            changed=True,
        )
