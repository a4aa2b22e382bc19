from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, HTTPException, Request

from checkout_totals.agents.payment import PaymentAgent
from checkout_totals.agents.postgres import PostgresAgent
from checkout_totals.agents.store import StoreAgent
from checkout_totals.errors import (
    AgentError,
    CartNotFoundError,
    OrderNotFoundError,
    PaymentCollectionNotFoundError,
)
from checkout_totals.logs import configure_logging
from checkout_totals.schemas.totals import PaymentAdjustment, TotalsResponse, UpdateAmountRequest
from checkout_totals.sync.payment import adjust_payment_amount
from checkout_totals.sync.snapshot import snapshot_from_raw
from checkout_totals.sync.totals import build_totals_response, fetch_cart_snapshot, fetch_order_snapshot

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    app.state.postgres_agent = PostgresAgent()
    yield
    await app.state.postgres_agent.engine.dispose()

app = FastAPI(lifespan=lifespan)

def get_store_agent():
    return StoreAgent()

def get_payment_agent():
    return PaymentAgent()

def get_postgres_agent(request: Request):
    return request.app.state.postgres_agent

@app.post("/totals", response_model=TotalsResponse)
async def compute_totals(raw: dict, postgres_agent: PostgresAgent = Depends(get_postgres_agent)):
    snapshot = snapshot_from_raw(raw)
    return await build_totals_response(snapshot, postgres_agent)

@app.get("/carts/{cart_id}/totals", response_model=TotalsResponse)
async def get_cart_totals(
    cart_id: str,
    store_agent: StoreAgent = Depends(get_store_agent),
    postgres_agent: PostgresAgent = Depends(get_postgres_agent),
):
    try:
        snapshot = await fetch_cart_snapshot(cart_id, store_agent)
    except CartNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AgentError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return await build_totals_response(snapshot, postgres_agent)

@app.get("/orders/{order_id}/totals", response_model=TotalsResponse)
async def get_order_totals(
    order_id: str,
    store_agent: StoreAgent = Depends(get_store_agent),
    postgres_agent: PostgresAgent = Depends(get_postgres_agent),
):
    try:
        snapshot = await fetch_order_snapshot(order_id, store_agent)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AgentError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return await build_totals_response(snapshot, postgres_agent)

@app.post("/payment-collections/{payment_collection_id}/update-amount", response_model=PaymentAdjustment)
async def update_payment_amount(
    payment_collection_id: str,
    body: UpdateAmountRequest,
    store_agent: StoreAgent = Depends(get_store_agent),
    payment_agent: PaymentAgent = Depends(get_payment_agent),
    postgres_agent: PostgresAgent = Depends(get_postgres_agent),
):
    try:
        return await adjust_payment_amount(
            payment_collection_id,
            body.cart_id,
            store_agent=store_agent,
            payment_agent=payment_agent,
            postgres_agent=postgres_agent,
        )
    except (CartNotFoundError, PaymentCollectionNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AgentError as e:
        raise HTTPException(status_code=502, detail=str(e))
