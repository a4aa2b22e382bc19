"""Tests for the base price lookup against an in-memory database."""

import asyncio
from decimal import Decimal

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from checkout_totals.agents.postgres import PostgresAgent
from checkout_totals.models.variant_price import VariantPrice, VariantPriceBase


async def _agent_with_prices(prices):
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine) as session:
        for price in prices:
            session.add(price)
        await session.commit()

    return PostgresAgent(engine=engine)


class TestGetBasePrices:
    def test_returns_base_tier_only(self):
        async def scenario():
            agent = await _agent_with_prices([
                VariantPrice(variant_id="variant_bulk", currency_code="myr", amount=Decimal("1000")),
                VariantPrice(variant_id="variant_bulk", currency_code="myr", amount=Decimal("900"), min_quantity=10),
                VariantPrice(variant_id="variant_bulk", currency_code="sgd", amount=Decimal("40")),
                VariantPrice(variant_id="variant_other", currency_code="myr", amount=Decimal("500"), min_quantity=1),
            ])
            return await agent.get_base_prices(["variant_bulk", "variant_other"], "MYR")

        base_prices = asyncio.run(scenario())

        assert base_prices == {"variant_bulk": Decimal("1000"), "variant_other": Decimal("500")}

    def test_no_variants_skips_the_query(self):
        agent = PostgresAgent(engine=object())

        assert asyncio.run(agent.get_base_prices([], "myr")) == {}


class TestInsertVariantPrice:
    def test_inserted_price_is_found_by_lookup(self):
        async def scenario():
            agent = await _agent_with_prices([])
            inserted = await agent.insert_variant_price(
                VariantPriceBase(variant_id="variant_new", currency_code="MYR", amount=Decimal("1250"))
            )
            await agent.insert_variant_price(
                VariantPriceBase(variant_id="variant_new", currency_code="myr", amount=Decimal("1100"), min_quantity=6)
            )
            return inserted, await agent.get_base_prices(["variant_new"], "myr")

        inserted, base_prices = asyncio.run(scenario())

        assert inserted.id is not None
        assert inserted.currency_code == "myr"
        assert base_prices == {"variant_new": Decimal("1250")}
