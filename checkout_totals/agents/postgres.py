from decimal import Decimal
from sqlmodel import select, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine

from checkout_totals.config import settings
from checkout_totals.models.variant_price import VariantPrice, VariantPriceBase

class PostgresAgent:
    def __init__(self, engine=None):
        self.engine = engine or create_async_engine(settings.DATABASE_URL)

    async def get_session(self):
        async with AsyncSession(self.engine) as session:
            yield session

    async def insert_variant_price(self, variant_price: VariantPriceBase):
        async for db in self.get_session():
            db_variant_price = VariantPrice(
                variant_id=variant_price.variant_id,
                currency_code=variant_price.currency_code.lower(),
                amount=variant_price.amount,
                min_quantity=variant_price.min_quantity,
                max_quantity=variant_price.max_quantity
            )
            db.add(db_variant_price)
            await db.commit()
            await db.refresh(db_variant_price)
            return db_variant_price
        return None

    async def get_base_prices(self, variant_ids: list[str], currency_code: str) -> dict[str, Decimal]:
        """Undiscounted base price per variant, used to show wholesale savings."""
        if not variant_ids:
            return {}

        async for db in self.get_session():
            statement = select(VariantPrice).where(
                VariantPrice.variant_id.in_(variant_ids),
                VariantPrice.currency_code == currency_code.lower(),
                or_(VariantPrice.min_quantity.is_(None), VariantPrice.min_quantity <= 1),
            )
            result = (await db.exec(statement)).all()

            base_prices = {}
            for price in result:
                # keep the highest when a variant has both an open and a qty-1 row
                current = base_prices.get(price.variant_id)
                if current is None or price.amount > current:
                    base_prices[price.variant_id] = price.amount
            return base_prices
        return {}
