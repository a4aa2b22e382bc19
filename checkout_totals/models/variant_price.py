import uuid
from decimal import Decimal
from sqlmodel import SQLModel, Field

class VariantPriceBase(SQLModel):
    variant_id: str = Field(index=True)
    currency_code: str
    amount: Decimal = Field(max_digits=18, decimal_places=4)
    # None for the base price, set for wholesale quantity tiers
    min_quantity: int | None = Field(default=None)
    max_quantity: int | None = Field(default=None)

class VariantPrice(VariantPriceBase, table=True):
    __tablename__ = "variant_prices"
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
