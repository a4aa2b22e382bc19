"""Shared fixtures and fake collaborators for checkout totals tests."""

from decimal import Decimal

import pytest


class FakeStoreAgent:
    def __init__(self, carts=None, orders=None):
        self.carts = carts or {}
        self.orders = orders or {}
        self.cart_requests = []

    async def get_cart(self, cart_id: str):
        self.cart_requests.append(cart_id)
        return self.carts.get(cart_id)

    async def get_order(self, order_id: str):
        return self.orders.get(order_id)


class FakePaymentAgent:
    def __init__(self, collections=None):
        self.collections = collections or {}
        self.updates = []

    async def get_payment_collection(self, payment_collection_id: str):
        return self.collections.get(payment_collection_id)

    async def update_amount(self, payment_collection_id: str, amount: int, metadata: dict):
        self.updates.append((payment_collection_id, amount, metadata))
        self.collections[payment_collection_id]["amount"] = amount
        return self.collections[payment_collection_id]


class FakePostgresAgent:
    def __init__(self, base_prices=None):
        self.base_prices = base_prices or {}
        self.requests = []

    async def get_base_prices(self, variant_ids, currency_code):
        self.requests.append((list(variant_ids), currency_code))
        return {
            variant_id: Decimal(str(price))
            for variant_id, price in self.base_prices.items()
            if variant_id in variant_ids
        }


@pytest.fixture
def raw_cart():
    """A cart with one line of each discount kind, as the commerce backend returns it."""
    return {
        "id": "cart_01",
        "currency_code": "MYR",
        "discount_total": 700,
        "tax_total": 0,
        "shipping_total": 1000,
        "items": [
            {
                "id": "item_plain",
                "variant_id": "variant_plain",
                "title": "Cleansing Oil",
                "unit_price": 3000,
                "quantity": 1,
                "metadata": {},
            },
            {
                "id": "item_pwp",
                "variant_id": "variant_pwp",
                "title": "Travel Toner",
                "unit_price": 800,
                "quantity": 1,
                "metadata": {"is_pwp_item": True, "pwp_discount_amount": 200},
            },
            {
                "id": "item_sale",
                "variant_id": "variant_sale",
                "title": "Serum",
                "unit_price": 4500,
                "quantity": 2,
                "metadata": {
                    "is_variant_discount": True,
                    "variant_discount_amount": 500,
                    "original_unit_price": 5000,
                },
            },
            {
                "id": "item_bulk",
                "variant_id": "variant_bulk",
                "title": "Sheet Mask",
                "unit_price": 900,
                "quantity": 10,
                "metadata": {"is_bulk_price": True},
            },
        ],
        "shipping_methods": [{"name": "Standard", "amount": 1000}],
        "metadata": {
            "applied_coupon_code": "WELCOME5",
            "points_to_redeem": 300,
            "points_discount_amount": 300,
            "tier_discount_amount": 400,
            "tier_discount_percentage": 5,
            "tier_name": "Gold",
        },
    }


@pytest.fixture
def store_agent(raw_cart):
    return FakeStoreAgent(carts={"cart_01": raw_cart}, orders={"order_01": {**raw_cart, "id": "order_01"}})


@pytest.fixture
def payment_agent():
    return FakePaymentAgent(collections={"paycol_01": {"id": "paycol_01", "amount": 25000}})


@pytest.fixture
def postgres_agent():
    return FakePostgresAgent(base_prices={"variant_bulk": 1000})
