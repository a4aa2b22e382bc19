"""Tests for per-line price resolution."""

from decimal import Decimal

from checkout_totals.pricing.item_price import resolve_item_price
from checkout_totals.schemas.line_item import LineItem, NoDiscount, Promotional, VariantSale, WholesaleTier


def _line(unit_price, quantity=1, discount=None):
    return LineItem(unit_price=unit_price, quantity=quantity, discount=discount or NoDiscount())


class TestNoDiscount:
    def test_original_equals_effective(self):
        resolved = resolve_item_price(_line(1200, quantity=3))

        assert resolved.original_unit_price == 1200
        assert resolved.effective_unit_price == 1200
        assert resolved.line_discount_amount == 0

    def test_negative_unit_price_is_clamped(self):
        resolved = resolve_item_price(_line(-50))

        assert resolved.original_unit_price == 0
        assert resolved.effective_unit_price == 0


class TestPromotional:
    def test_original_is_reconstructed_from_discount(self):
        """unit_price 800 with 200 off per unit was originally 1000."""
        resolved = resolve_item_price(_line(800, quantity=2, discount=Promotional(discount_amount_per_unit=200)))

        assert resolved.original_unit_price == 1000
        assert resolved.effective_unit_price == 800
        assert resolved.line_discount_amount == 400

    def test_missing_discount_amount_means_no_discount(self):
        resolved = resolve_item_price(_line(800, discount=Promotional()))

        assert resolved.original_unit_price == 800
        assert resolved.line_discount_amount == 0


class TestVariantSale:
    def test_uses_captured_original_price(self):
        tag = VariantSale(discount_amount_per_unit=500, original_unit_price=5000)
        resolved = resolve_item_price(_line(4500, quantity=2, discount=tag))

        assert resolved.original_unit_price == 5000
        assert resolved.effective_unit_price == 4500
        assert resolved.line_discount_amount == 1000

    def test_falls_back_to_unit_price_plus_discount(self):
        """Older records carry no original price."""
        resolved = resolve_item_price(_line(700, discount=VariantSale(discount_amount_per_unit=300)))

        assert resolved.original_unit_price == 1000
        assert resolved.effective_unit_price == 700

    def test_effective_price_is_recomputed_not_read(self):
        """A drifted unit_price does not change what the line is charged."""
        tag = VariantSale(discount_amount_per_unit=500, original_unit_price=5000)
        resolved = resolve_item_price(_line(4800, discount=tag))

        assert resolved.effective_unit_price == 4500
        assert resolved.line_discount_amount == 500

    def test_zero_original_price_counts_as_absent(self):
        tag = VariantSale(discount_amount_per_unit=300, original_unit_price=0)
        resolved = resolve_item_price(_line(700, discount=tag))

        assert resolved.original_unit_price == 1000

    def test_discount_larger_than_original_clamps_to_zero(self):
        tag = VariantSale(discount_amount_per_unit=900, original_unit_price=600)
        resolved = resolve_item_price(_line(0, discount=tag))

        assert resolved.effective_unit_price == 0
        assert resolved.line_discount_amount == 600


class TestWholesaleTier:
    def test_base_price_lookup_supplies_original(self):
        resolved = resolve_item_price(_line(900, quantity=10, discount=WholesaleTier()), base_price=Decimal("1000"))

        assert resolved.original_unit_price == 1000
        assert resolved.effective_unit_price == 900
        assert resolved.line_discount_amount == 1000

    def test_lookup_wins_over_captured_original(self):
        tag = WholesaleTier(original_unit_price=950)
        resolved = resolve_item_price(_line(900, discount=tag), base_price=Decimal("1000"))

        assert resolved.original_unit_price == 1000

    def test_captured_original_used_without_lookup(self):
        resolved = resolve_item_price(_line(900, discount=WholesaleTier(original_unit_price=950)))

        assert resolved.original_unit_price == 950

    def test_no_original_shows_no_discount(self):
        resolved = resolve_item_price(_line(900, quantity=4, discount=WholesaleTier()))

        assert resolved.original_unit_price == 900
        assert resolved.effective_unit_price == 900
        assert resolved.line_discount_amount == 0

    def test_base_price_below_tier_price_is_ignored(self):
        resolved = resolve_item_price(_line(900, discount=WholesaleTier()), base_price=Decimal("850"))

        assert resolved.original_unit_price == 900
        assert resolved.line_discount_amount == 0
