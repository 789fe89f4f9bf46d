"""
Tests for quote pricing.
"""

from __future__ import annotations

import pytest

from quotebot.application.use_cases.pricing import PricingEngine
from quotebot.domain.entities.catalog_entry import CatalogEntry, CatalogKind, PriceType
from quotebot.domain.entities.collected_data import Dimension
from quotebot.domain.entities.quote import QuoteRequest

PRODUCT = CatalogEntry(id="p", kind=CatalogKind.PRODUCT, name="Flat Pouch", unit_price=0.05)
MATERIAL = CatalogEntry(id="m", kind=CatalogKind.MATERIAL, name="PET + White PE", unit_price=0.004)
SIZE = (Dimension("Width", 5.0), Dimension("Height", 4.0))


def _finish(price_type: PriceType, unit_price: float) -> CatalogEntry:
    return CatalogEntry(id=f"f-{price_type.value}", kind=CatalogKind.FINISH, name="Finish", unit_price=unit_price, price_type=price_type)


@pytest.mark.parametrize(
    "quantity, rate",
    [(99, 0.0), (100, 0.05), (499, 0.05), (500, 0.10), (999, 0.10), (1000, 0.15), (50000, 0.15)],
)
def test_discount_boundaries(quantity, rate):
    assert PricingEngine().discount_rate(quantity) == rate


def test_breakdown_without_discount():
    tier = PricingEngine().price_tier(PRODUCT, [MATERIAL], [], SIZE, 99)
    assert tier.area == 20.0
    assert tier.base_price == pytest.approx(4.95)
    assert tier.material_cost == pytest.approx(7.92)
    assert tier.discount_amount == 0.0
    assert tier.tax == pytest.approx(12.87 * 0.08)
    assert tier.shipping == 15.0
    assert tier.total_price == 28.9
    assert tier.unit_price == round(28.9 / 99, 4)


def test_discount_applies_before_tax():
    tier = PricingEngine().price_tier(PRODUCT, [MATERIAL], [], SIZE, 1000)
    assert tier.subtotal == pytest.approx(130.0)
    assert tier.discount_amount == pytest.approx(19.5)
    assert tier.discounted_subtotal == pytest.approx(110.5)
    assert tier.tax == pytest.approx(8.84)
    assert tier.shipping == 0.0
    assert tier.total_price == 119.34


def test_finish_price_types():
    engine = PricingEngine()
    per_unit = engine.price_tier(PRODUCT, [MATERIAL], [_finish(PriceType.PER_UNIT, 0.01)], SIZE, 1000)
    fixed = engine.price_tier(PRODUCT, [MATERIAL], [_finish(PriceType.FIXED, 150.0)], SIZE, 1000)
    percentage = engine.price_tier(PRODUCT, [MATERIAL], [_finish(PriceType.PERCENTAGE, 10.0)], SIZE, 1000)

    assert per_unit.finish_cost == pytest.approx(10.0)
    assert fixed.finish_cost == 150.0
    assert percentage.finish_cost == pytest.approx(13.0)


def test_free_shipping_needs_more_than_threshold():
    engine = PricingEngine()
    at_threshold = CatalogEntry(id="a", kind=CatalogKind.PRODUCT, name="A", unit_price=2.0)
    above = CatalogEntry(id="b", kind=CatalogKind.PRODUCT, name="B", unit_price=2.02)

    assert engine.price_tier(at_threshold, [], [], (), 50).shipping == 15.0
    assert engine.price_tier(above, [], [], (), 50).shipping == 0.0


def test_tiers_are_priced_independently():
    engine = PricingEngine()
    request = QuoteRequest(product=PRODUCT, materials=(MATERIAL,), finishes=(), dimensions=SIZE, quantities=(99, 1000))
    tiers = engine.price_request(request)

    assert [t.quantity for t in tiers] == [99, 1000]
    assert [t.discount_rate for t in tiers] == [0.0, 0.15]
    assert tiers[1] == engine.price_tier(PRODUCT, [MATERIAL], [], SIZE, 1000)


def test_quantity_must_be_positive():
    with pytest.raises(ValueError):
        PricingEngine().price_tier(PRODUCT, [MATERIAL], [], SIZE, 0)


def test_build_quote():
    engine = PricingEngine(clock=lambda: 1_700_000_000.0, quote_valid_days=30)
    request = QuoteRequest(product=PRODUCT, materials=(MATERIAL,), finishes=(), dimensions=SIZE, quantities=(5000,))
    quote = engine.build_quote("15551234567", request)

    assert quote.quote_number.startswith("QT1700000000000")
    assert len(quote.quote_number) == len("QT1700000000000") + 3
    assert quote.valid_until == 1_700_000_000.0 + 30 * 86400
    assert len(quote.tiers) == 1


def test_same_input_same_prices():
    engine = PricingEngine()
    first = engine.price_tier(PRODUCT, [MATERIAL], [], SIZE, 2500)
    second = engine.price_tier(PRODUCT, [MATERIAL], [], SIZE, 2500)
    assert first == second
