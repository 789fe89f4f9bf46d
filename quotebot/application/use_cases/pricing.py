from __future__ import annotations

import secrets
import time
from typing import Callable, Sequence

from quotebot.domain.entities.catalog_entry import CatalogEntry, PriceType
from quotebot.domain.entities.collected_data import Dimension
from quotebot.domain.entities.quote import PriceBreakdown, Quote, QuoteRequest

# (minimum quantity, discount rate), highest threshold first; thresholds are inclusive
DEFAULT_DISCOUNT_TIERS: tuple[tuple[int, float], ...] = ((1000, 0.15), (500, 0.10), (100, 0.05))

SECONDS_PER_DAY = 86400


class PricingEngine:
    """Pure price computation. Every quantity tier is priced on its own."""

    def __init__(
        self,
        tax_rate: float = 0.08,
        shipping_fee: float = 15.0,
        free_shipping_threshold: float = 100.0,
        discount_tiers: Sequence[tuple[int, float]] = DEFAULT_DISCOUNT_TIERS,
        quote_valid_days: int = 30,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._tax_rate = tax_rate
        self._shipping_fee = shipping_fee
        self._free_shipping_threshold = free_shipping_threshold
        self._discount_tiers = tuple(sorted(discount_tiers, key=lambda tier: tier[0], reverse=True))
        self._quote_valid_days = quote_valid_days
        self._clock = clock

    def discount_rate(self, quantity: int) -> float:
        for threshold, rate in self._discount_tiers:
            if quantity >= threshold:
                return rate
        return 0.0

    def price_tier(
        self,
        product: CatalogEntry,
        materials: Sequence[CatalogEntry],
        finishes: Sequence[CatalogEntry],
        dimensions: Sequence[Dimension],
        quantity: int,
    ) -> PriceBreakdown:
        if quantity <= 0:
            raise ValueError(f"quantity must be positive, got {quantity}")

        area = 1.0
        for dimension in dimensions:
            area *= dimension.value

        base_price = product.unit_price * quantity
        material_cost = sum(material.unit_price for material in materials) * area * quantity
        finish_cost = sum(self._finish_cost(finish, base_price, material_cost, quantity) for finish in finishes)

        subtotal = base_price + material_cost + finish_cost
        discount_rate = self.discount_rate(quantity)
        discount_amount = subtotal * discount_rate
        discounted_subtotal = subtotal - discount_amount

        tax = discounted_subtotal * self._tax_rate
        shipping = 0.0 if discounted_subtotal > self._free_shipping_threshold else self._shipping_fee
        total_price = round(discounted_subtotal + tax + shipping, 2)

        return PriceBreakdown(
            quantity=quantity,
            area=area,
            base_price=base_price,
            material_cost=material_cost,
            finish_cost=finish_cost,
            subtotal=subtotal,
            discount_rate=discount_rate,
            discount_amount=discount_amount,
            discounted_subtotal=discounted_subtotal,
            tax=tax,
            shipping=shipping,
            total_price=total_price,
            unit_price=round(total_price / quantity, 4),
        )

    def price_request(self, request: QuoteRequest) -> tuple[PriceBreakdown, ...]:
        return tuple(
            self.price_tier(request.product, request.materials, request.finishes, request.dimensions, quantity)
            for quantity in request.quantities
        )

    def build_quote(self, user_key: str, request: QuoteRequest) -> Quote:
        created_at = self._clock()
        return Quote(
            quote_number=f"QT{int(created_at * 1000)}{secrets.randbelow(1000):03d}",
            user_key=user_key,
            request=request,
            tiers=self.price_request(request),
            created_at=created_at,
            valid_until=created_at + self._quote_valid_days * SECONDS_PER_DAY,
        )

    @staticmethod
    def _finish_cost(finish: CatalogEntry, base_price: float, material_cost: float, quantity: int) -> float:
        if finish.price_type == PriceType.FIXED:
            return finish.unit_price
        if finish.price_type == PriceType.PERCENTAGE:
            return (base_price + material_cost) * (finish.unit_price / 100)
        return finish.unit_price * quantity
