from __future__ import annotations

from dataclasses import dataclass

from quotebot.domain.entities.catalog_entry import CatalogEntry
from quotebot.domain.entities.collected_data import CollectedData, Dimension


class QuoteIncompleteError(ValueError):
    """Raised when a QuoteRequest is built from data that is still missing fields."""


@dataclass(frozen=True)
class QuoteRequest:
    product: CatalogEntry
    materials: tuple[CatalogEntry, ...]
    finishes: tuple[CatalogEntry, ...]
    dimensions: tuple[Dimension, ...]
    quantities: tuple[int, ...]
    sku_count: int = 1

    @staticmethod
    def from_collected(data: CollectedData) -> "QuoteRequest":
        missing: list[str] = []
        if data.product is None:
            missing.append("product")
        elif not data.dimensions_complete:
            missing.append("dimensions")
        if not data.materials:
            missing.append("materials")
        if not data.finishes_confirmed:
            missing.append("finishes")
        if not data.quantities:
            missing.append("quantities")
        if missing:
            raise QuoteIncompleteError(f"Quote request is missing: {', '.join(missing)}")

        return QuoteRequest(
            product=data.product,
            materials=data.materials,
            finishes=data.finishes,
            dimensions=data.dimensions,
            quantities=data.quantities,
            sku_count=max(1, data.sku_count),
        )


@dataclass(frozen=True)
class PriceBreakdown:
    quantity: int
    area: float
    base_price: float
    material_cost: float
    finish_cost: float
    subtotal: float  # before discount
    discount_rate: float
    discount_amount: float
    discounted_subtotal: float
    tax: float
    shipping: float
    total_price: float
    unit_price: float


@dataclass(frozen=True)
class Quote:
    quote_number: str
    user_key: str
    request: QuoteRequest
    tiers: tuple[PriceBreakdown, ...]
    created_at: float
    valid_until: float
