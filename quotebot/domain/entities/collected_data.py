from __future__ import annotations

from dataclasses import dataclass

from quotebot.domain.entities.catalog_entry import CatalogEntry


@dataclass(frozen=True)
class Dimension:
    name: str
    value: float
    unit: str = "inches"


@dataclass(frozen=True)
class CollectedData:
    wants_quote: bool = False
    category: CatalogEntry | None = None
    product: CatalogEntry | None = None
    dimensions: tuple[Dimension, ...] = ()
    current_dimension_index: int = 0  # next dimension field to ask for
    materials: tuple[CatalogEntry, ...] = ()
    finishes: tuple[CatalogEntry, ...] = ()
    finishes_confirmed: bool = False  # user answered the finish question (possibly "none")
    quantities: tuple[int, ...] = ()  # one entry per quoted tier
    sku_count: int = 1

    @property
    def dimensions_complete(self) -> bool:
        if self.product is None:
            return False
        required = [f for f in self.product.dimension_fields if f.is_required]
        have = {d.name for d in self.dimensions}
        return all(f.name in have for f in required)

    @property
    def missing_dimension_names(self) -> list[str]:
        if self.product is None:
            return []
        have = {d.name for d in self.dimensions}
        return [f.name for f in self.product.dimension_fields if f.name not in have]
