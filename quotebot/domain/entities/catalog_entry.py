from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CatalogKind(str, Enum):
    CATEGORY = "category"
    PRODUCT = "product"
    MATERIAL = "material"
    FINISH = "finish"


class PriceType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"
    PER_UNIT = "per_unit"


@dataclass(frozen=True)
class DimensionField:
    name: str
    unit: str = "inches"
    is_required: bool = True
    min_value: float = 0.0
    max_value: float | None = None

    def accepts(self, value: float) -> bool:
        if value <= self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        return True


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    kind: CatalogKind
    name: str
    aliases: tuple[str, ...] = ()
    parent_category_id: str | None = None  # products/materials/finishes only
    description: str | None = None
    external_id: int | None = None  # ERP identifier
    sort_order: int = 0
    # products: base price per piece; materials: price per unit area; finishes: see price_type
    unit_price: float = 0.0
    price_type: PriceType = PriceType.PER_UNIT
    dimension_fields: tuple[DimensionField, ...] = ()
    unit: str | None = None

    @property
    def searchable_names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)
