from __future__ import annotations

from typing import Any

from quotebot.domain.entities.catalog_entry import CatalogEntry, CatalogKind, DimensionField, PriceType


def entry_to_dict(entry: CatalogEntry) -> dict[str, Any]:
    return {
        "id": entry.id,
        "kind": entry.kind.value,
        "name": entry.name,
        "aliases": list(entry.aliases),
        "parent_category_id": entry.parent_category_id,
        "description": entry.description,
        "external_id": entry.external_id,
        "sort_order": entry.sort_order,
        "unit_price": entry.unit_price,
        "price_type": entry.price_type.value,
        "dimension_fields": [
            {
                "name": f.name,
                "unit": f.unit,
                "is_required": f.is_required,
                "min_value": f.min_value,
                "max_value": f.max_value,
            }
            for f in entry.dimension_fields
        ],
        "unit": entry.unit,
    }


def entry_from_dict(data: dict[str, Any], kind: CatalogKind | None = None) -> CatalogEntry:
    """Build an entry from its JSON form. `kind` fills in entries listed under a typed section."""
    resolved_kind = CatalogKind(data["kind"]) if data.get("kind") else kind
    if resolved_kind is None:
        raise ValueError(f"Catalog entry {data.get('id')!r} has no kind")
    return CatalogEntry(
        id=str(data["id"]),
        kind=resolved_kind,
        name=data["name"],
        aliases=tuple(data.get("aliases", [])),
        parent_category_id=data.get("parent_category_id"),
        description=data.get("description"),
        external_id=data.get("external_id"),
        sort_order=data.get("sort_order", 0),
        unit_price=float(data.get("unit_price", 0.0)),
        price_type=PriceType(data.get("price_type", PriceType.PER_UNIT.value)),
        dimension_fields=tuple(DimensionField(**f) for f in data.get("dimension_fields", [])),
        unit=data.get("unit"),
    )
