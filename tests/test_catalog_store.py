"""
Tests for loading and listing the catalog.
"""

from __future__ import annotations

import json

from quotebot.domain.entities.catalog_entry import CatalogKind, PriceType
from quotebot.infrastructure.catalog.json_catalog_store import JsonCatalogStore


def test_seed_catalog_is_scoped_by_category():
    catalog = JsonCatalogStore()
    assert [c.name for c in catalog.list_categories()] == ["Mylor Bag", "Label", "Folding Carton"]
    assert [p.name for p in catalog.list_products("cat-label")] == ["Roll Label", "Sheet Label"]
    assert all(m.parent_category_id == "cat-folding-carton" for m in catalog.list_materials("cat-folding-carton"))
    assert catalog.get_category("missing") is None


def test_catalog_file(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            {
                "categories": [{"id": "c1", "name": "Pouches", "sort_order": 1}],
                "products": [
                    {
                        "id": "p2",
                        "name": "Zipper Pouch",
                        "parent_category_id": "c1",
                        "sort_order": 2,
                        "unit_price": 0.09,
                        "dimension_fields": [{"name": "Width", "max_value": 20}, {"name": "Height", "max_value": 20}],
                    },
                    {"id": "p1", "name": "Flat Pouch", "parent_category_id": "c1", "sort_order": 1},
                ],
                "finishes": [{"id": "f1", "name": "Foil", "parent_category_id": "c1", "unit_price": 100, "price_type": "fixed"}],
            }
        ),
        encoding="utf-8",
    )

    catalog = JsonCatalogStore.from_file(path)

    assert [p.id for p in catalog.list_products("c1")] == ["p1", "p2"]
    zipper = catalog.list_all_products()[1]
    assert zipper.kind == CatalogKind.PRODUCT
    assert [f.name for f in zipper.dimension_fields] == ["Width", "Height"]
    assert catalog.list_finishes("c1")[0].price_type == PriceType.FIXED
    assert catalog.list_materials("c1") == []
