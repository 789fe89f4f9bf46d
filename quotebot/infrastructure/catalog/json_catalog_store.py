from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from quotebot.application.ports.catalog_store import CatalogStorePort
from quotebot.domain.entities.catalog_entry import CatalogEntry, CatalogKind
from quotebot.infrastructure.catalog.catalog_data import SEED_CATALOG
from quotebot.infrastructure.catalog.entry_codec import entry_from_dict

# top-level keys of a catalog file and the kind of the entries listed under each
_SECTIONS = {
    "categories": CatalogKind.CATEGORY,
    "products": CatalogKind.PRODUCT,
    "materials": CatalogKind.MATERIAL,
    "finishes": CatalogKind.FINISH,
}


def _sort_key(entry: CatalogEntry) -> tuple[int, str]:
    return entry.sort_order, entry.name.lower()


class JsonCatalogStore(CatalogStorePort):
    """Read-only catalog held in memory, loaded from the seed data or a JSON file."""

    def __init__(self, entries: Iterable[CatalogEntry] | None = None) -> None:
        self._entries = sorted(SEED_CATALOG if entries is None else entries, key=_sort_key)
        self._categories = {e.id: e for e in self._entries if e.kind == CatalogKind.CATEGORY}

    @classmethod
    def from_file(cls, path: str | Path) -> "JsonCatalogStore":
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)

        entries: list[CatalogEntry] = []
        for section, kind in _SECTIONS.items():
            for item in raw.get(section, []):
                entries.append(entry_from_dict(item, kind=kind))
        logging.getLogger(__name__).info("Catalog loaded", extra={"path": str(path), "entries": len(entries)})
        return cls(entries)

    def _of_kind(self, kind: CatalogKind, parent_id: str | None = None) -> list[CatalogEntry]:
        return [
            entry
            for entry in self._entries
            if entry.kind == kind and (parent_id is None or entry.parent_category_id == parent_id)
        ]

    def list_categories(self) -> list[CatalogEntry]:
        return self._of_kind(CatalogKind.CATEGORY)

    def get_category(self, category_id: str) -> CatalogEntry | None:
        return self._categories.get(category_id)

    def list_products(self, category_id: str) -> list[CatalogEntry]:
        return self._of_kind(CatalogKind.PRODUCT, category_id)

    def list_all_products(self) -> list[CatalogEntry]:
        return self._of_kind(CatalogKind.PRODUCT)

    def list_materials(self, category_id: str) -> list[CatalogEntry]:
        return self._of_kind(CatalogKind.MATERIAL, category_id)

    def list_finishes(self, product_category_id: str) -> list[CatalogEntry]:
        return self._of_kind(CatalogKind.FINISH, product_category_id)
