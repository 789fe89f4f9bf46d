from __future__ import annotations

from abc import ABC, abstractmethod

from quotebot.domain.entities.catalog_entry import CatalogEntry


class CatalogStorePort(ABC):
    """Read-only access to the catalog. Every list is ordered by (sort_order, name)."""

    @abstractmethod
    def list_categories(self) -> list[CatalogEntry]:
        raise NotImplementedError

    @abstractmethod
    def get_category(self, category_id: str) -> CatalogEntry | None:
        raise NotImplementedError

    @abstractmethod
    def list_products(self, category_id: str) -> list[CatalogEntry]:
        raise NotImplementedError

    @abstractmethod
    def list_all_products(self) -> list[CatalogEntry]:
        """Products across every category, used when the category is not known yet."""
        raise NotImplementedError

    @abstractmethod
    def list_materials(self, category_id: str) -> list[CatalogEntry]:
        raise NotImplementedError

    @abstractmethod
    def list_finishes(self, product_category_id: str) -> list[CatalogEntry]:
        raise NotImplementedError
