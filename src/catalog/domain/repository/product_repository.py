"""Abstract repository for the Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON document store,
in-memory) live in the infrastructure layer and in tests.

Contract shared by every implementation:

- All reads skip soft-deleted products, except ``exists``.
- ``save`` and ``update`` raise ProductAlreadyExists when the SKU is
  already held by *any* other record, soft-deleted ones included. This
  storage-level constraint is the authoritative uniqueness guarantee;
  the service's pre-check is only a fast path and can race.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def find_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def find_by_sku(self, sku: str) -> Product | None:
        """Return the product holding *sku* (exact match), or None."""

    @abstractmethod
    def find_by_name(self, name: str) -> list[Product]:
        """Return products whose name contains *name*, case-insensitively."""

    @abstractmethod
    def find_by_category(self, category: str) -> list[Product]:
        """Return products whose category contains *category*, case-insensitively."""

    @abstractmethod
    def find_active_products(self) -> list[Product]:
        ...

    @abstractmethod
    def find_in_stock_products(self) -> list[Product]:
        ...

    @abstractmethod
    def find_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[Product]:
        """Return products priced within [min_price, max_price], any currency."""

    @abstractmethod
    def search_products(self, query: str) -> list[Product]:
        """Free-text match over name, description, category and brand."""

    @abstractmethod
    def save(self, product: Product) -> Product:
        """Persist a new product and return the stored version."""

    @abstractmethod
    def update(self, product_id: str, product: Product) -> Product | None:
        """Overwrite the stored record, or return None if there is no such id."""

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        """Physically remove a record. Returns False if nothing was removed."""

    @abstractmethod
    def exists(self, product_id: str) -> bool:
        """True if any record (soft-deleted or not) has this id."""
