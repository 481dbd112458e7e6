"""JSON-file-backed document store implementing ProductRepository.

The file holds a JSON array of product documents:

    {"id", "name", "description", "sku", "price", "currency",
     "stockQuantity", "category", "images", "isActive", "isDeleted",
     "brand", "createdAt", "updatedAt"}

A process-wide lock makes each read-modify-write atomic, which is what
lets ``save``/``update`` enforce the unique SKU constraint reliably.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable

from catalog.domain.exceptions import ProductAlreadyExists
from catalog.domain.model.identity import EntityIdentity
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price, Quantity
from catalog.domain.repository.product_repository import ProductRepository


_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """One lock per store file, shared by every repository instance."""
    with _file_locks_guard:
        return _file_locks.setdefault(path.resolve(), threading.Lock())


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = _lock_for(file_path)
        self._ensure_file()

    # --- Reads ----------------------------------------------------------------

    def find_by_id(self, product_id: str) -> Product | None:
        doc = self._load().get(product_id)
        if doc is None or doc["isDeleted"]:
            return None
        return self._to_entity(doc)

    def find_all(self) -> list[Product]:
        return self._find(lambda doc: True)

    def find_by_sku(self, sku: str) -> Product | None:
        matches = self._find(lambda doc: doc["sku"] == sku)
        return matches[0] if matches else None

    def find_by_name(self, name: str) -> list[Product]:
        return self._find(lambda doc: _contains(doc["name"], name))

    def find_by_category(self, category: str) -> list[Product]:
        return self._find(lambda doc: _contains(doc.get("category"), category))

    def find_active_products(self) -> list[Product]:
        return self._find(lambda doc: doc["isActive"])

    def find_in_stock_products(self) -> list[Product]:
        return self._find(lambda doc: doc["stockQuantity"] > 0)

    def find_by_price_range(self, min_price: Decimal, max_price: Decimal) -> list[Product]:
        return self._find(
            lambda doc: min_price <= Decimal(str(doc["price"])) <= max_price
        )

    def search_products(self, query: str) -> list[Product]:
        fields = ("name", "description", "category", "brand")
        return self._find(
            lambda doc: any(_contains(doc.get(f), query) for f in fields)
        )

    def exists(self, product_id: str) -> bool:
        return product_id in self._load()

    # --- Writes ---------------------------------------------------------------

    def save(self, product: Product) -> Product:
        with self._lock:
            docs = self._load()
            self._check_sku_free(docs, product.sku, product.id)
            docs[product.id] = self._to_document(product)
            self._persist(docs)
        return self._to_entity(docs[product.id])

    def update(self, product_id: str, product: Product) -> Product | None:
        with self._lock:
            docs = self._load()
            if product_id not in docs:
                return None
            self._check_sku_free(docs, product.sku, product_id)
            doc = self._to_document(product)
            doc["id"] = product_id
            docs[product_id] = doc
            self._persist(docs)
        return self._to_entity(doc)

    def delete(self, product_id: str) -> bool:
        with self._lock:
            docs = self._load()
            if docs.pop(product_id, None) is None:
                return False
            self._persist(docs)
        return True

    # --- Serialization helpers ------------------------------------------------

    def _find(self, predicate: Callable[[dict[str, Any]], bool]) -> list[Product]:
        return [
            self._to_entity(doc)
            for doc in self._load().values()
            if not doc["isDeleted"] and predicate(doc)
        ]

    @staticmethod
    def _check_sku_free(docs: dict[str, dict[str, Any]], sku: str, owner_id: str) -> None:
        for doc_id, doc in docs.items():
            if doc["sku"] == sku and doc_id != owner_id:
                raise ProductAlreadyExists(sku)

    @staticmethod
    def _to_entity(doc: dict[str, Any]) -> Product:
        return Product(
            identity=EntityIdentity(
                id=doc["id"],
                created_at=datetime.fromisoformat(doc["createdAt"]),
                updated_at=datetime.fromisoformat(doc["updatedAt"]),
            ),
            name=doc["name"],
            sku=doc["sku"],
            price=Price(Decimal(str(doc["price"])), doc.get("currency", "USD")),
            stock_quantity=Quantity(doc["stockQuantity"]),
            description=doc.get("description"),
            category=doc.get("category"),
            images=doc.get("images", []),
            brand=doc.get("brand"),
            is_active=doc.get("isActive", True),
            is_deleted=doc.get("isDeleted", False),
        )

    @staticmethod
    def _to_document(product: Product) -> dict[str, Any]:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "sku": product.sku,
            "price": float(product.price.amount),
            "currency": product.price.currency,
            "stockQuantity": product.stock_quantity.value,
            "category": product.category,
            "images": product.images,
            "isActive": product.is_active,
            "isDeleted": product.is_deleted,
            "brand": product.brand,
            "createdAt": product.created_at.isoformat(),
            "updatedAt": product.updated_at.isoformat(),
        }

    def _load(self) -> dict[str, dict[str, Any]]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {doc["id"]: doc for doc in raw}

    def _persist(self, docs: dict[str, dict[str, Any]]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(list(docs.values()), indent=2) + "\n", encoding="utf-8"
        )
        tmp_path.replace(self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
