"""Product aggregate.

The Product is the aggregate root of the catalog. It owns its Price and
stock Quantity by value, and every change goes through a named business
method that refreshes ``updated_at``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from catalog.domain.exceptions import InsufficientStock, ValidationError
from catalog.domain.model.identity import EntityIdentity
from catalog.domain.model.value_objects import Price, Quantity


def _required_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"Product {label} cannot be empty")
    return value.strip()


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None


class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    products without re-running the factory rules.

    Fields are exposed read-only; there is no ``deactivate()``, products
    can only be activated or soft-deleted from this layer.
    """

    def __init__(
        self,
        identity: EntityIdentity,
        name: str,
        sku: str,
        price: Price,
        stock_quantity: Quantity,
        description: str | None = None,
        category: str | None = None,
        images: Iterable[str] | None = None,
        brand: str | None = None,
        is_active: bool = True,
        is_deleted: bool = False,
    ) -> None:
        self._identity = identity
        self._name = name
        self._sku = sku
        self._price = price
        self._stock_quantity = stock_quantity
        self._description = description
        self._category = category
        self._images = list(images or [])
        self._brand = brand
        self._is_active = is_active
        self._is_deleted = is_deleted

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        sku: str,
        price: Price,
        stock_quantity: Quantity,
        description: str | None = None,
        category: str | None = None,
        images: Iterable[str] | None = None,
        brand: str | None = None,
    ) -> Product:
        return Product(
            identity=EntityIdentity.new(),
            name=_required_text(name, "name"),
            sku=_required_text(sku, "SKU"),
            price=price,
            stock_quantity=stock_quantity,
            description=_optional_text(description),
            category=_optional_text(category),
            images=images,
            brand=_optional_text(brand),
        )

    # --- Accessors ------------------------------------------------------------

    @property
    def identity(self) -> EntityIdentity:
        return self._identity

    @property
    def id(self) -> str:
        return self._identity.id

    @property
    def created_at(self) -> datetime:
        return self._identity.created_at

    @property
    def updated_at(self) -> datetime:
        return self._identity.updated_at

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def sku(self) -> str:
        return self._sku

    @property
    def price(self) -> Price:
        return self._price

    @property
    def stock_quantity(self) -> Quantity:
        return self._stock_quantity

    @property
    def category(self) -> str | None:
        return self._category

    @property
    def images(self) -> list[str]:
        return list(self._images)

    @property
    def brand(self) -> str | None:
        return self._brand

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def is_deleted(self) -> bool:
        return self._is_deleted

    # --- Descriptive fields ---------------------------------------------------

    def update_name(self, name: str) -> None:
        self._name = _required_text(name, "name")
        self._identity.touch()

    def update_description(self, description: str | None) -> None:
        self._description = _optional_text(description)
        self._identity.touch()

    def update_sku(self, sku: str) -> None:
        """Change the SKU.

        Uniqueness is not checked here; it needs other products, so it
        belongs to the application service and the store.
        """
        self._sku = _required_text(sku, "SKU")
        self._identity.touch()

    def update_category(self, category: str | None) -> None:
        self._category = _optional_text(category)
        self._identity.touch()

    def update_brand(self, brand: str | None) -> None:
        self._brand = _optional_text(brand)
        self._identity.touch()

    def update_images(self, images: Iterable[str] | None) -> None:
        self._images = list(images or [])
        self._identity.touch()

    def update_price(self, price: Price) -> None:
        self._price = price
        self._identity.touch()

    def update_stock_quantity(self, quantity: Quantity) -> None:
        self._stock_quantity = quantity
        self._identity.touch()

    # --- Lifecycle ------------------------------------------------------------

    def activate(self) -> None:
        self._is_active = True
        self._identity.touch()

    def soft_delete(self) -> None:
        self._is_deleted = True
        self._identity.touch()

    def restore(self) -> None:
        self._is_deleted = False
        self._identity.touch()

    # --- Stock ----------------------------------------------------------------

    def is_in_stock(self) -> bool:
        return self._stock_quantity.is_positive()

    def can_reduce_stock(self, quantity: Quantity) -> bool:
        return self._stock_quantity.is_sufficient_for(quantity)

    def reduce_stock(self, quantity: Quantity) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStock (leaving stock untouched) if there are
        not enough units.
        """
        if not self.can_reduce_stock(quantity):
            raise InsufficientStock(
                available=self._stock_quantity.value, requested=quantity.value
            )
        self._stock_quantity = self._stock_quantity - quantity
        self._identity.touch()

    def add_stock(self, quantity: Quantity) -> None:
        self._stock_quantity = self._stock_quantity + quantity
        self._identity.touch()

    # --- Identity -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, sku={self._sku!r}, name={self._name!r})"
