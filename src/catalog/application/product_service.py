"""Application service: Product use cases.

Orchestrates the Product aggregate and its value objects, delegating
persistence to the ``ProductRepository`` passed to the constructor.

Business rules enforced here:
- SKU must be unique (pre-check here, authoritative check in the store).
- Price and stock are validated by the Price / Quantity value objects.
- Deletion is a soft delete persisted through ``update``.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from catalog.application.dto import CreateProductDTO, UpdateProductDTO
from catalog.domain.exceptions import (
    ProductAlreadyExists,
    ProductNotFound,
    ProductOperationFailed,
    ValidationError,
)
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price, Quantity
from catalog.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

DEFAULT_CURRENCY = "USD"


class ProductService:
    """Stateless orchestrator over a ProductRepository.

    Safe to call concurrently for different ids; it holds nothing
    between calls besides the repository reference.
    """

    def __init__(self, repository: ProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product after enforcing SKU uniqueness.

        Raises:
            ProductAlreadyExists: if the SKU is already taken.
            InvalidAmount, UnsupportedCurrency, InvalidQuantity,
            ValidationError: if the input breaks a domain invariant.
        """
        sku = dto.sku.strip()
        log = logger.bind(sku=sku)

        if self._repo.find_by_sku(sku) is not None:
            log.warning("product.duplicate_sku")
            raise ProductAlreadyExists(sku)

        price = Price(dto.price, dto.currency or DEFAULT_CURRENCY)
        stock_quantity = Quantity(dto.stock_quantity)

        product = Product.create(
            name=dto.name,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            description=dto.description,
            category=dto.category,
            images=dto.images,
            brand=dto.brand,
        )
        if dto.is_active is not None:
            self._apply_is_active(product, dto.is_active)

        try:
            product = self._repo.save(product)
        except ProductAlreadyExists:
            # Lost the race against a concurrent create, or the SKU
            # belongs to a soft-deleted record.
            log.warning("product.duplicate_sku", source="store")
            raise

        log.info("product.created", product_id=product.id)
        return product

    def update_product(self, product_id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new SKU belongs to another product.
            ProductOperationFailed: if the store no longer holds the record.
        """
        product = self.find_product_by_id(product_id)
        log = logger.bind(product_id=product_id)

        if dto.sku is not None and dto.sku.strip() != product.sku:
            self._ensure_sku_available(dto.sku.strip(), product_id)

        if dto.name is not None:
            product.update_name(dto.name)
        if dto.description is not None:
            product.update_description(dto.description)
        if dto.sku is not None:
            product.update_sku(dto.sku)
        if dto.price is not None or dto.currency is not None:
            product.update_price(
                Price(
                    dto.price if dto.price is not None else product.price.amount,
                    dto.currency or product.price.currency,
                )
            )
        if dto.stock_quantity is not None:
            product.update_stock_quantity(Quantity(dto.stock_quantity))
        if dto.category is not None:
            product.update_category(dto.category)
        if dto.images is not None:
            product.update_images(dto.images)
        if dto.brand is not None:
            product.update_brand(dto.brand)
        if dto.is_active is not None:
            self._apply_is_active(product, dto.is_active)

        updated = self._persist(product_id, product, "update")
        log.info("product.updated")
        return updated

    def delete_product(self, product_id: str) -> None:
        """Soft-delete a product. Physical removal is not exposed here.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self.find_product_by_id(product_id)
        product.soft_delete()
        self._persist(product_id, product, "delete")
        logger.info("product.soft_deleted", product_id=product_id)

    def add_stock(self, product_id: str, quantity: int) -> Product:
        product = self.find_product_by_id(product_id)
        product.add_stock(Quantity(quantity))
        updated = self._persist(product_id, product, "restock")
        logger.info(
            "product.stock_added",
            product_id=product_id,
            quantity=quantity,
            stock=updated.stock_quantity.value,
        )
        return updated

    def reduce_stock(self, product_id: str, quantity: int) -> Product:
        """Take units out of stock.

        Raises:
            InsufficientStock: if fewer than *quantity* units are available.
        """
        product = self.find_product_by_id(product_id)
        product.reduce_stock(Quantity(quantity))
        updated = self._persist(product_id, product, "reduce stock of")
        logger.info(
            "product.stock_reduced",
            product_id=product_id,
            quantity=quantity,
            stock=updated.stock_quantity.value,
        )
        return updated

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all_products(self) -> list[Product]:
        return self._repo.find_all()

    def find_product_by_id(self, product_id: str) -> Product:
        """Retrieve a single, non-deleted product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.find_by_id(product_id)
        if product is None:
            raise ProductNotFound(product_id, "id")
        return product

    def find_products_by_name(self, name: str) -> list[Product]:
        return self._repo.find_by_name(name)

    def find_products_by_category(self, category: str) -> list[Product]:
        return self._repo.find_by_category(category)

    def find_active_products(self) -> list[Product]:
        return self._repo.find_active_products()

    def find_in_stock_products(self) -> list[Product]:
        return self._repo.find_in_stock_products()

    def find_products_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> list[Product]:
        if min_price < 0 or max_price < 0:
            raise ValidationError("Price range bounds cannot be negative")
        if min_price > max_price:
            raise ValidationError(
                f"Invalid price range: min {min_price} is greater than max {max_price}"
            )
        return self._repo.find_by_price_range(min_price, max_price)

    def search_products(self, query: str) -> list[Product]:
        """Passthrough to the store's own text matching."""
        return self._repo.search_products(query)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_sku_available(self, sku: str, product_id: str) -> None:
        holder = self._repo.find_by_sku(sku)
        if holder is not None and holder.id != product_id:
            logger.warning("product.duplicate_sku", sku=sku, product_id=product_id)
            raise ProductAlreadyExists(sku)

    def _persist(self, product_id: str, product: Product, operation: str) -> Product:
        updated = self._repo.update(product_id, product)
        if updated is None:
            logger.warning("product.update_missed", product_id=product_id)
            raise ProductOperationFailed(
                operation, f"Failed to {operation} product with ID '{product_id}'"
            )
        return updated

    @staticmethod
    def _apply_is_active(product: Product, is_active: bool) -> None:
        # Activation only goes one way from this layer.
        if is_active:
            product.activate()
        else:
            logger.warning("product.deactivation_ignored", product_id=product.id)
