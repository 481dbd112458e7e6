"""Data Transfer Objects: the contracts between the boundaries and the service.

pydantic v2 models, immutable (``frozen=True``). On the wire they use
camelCase (``stockQuantity``, ``isActive``) and in Python snake_case;
both spellings are accepted on input.

Shape checks live here (types, lengths, URL syntax). Business ranges
such as "price > 0" are left to the value objects so their typed errors
reach the caller.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``StockAdjustmentDTO``: input for stock movements.
- ``ProductDTO``: output with all product fields.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from catalog.domain.model.product import Product

_URL = TypeAdapter(HttpUrl)

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


def _check_image_urls(images: list[str] | None) -> list[str] | None:
    if images is None:
        return None
    for url in images:
        try:
            _URL.validate_python(url)
        except ValueError as exc:
            raise ValueError(f"Invalid image URL: {url!r}") from exc
    return images


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Product creation request."""

    model_config = _MODEL_CONFIG

    name: str = Field(min_length=1, max_length=100)
    sku: str = Field(min_length=1, max_length=50)
    price: Decimal
    stock_quantity: int
    description: str | None = Field(default=None, max_length=1000)
    category: str | None = Field(default=None, max_length=50)
    images: list[str] | None = None
    brand: str | None = Field(default=None, max_length=50)
    currency: str | None = None
    is_active: bool | None = None

    @field_validator("images")
    @classmethod
    def images_must_be_urls(cls, v: list[str] | None) -> list[str] | None:
        return _check_image_urls(v)


class UpdateProductDTO(BaseModel):
    """Partial update request.

    All fields are optional. Only supplied (non-None) fields are applied.
    """

    model_config = _MODEL_CONFIG

    name: str | None = Field(default=None, max_length=100)
    sku: str | None = Field(default=None, max_length=50)
    price: Decimal | None = None
    stock_quantity: int | None = None
    description: str | None = Field(default=None, max_length=1000)
    category: str | None = Field(default=None, max_length=50)
    images: list[str] | None = None
    brand: str | None = Field(default=None, max_length=50)
    currency: str | None = None
    is_active: bool | None = None

    @field_validator("images")
    @classmethod
    def images_must_be_urls(cls, v: list[str] | None) -> list[str] | None:
        return _check_image_urls(v)


class StockAdjustmentDTO(BaseModel):
    model_config = _MODEL_CONFIG

    quantity: int


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductDTO(BaseModel):
    """Product as shown to API clients."""

    model_config = _MODEL_CONFIG

    id: str
    name: str
    description: str | None
    sku: str
    price: float
    currency: str
    stock_quantity: int
    category: str | None
    images: list[str]
    is_active: bool
    brand: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            sku=product.sku,
            price=float(product.price.amount),
            currency=product.price.currency,
            stock_quantity=product.stock_quantity.value,
            category=product.category,
            images=product.images,
            is_active=product.is_active,
            brand=product.brand,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
