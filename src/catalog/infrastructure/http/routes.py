"""Product HTTP routes.

Thin layer over ``ProductService``: parse the request into a DTO, call the
service, wrap the result in a JSend envelope. Domain exceptions are not
caught here; the handlers in ``errors.py`` translate them.

Endpoints are plain ``def`` functions, so FastAPI runs each request in its
worker threadpool.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from catalog.application.dto import (
    CreateProductDTO,
    ProductDTO,
    StockAdjustmentDTO,
    UpdateProductDTO,
)
from catalog.application.product_service import ProductService
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import MAX_PRICE
from catalog.infrastructure.http import responses

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def _serialize(product: Product) -> dict[str, Any]:
    return ProductDTO.from_entity(product).model_dump(mode="json", by_alias=True)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    dto: CreateProductDTO,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """Create a new product. 409 if the SKU is taken."""
    product = service.create_product(dto)
    return responses.success(_serialize(product))


@router.get("")
def list_products(
    search: str | None = None,
    category: str | None = None,
    in_stock: bool | None = None,
    active: bool | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    """List non-deleted products.

    At most one filter is applied, in this order of precedence:
    ``search``, ``category``, price range, ``in_stock``, ``active``.
    """
    if search:
        products = service.search_products(search)
    elif category:
        products = service.find_products_by_category(category)
    elif min_price is not None or max_price is not None:
        products = service.find_products_by_price_range(
            min_price if min_price is not None else Decimal("0"),
            max_price if max_price is not None else MAX_PRICE,
        )
    elif in_stock:
        products = service.find_in_stock_products()
    elif active:
        products = service.find_active_products()
    else:
        products = service.find_all_products()

    return responses.success([_serialize(p) for p in products])


@router.get("/{product_id}")
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    return responses.success(_serialize(service.find_product_by_id(product_id)))


@router.patch("/{product_id}")
def update_product(
    product_id: str,
    dto: UpdateProductDTO,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    product = service.update_product(product_id, dto)
    return responses.success(_serialize(product))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Response:
    service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{product_id}/stock/add")
def add_stock(
    product_id: str,
    dto: StockAdjustmentDTO,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    product = service.add_stock(product_id, dto.quantity)
    return responses.success(_serialize(product))


@router.post("/{product_id}/stock/reduce")
def reduce_stock(
    product_id: str,
    dto: StockAdjustmentDTO,
    service: ProductService = Depends(get_product_service),
) -> dict[str, Any]:
    product = service.reduce_stock(product_id, dto.quantity)
    return responses.success(_serialize(product))
