"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from catalog.application.dto import CreateProductDTO, UpdateProductDTO
from catalog.domain.exceptions import DomainException
from catalog.domain.model.product import Product
from catalog.infrastructure.bootstrap import product_service


def _display_product(product: Product) -> None:
    """Shared formatting for displaying a single product."""
    click.echo(f"Product {product.id}")
    click.echo(f"  Name:        {product.name}")
    click.echo(f"  SKU:         {product.sku}")
    click.echo(f"  Price:       {product.price}")
    click.echo(f"  Stock:       {product.stock_quantity}")
    click.echo(f"  Category:    {product.category or '-'}")
    click.echo(f"  Brand:       {product.brand or '-'}")
    click.echo(f"  Description: {product.description or '-'}")
    click.echo(f"  Active:      {'yes' if product.is_active else 'no'}")
    for url in product.images:
        click.echo(f"  Image:       {url}")
    click.echo(f"  Updated:     {product.updated_at.strftime('%Y-%m-%d %H:%M UTC')}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", "stock", required=True, type=int, help="Units in stock.")
@click.option("--currency", default=None, help="USD, EUR, INR or RUB (default USD).")
@click.option("--description", default=None)
@click.option("--category", default=None)
@click.option("--brand", default=None)
@click.option("--image", "images", multiple=True, help="Image URL (repeatable).")
def product_add(
    name: str,
    sku: str,
    price: str,
    stock: int,
    currency: str | None,
    description: str | None,
    category: str | None,
    brand: str | None,
    images: tuple[str, ...],
) -> None:
    """Add a new product to the catalog."""
    try:
        dto = CreateProductDTO(
            name=name,
            sku=sku,
            price=price,
            stock_quantity=stock,
            currency=currency,
            description=description,
            category=category,
            brand=brand,
            images=list(images) or None,
        )
        product = product_service().create_product(dto)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except ValueError as exc:
        raise click.BadParameter(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--search", default=None, help="Free-text match on name, description, category, brand.")
@click.option("--category", default=None, help="Only products in this category.")
def product_list(search: str | None, category: str | None) -> None:
    """List all products in the catalog."""
    service = product_service()
    if search:
        products = service.search_products(search)
    elif category:
        products = service.find_products_by_category(category)
    else:
        products = service.find_all_products()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'SKU':<16} {'Name':<24} {'Price':>14} {'Stock':>8}")
    click.echo("-" * 100)
    for p in products:
        click.echo(
            f"{p.id:<34} {p.sku:<16} {p.name:<24} {str(p.price):>14} {p.stock_quantity.value:>8}"
        )


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    try:
        product = product_service().find_product_by_id(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(product)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None)
@click.option("--sku", default=None)
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--currency", default=None)
@click.option("--stock", "stock", default=None, type=int, help="New stock level.")
@click.option("--description", default=None)
@click.option("--category", default=None)
@click.option("--brand", default=None)
@click.option("--activate", is_flag=True, default=False, help="Mark the product active.")
def product_update(
    product_id: str,
    name: str | None,
    sku: str | None,
    price: str | None,
    currency: str | None,
    stock: int | None,
    description: str | None,
    category: str | None,
    brand: str | None,
    activate: bool,
) -> None:
    """Update selected fields of a product."""
    try:
        dto = UpdateProductDTO(
            name=name,
            sku=sku,
            price=price,
            currency=currency,
            stock_quantity=stock,
            description=description,
            category=category,
            brand=brand,
            is_active=True if activate else None,
        )
        product = product_service().update_product(product_id, dto)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except ValueError as exc:
        raise click.BadParameter(str(exc))

    click.echo(f"Product {product.id} updated.")
    _display_product(product)


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Soft-delete a product (it disappears from every listing)."""
    try:
        product_service().delete_product(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted.")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--add", "add", type=int, default=None, help="Units to add.")
@click.option("--reduce", "reduce", type=int, default=None, help="Units to take out.")
def product_stock(product_id: str, add: int | None, reduce: int | None) -> None:
    """Add or remove stock for a product."""
    if (add is None) == (reduce is None):
        raise click.ClickException("Pass exactly one of --add or --reduce")

    service = product_service()
    try:
        if add is not None:
            product = service.add_stock(product_id, add)
        else:
            product = service.reduce_stock(product_id, reduce)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} stock is now {product.stock_quantity}")
