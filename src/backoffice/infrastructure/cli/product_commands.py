"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.list_products import ListProductsHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import unit_of_work
from backoffice.infrastructure.cli.output import CliContext, display_products, emit_json


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", "stock_quantity", default=0, type=int, help="Units in stock.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--inactive", is_flag=True, default=False, help="Create the product hidden from sale.")
@click.pass_obj
def product_add(
    ctx: CliContext,
    name: str,
    sku: str,
    price: str,
    stock_quantity: int,
    description: str,
    inactive: bool,
) -> None:
    """Add a new product to the catalogue."""
    handler = AddProductHandler(uow_factory=unit_of_work)

    try:
        dto = handler.handle(
            ctx.actor,
            name=name,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
            is_active=not inactive,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dto)
    else:
        click.echo(f"Product #{dto.id} '{dto.name}' ({dto.sku}) added at ${dto.price}")


@click.command("list")
@click.option("--search", default=None, help="Match name, description or SKU.")
@click.option("--active/--inactive", "active", default=None, help="Filter on availability.")
@click.pass_obj
def product_list(ctx: CliContext, search: str | None, active: bool | None) -> None:
    """List products in the catalogue."""
    handler = ListProductsHandler(uow_factory=unit_of_work)

    try:
        dtos = handler.handle(ctx.actor, search=search, active=active)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dtos)
    else:
        display_products(dtos)


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--sku", default=None, help="New SKU.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", "stock_quantity", default=None, type=int, help="Corrected stock level.")
@click.option("--description", default=None, help="New description.")
@click.option("--active/--inactive", "is_active", default=None, help="Change availability.")
@click.pass_obj
def product_update(
    ctx: CliContext,
    product_id: int,
    name: str | None,
    sku: str | None,
    price: str | None,
    stock_quantity: int | None,
    description: str | None,
    is_active: bool | None,
) -> None:
    """Update a product. Existing orders keep their price snapshot."""
    handler = UpdateProductHandler(uow_factory=unit_of_work)

    try:
        dto = handler.handle(
            ctx.actor,
            product_id,
            name=name,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
            is_active=is_active,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dto)
    else:
        click.echo(f"Product #{product_id} updated.")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_delete(ctx: CliContext, product_id: int) -> None:
    """Delete a product (only deactivated if it appears on any order)."""
    handler = DeleteProductHandler(uow_factory=unit_of_work)

    try:
        result = handler.handle(ctx.actor, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(result)
    elif result.soft_deleted:
        click.echo(f"Product #{product_id} deactivated because it exists in orders.")
    else:
        click.echo(f"Product #{product_id} deleted.")
