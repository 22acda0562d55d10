"""CLI commands for the items of a pending order."""

from __future__ import annotations

import click

from backoffice.application.add_order_item import AddOrderItemHandler
from backoffice.application.dto import OrderDTO
from backoffice.application.remove_order_item import RemoveOrderItemHandler
from backoffice.application.update_order_item import UpdateOrderItemHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import order_policy, unit_of_work
from backoffice.infrastructure.cli.output import CliContext, display_order, emit_json


def _report(ctx: CliContext, message: str, dto: OrderDTO) -> None:
    if ctx.as_json:
        emit_json(dto)
        return
    click.echo(message)
    click.echo()
    display_order(dto)


@click.command("add")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.pass_obj
def item_add(ctx: CliContext, order_id: int, product_id: int, quantity: int) -> None:
    """Add a product to a pending order (merges with an existing line)."""
    handler = AddOrderItemHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dto = handler.handle(ctx.actor, order_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _report(ctx, f"Added {quantity} x product #{product_id} to order #{order_id}.", dto)


@click.command("update")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="New quantity for the line.")
@click.pass_obj
def item_update(ctx: CliContext, order_id: int, item_id: str, quantity: int) -> None:
    """Change the quantity of an order line."""
    handler = UpdateOrderItemHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dto = handler.handle(ctx.actor, order_id, item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _report(ctx, f"Item {item_id} on order #{order_id} set to {quantity}.", dto)


@click.command("remove")
@click.option("--order", "order_id", required=True, type=int, help="Order ID.")
@click.option("--item", "item_id", required=True, help="Item ID.")
@click.pass_obj
def item_remove(ctx: CliContext, order_id: int, item_id: str) -> None:
    """Remove a line from a pending order (returns its stock)."""
    handler = RemoveOrderItemHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dto = handler.handle(ctx.actor, order_id, item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _report(ctx, f"Item {item_id} removed from order #{order_id}.", dto)
