"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from backoffice.application.create_order import CreateOrderHandler
from backoffice.application.delete_order import DeleteOrderHandler
from backoffice.application.dto import OrderItemSpec, ShippingSpec
from backoffice.application.list_orders import ListOrdersHandler
from backoffice.application.show_order import ShowOrderHandler
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import DomainException
from backoffice.domain.model.order import OrderStatus
from backoffice.infrastructure.bootstrap import order_policy, unit_of_work
from backoffice.infrastructure.cli.output import (
    CliContext,
    display_order,
    display_orders,
    emit_json,
)

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus])


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '3:2,7:1' (product ID:quantity) into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        id_str, qty_str = pair.split(":", 1)
        try:
            product_id = int(id_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid item '{pair}'. Product ID and quantity must be integers."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty))
    return specs


def _shipping_spec(fields: dict[str, str | None]) -> ShippingSpec | None:
    """All shipping options or none of them."""
    given = {k: v for k, v in fields.items() if v is not None}
    if not given:
        return None
    missing = sorted(k for k in fields if k not in given)
    if missing:
        options = ", ".join(f"--ship-{name}" for name in missing)
        raise click.BadParameter(f"Missing shipping options: {options}")
    return ShippingSpec(**given)  # type: ignore[arg-type]


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--notes", default=None, help="Free-text order notes.")
@click.option("--ship-name", default=None, help="Recipient name.")
@click.option("--ship-address", default=None, help="Street address.")
@click.option("--ship-city", default=None)
@click.option("--ship-state", default=None)
@click.option("--ship-zip", default=None)
@click.option("--ship-country", default=None)
@click.pass_obj
def order_create(
    ctx: CliContext,
    items: str,
    notes: str | None,
    ship_name: str | None,
    ship_address: str | None,
    ship_city: str | None,
    ship_state: str | None,
    ship_zip: str | None,
    ship_country: str | None,
) -> None:
    """Create a new pending order (reserves stock)."""
    specs = _parse_items(items)
    shipping = _shipping_spec(
        {
            "name": ship_name,
            "address": ship_address,
            "city": ship_city,
            "state": ship_state,
            "zip": ship_zip,
            "country": ship_country,
        }
    )

    handler = CreateOrderHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dto = handler.handle(ctx.actor, specs, shipping=shipping, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dto)
        return
    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    click.echo()
    display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(ctx: CliContext, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dto = handler.handle(ctx.actor, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dto)
    else:
        display_order(dto)


@click.command("list")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Only orders in this status.")
@click.pass_obj
def order_list(ctx: CliContext, status: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dtos = handler.handle(ctx.actor, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dtos)
    else:
        display_orders(dtos)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_STATUS_CHOICE, help="Target status.")
@click.pass_obj
def order_status(ctx: CliContext, order_id: int, new_status: str) -> None:
    """Move an order to its next status."""
    handler = UpdateOrderStatusHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        dto = handler.handle(ctx.actor, order_id, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(dto)
    else:
        click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(ctx: CliContext, order_id: int) -> None:
    """Delete a pending order (returns its stock)."""
    handler = DeleteOrderHandler(uow_factory=unit_of_work, policy=order_policy())

    try:
        result = handler.handle(ctx.actor, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ctx.as_json:
        emit_json(result)
    else:
        click.echo(f"Order #{order_id} deleted, stock restored.")
