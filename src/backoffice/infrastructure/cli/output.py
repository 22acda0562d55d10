"""Shared CLI context and rendering helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import click

from backoffice.application.dto import OrderDTO, ProductDTO, to_dict
from backoffice.application.policies import Actor


@dataclass(frozen=True)
class CliContext:
    actor: Actor
    as_json: bool = False


def emit_json(payload: Any) -> None:
    if isinstance(payload, list):
        data = [to_dict(entry) for entry in payload]
    else:
        data = to_dict(payload)
    click.echo(json.dumps(data, indent=2))


def display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status})")
    owner = f"user #{dto.owner_id}" if dto.owner_id is not None else "guest"
    click.echo(f"Owner:    {owner}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipping:
        s = dto.shipping
        click.echo(f"Ship to:  {s['name']}, {s['address']}, {s['city']} {s['zip']}, {s['country']}")
    click.echo()

    click.echo(f"  {'Item':<34} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*83}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<34} {item.product_name:<20} {item.quantity:>5} "
            f"{'$' + item.unit_price:>10} {'$' + item.total_price:>10}"
        )
    click.echo(f"  {'-'*83}")
    for label, amount in (
        ("Subtotal", dto.subtotal),
        ("Shipping", dto.shipping_cost),
        ("Tax", dto.tax),
        ("Order Total", dto.total),
    ):
        click.echo(f"  {label:<62} {'$' + amount:>20}")


def display_orders(dtos: list[OrderDTO]) -> None:
    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<16} {'Status':<12} {'Items':>6} {'Total':>12}")
    click.echo("-" * 56)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<16} {dto.status:<12} "
            f"{len(dto.items):>6} {'$' + dto.total:>12}"
        )


def display_products(dtos: list[ProductDTO]) -> None:
    if not dtos:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<14} {'Name':<20} {'Price':>10} {'Stock':>7} {'Active':>7}")
    click.echo("-" * 69)
    for p in dtos:
        click.echo(
            f"{p.id:<6} {p.sku:<14} {p.name:<20} {'$' + p.price:>10} "
            f"{p.stock_quantity:>7} {'yes' if p.is_active else 'no':>7}"
        )
