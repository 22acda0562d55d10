"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Amounts are plain
two-decimal strings so a DTO can be dumped to JSON as-is.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from backoffice.domain.model.order import Order
from backoffice.domain.model.product import Product

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


# --- Input --------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class ShippingSpec:
    """Input: where an order ships to."""

    name: str
    address: str
    city: str
    state: str
    zip: str
    country: str


# --- Output -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single line item with its frozen product snapshot."""

    id: str
    product_id: int
    product_name: str
    sku: str
    quantity: int
    unit_price: str
    total_price: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    owner_id: int | None
    status: str
    items: list[OrderItemDTO]
    subtotal: str
    shipping_cost: str
    tax: str
    total: str
    shipping: dict[str, str] | None
    notes: str | None
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class ProductDTO:

    id: int
    name: str
    sku: str
    price: str
    stock_quantity: int
    is_active: bool
    description: str


@dataclass(frozen=True)
class OrderDeletionDTO:
    """Output: a deleted order and the units it handed back to stock."""

    order_id: int
    order_number: str
    released_units: int
    deleted: bool = True


@dataclass(frozen=True)
class ProductDeletionDTO:
    """Output: what ``delete product`` actually did."""

    product_id: int
    soft_deleted: bool


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    shipping = None
    if order.shipping_address is not None:
        shipping = asdict(order.shipping_address)
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        owner_id=order.owner_id,
        status=order.status.value,
        items=[
            OrderItemDTO(
                id=item.id,
                product_id=item.product_id,
                product_name=item.product_details.name,
                sku=item.product_details.sku,
                quantity=item.quantity.value,
                unit_price=item.unit_price.to_plain(),
                total_price=item.total_price.to_plain(),
            )
            for item in order.items
        ],
        subtotal=order.subtotal.to_plain(),
        shipping_cost=order.shipping_cost.to_plain(),
        tax=order.tax.to_plain(),
        total=order.total.to_plain(),
        shipping=shipping,
        notes=order.notes,
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        updated_at=order.updated_at.strftime(_TIMESTAMP_FORMAT),
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        sku=product.sku,
        price=product.price.to_plain(),
        stock_quantity=product.stock_quantity,
        is_active=product.is_active,
        description=product.description,
    )


def to_dict(dto: Any) -> dict[str, Any]:
    """JSON-ready view of any DTO."""
    return asdict(dto)
