"""Lookups shared by handlers that need an entity or a typed failure."""

from __future__ import annotations

from backoffice.application.unit_of_work import UnitOfWork
from backoffice.domain.exceptions import OrderNotFound, ProductNotFound, ValidationError
from backoffice.domain.model.order import Order, OrderStatus
from backoffice.domain.model.product import Product


def load_order(uow: UnitOfWork, order_id: int, for_update: bool = False) -> Order:
    order = uow.orders.get_by_id(order_id, for_update=for_update)
    if order is None:
        raise OrderNotFound(order_id)
    return order


def load_product(uow: UnitOfWork, product_id: int) -> Product:
    product = uow.products.get_by_id(product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown order status '{value}' (expected one of: {allowed})"
        ) from None
