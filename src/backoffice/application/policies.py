"""Actor context and authorization policies.

Handlers receive the acting user explicitly instead of reading it from
ambient session state. The policies answer "may this actor do that to
this order/product"; the order status rules themselves stay in the
domain.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from backoffice.domain.exceptions import AuthorizationError
from backoffice.domain.model.order import Order, OrderStatus

VIEW_ORDERS = "view orders"
VIEW_ALL_ORDERS = "view all orders"
CREATE_ORDERS = "create orders"
UPDATE_ORDER_STATUS = "update order status"
DELETE_ORDERS = "delete orders"

VIEW_PRODUCTS = "view products"
CREATE_PRODUCTS = "create products"
EDIT_PRODUCTS = "edit products"
DELETE_PRODUCTS = "delete products"

CUSTOMER_PERMISSIONS = frozenset({VIEW_ORDERS, CREATE_ORDERS, VIEW_PRODUCTS})


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation.

    ``user_id`` is None for a guest. Admins hold every permission.
    """

    user_id: int | None
    permissions: frozenset[str] = field(default_factory=frozenset)
    is_admin: bool = False

    @staticmethod
    def guest() -> Actor:
        return Actor(user_id=None)

    @staticmethod
    def customer(user_id: int) -> Actor:
        return Actor(user_id=user_id, permissions=CUSTOMER_PERMISSIONS)

    @staticmethod
    def admin(user_id: int) -> Actor:
        return Actor(user_id=user_id, is_admin=True)

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    def can(self, permission: str) -> bool:
        return self.is_admin or permission in self.permissions


class OrderPolicy:

    def __init__(self, allow_guest_orders: bool = False) -> None:
        self._allow_guest_orders = allow_guest_orders

    def authorize_create(self, actor: Actor) -> None:
        if actor.is_guest:
            if not self._allow_guest_orders:
                raise AuthorizationError(None, "create orders")
            return
        if not actor.can(CREATE_ORDERS):
            raise AuthorizationError(actor.user_id, "create orders")

    def authorize_list(self, actor: Actor) -> None:
        if not actor.can(VIEW_ORDERS):
            raise AuthorizationError(actor.user_id, "list orders")

    def authorize_view(self, actor: Actor, order: Order) -> None:
        if order.is_owned_by(actor.user_id) or actor.can(VIEW_ALL_ORDERS):
            return
        raise AuthorizationError(actor.user_id, f"view order #{order.id}")

    def authorize_modify_items(self, actor: Actor, order: Order) -> None:
        if order.is_owned_by(actor.user_id) or actor.is_admin:
            return
        raise AuthorizationError(actor.user_id, f"change items on order #{order.id}")

    def authorize_update_status(self, actor: Actor, order: Order) -> None:
        if not actor.can(UPDATE_ORDER_STATUS):
            raise AuthorizationError(actor.user_id, f"update status of order #{order.id}")

    def authorize_delete(self, actor: Actor, order: Order) -> None:
        # Owners may only withdraw their own pending orders.
        if order.is_owned_by(actor.user_id) and order.status == OrderStatus.PENDING:
            return
        if actor.can(DELETE_ORDERS):
            return
        raise AuthorizationError(actor.user_id, f"delete order #{order.id}")

    def sees_all_orders(self, actor: Actor) -> bool:
        return actor.can(VIEW_ALL_ORDERS)


class ProductPolicy:

    def authorize(self, actor: Actor, permission: str) -> None:
        if not actor.can(permission):
            raise AuthorizationError(actor.user_id, permission)
