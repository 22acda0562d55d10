"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and the amounts
derived from them. All business invariants are enforced here:

- items may only change while the order is ``pending``;
- one line per product (adding a product already on the order merges);
- ``subtotal``, ``shipping_cost``, ``tax`` and ``total`` are only ever
  written by ``recompute_totals``.

Stock is not touched here. Reserving and releasing units is coordinated
by the application handlers through the inventory ledger, inside the same
unit of work as the aggregate change.
"""

from __future__ import annotations

import secrets
import string
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from backoffice.domain.exceptions import (
    InvalidTransition,
    ItemNotInOrder,
    ValidationError,
)
from backoffice.domain.model.value_objects import (
    Money,
    ProductSnapshot,
    Quantity,
    ShippingAddress,
)
from backoffice.domain.service.order_pricing import compute_totals


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def can_transition_to(self, other: OrderStatus) -> bool:
        return other in _TRANSITIONS[self]


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

_ORDER_NUMBER_ALPHABET = string.ascii_uppercase + string.digits


def new_order_number() -> str:
    return "ORD-" + "".join(secrets.choice(_ORDER_NUMBER_ALPHABET) for _ in range(10))


def new_item_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderItem:
    """One product line on an order.

    ``unit_price`` and ``product_details`` are captured when the line is
    created and never change afterwards; only ``quantity`` may.
    """

    id: str
    product_id: int
    quantity: Quantity
    unit_price: Money
    product_details: ProductSnapshot

    @staticmethod
    def new(product_id: int, snapshot: ProductSnapshot, quantity: int) -> OrderItem:
        return OrderItem(
            id=new_item_id(),
            product_id=product_id,
            quantity=Quantity(quantity),
            unit_price=snapshot.price,
            product_details=snapshot,
        )

    @property
    def total_price(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules. The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    owner_id: int | None
    items: list[OrderItem] = field(default_factory=list)
    status: OrderStatus = OrderStatus.PENDING
    shipping_address: ShippingAddress | None = None
    notes: str | None = None
    subtotal: Money = field(default_factory=Money.zero)
    shipping_cost: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        owner_id: int | None,
        items: list[OrderItem],
        shipping_address: ShippingAddress | None = None,
        notes: str | None = None,
        order_number: str | None = None,
    ) -> Order:
        """Create a pending order from freshly built lines.

        Lines for the same product are merged. Totals are computed once,
        after every line is in place.
        """
        if not items:
            raise ValidationError("Order must contain at least one item")

        order = Order(
            id=None,
            order_number=order_number or new_order_number(),
            owner_id=owner_id,
            shipping_address=shipping_address,
            notes=notes,
        )
        for item in items:
            order._merge_line(item)
        order.recompute_totals()
        return order

    # --- Item mutations (pending only) ----------------------------------------

    def add_item(self, product_id: int, snapshot: ProductSnapshot, quantity: int) -> OrderItem:
        """Add units of a product, merging into its existing line if any.

        A merged line keeps its original price snapshot.
        """
        self._ensure_pending("add items")
        item = self._merge_line(OrderItem.new(product_id, snapshot, quantity))
        self.recompute_totals()
        return item

    def change_item_quantity(self, item_id: str, new_quantity: int) -> int:
        """Set a line's quantity and return the signed change in units."""
        self._ensure_pending("update items")
        item = self.get_item(item_id)
        quantity = Quantity(new_quantity)
        delta = quantity.value - item.quantity.value
        if delta == 0:
            return 0
        item.quantity = quantity
        self.recompute_totals()
        return delta

    def remove_item(self, item_id: str) -> OrderItem:
        self._ensure_pending("remove items")
        item = self.get_item(item_id)
        self.items.remove(item)
        self.recompute_totals()
        return item

    # --- State transitions ----------------------------------------------------

    def transition_to(self, new_status: OrderStatus) -> None:
        """Move along pending -> processing -> shipped -> delivered.

        ``cancelled`` is reachable from ``pending`` only. Stock and totals
        are left alone.
        """
        if not self.status.can_transition_to(new_status):
            raise InvalidTransition(self.status.value, new_status.value)
        self.status = new_status
        self._touch()

    def ensure_deletable(self) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidTransition(
                self.status.value, "deleted", "only pending orders can be deleted"
            )

    # --- Derived amounts ------------------------------------------------------

    def recompute_totals(self) -> None:
        totals = compute_totals(self.items)
        self.subtotal = totals.subtotal
        self.shipping_cost = totals.shipping_cost
        self.tax = totals.tax
        self.total = totals.total
        self._touch()

    # --- Queries --------------------------------------------------------------

    def get_item(self, item_id: str) -> OrderItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise ItemNotInOrder(self.id, item_id)

    def find_item_for_product(self, product_id: int) -> OrderItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def is_owned_by(self, user_id: int | None) -> bool:
        return user_id is not None and self.owner_id == user_id

    @property
    def reserved_quantities(self) -> dict[int, int]:
        """Units held from inventory per product id."""
        return {item.product_id: item.quantity.value for item in self.items}

    # --- Internal helpers -----------------------------------------------------

    def _merge_line(self, line: OrderItem) -> OrderItem:
        existing = self.find_item_for_product(line.product_id)
        if existing is None:
            self.items.append(line)
            return line
        existing.quantity = existing.quantity + line.quantity
        return existing

    def _ensure_pending(self, action: str) -> None:
        if self.status != OrderStatus.PENDING:
            raise InvalidTransition(
                self.status.value, action,
                f"cannot {action} unless the order is pending",
            )

    def _touch(self) -> None:
        self.updated_at = _utcnow()
