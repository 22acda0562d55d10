"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from backoffice.domain.model.order import Order, OrderItem, OrderStatus
from backoffice.domain.model.value_objects import (
    Money,
    ProductSnapshot,
    Quantity,
    ShippingAddress,
)
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.infrastructure.persistence.orm import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        stmt = select(OrderRow).where(OrderRow.id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        row = self._session.scalars(stmt).one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(
        self,
        owner_id: int | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        stmt = select(OrderRow).order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        if owner_id is not None:
            stmt = stmt.where(OrderRow.owner_id == owner_id)
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def save(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id) if order.id is not None else None
        if row is None:
            row = OrderRow()
            self._session.add(row)
        self._apply(order, row)
        self._sync_items(order, row)
        self._session.flush()
        order.id = row.id

    def delete(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is not None:
            self._session.delete(row)
            self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _apply(order: Order, row: OrderRow) -> None:
        row.order_number = order.order_number
        row.owner_id = order.owner_id
        row.status = order.status.value
        address = order.shipping_address
        row.shipping_name = address.name if address else None
        row.shipping_address = address.address if address else None
        row.shipping_city = address.city if address else None
        row.shipping_state = address.state if address else None
        row.shipping_zip = address.zip if address else None
        row.shipping_country = address.country if address else None
        row.notes = order.notes
        row.subtotal = order.subtotal.amount
        row.shipping_cost = order.shipping_cost.amount
        row.tax = order.tax.amount
        row.total = order.total.amount
        row.created_at = order.created_at
        row.updated_at = order.updated_at

    @staticmethod
    def _sync_items(order: Order, row: OrderRow) -> None:
        """Make the row's item collection match the aggregate's lines.

        Lines that vanished from the aggregate are orphaned and deleted by
        the relationship cascade.
        """
        existing = {item_row.id: item_row for item_row in row.items}
        synced: list[OrderItemRow] = []
        for item in order.items:
            item_row = existing.get(item.id)
            if item_row is None:
                item_row = OrderItemRow(
                    id=item.id,
                    product_id=item.product_id,
                    unit_price=item.unit_price.amount,
                    product_details={
                        "name": item.product_details.name,
                        "sku": item.product_details.sku,
                        "price": item.product_details.price.to_plain(),
                    },
                )
            item_row.quantity = item.quantity.value
            item_row.total_price = item.total_price.amount
            synced.append(item_row)
        row.items = synced

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderItem(
                id=item_row.id,
                product_id=item_row.product_id,
                quantity=Quantity(item_row.quantity),
                unit_price=Money.of(item_row.unit_price),
                product_details=ProductSnapshot(
                    name=item_row.product_details["name"],
                    sku=item_row.product_details["sku"],
                    price=Money.of(item_row.product_details["price"]),
                ),
            )
            for item_row in row.items
        ]
        address = None
        if row.shipping_name is not None:
            address = ShippingAddress(
                name=row.shipping_name,
                address=row.shipping_address or "",
                city=row.shipping_city or "",
                state=row.shipping_state or "",
                zip=row.shipping_zip or "",
                country=row.shipping_country or "",
            )
        return Order(
            id=row.id,
            order_number=row.order_number,
            owner_id=row.owner_id,
            items=items,
            status=OrderStatus(row.status),
            shipping_address=address,
            notes=row.notes,
            subtotal=Money.of(row.subtotal),
            shipping_cost=Money.of(row.shipping_cost),
            tax=Money.of(row.tax),
            total=Money.of(row.total),
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
