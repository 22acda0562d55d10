"""Application service: change the quantity of an order line.

Only the difference moves through the ledger: growing a line reserves
the extra units, shrinking it releases the surplus, and an unchanged
quantity touches nothing.
"""

from __future__ import annotations

import structlog

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.application.lookups import load_order
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class UpdateOrderItemHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, order_id: int, item_id: str, new_quantity: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = load_order(uow, order_id, for_update=True)
            self._policy.authorize_modify_items(actor, order)

            delta = order.change_item_quantity(item_id, new_quantity)
            item = order.get_item(item_id)
            if delta > 0:
                uow.ledger.reserve(item.product_id, delta)
            elif delta < 0:
                uow.ledger.release(item.product_id, -delta)

            if delta != 0:
                uow.orders.save(order)
                uow.commit()

        logger.info(
            "Order item updated",
            order_id=order.id,
            item_id=item_id,
            quantity=new_quantity,
            delta=delta,
            total=order.total.to_plain(),
        )
        return order_to_dto(order)
