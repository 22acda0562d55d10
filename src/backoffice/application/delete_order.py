"""Application service: Delete Order use case.

Only pending orders can be deleted. Every unit held by the order's
lines goes back into stock and the order disappears with its items, all
in one unit of work.
"""

from __future__ import annotations

import structlog

from backoffice.application.dto import OrderDeletionDTO
from backoffice.application.lookups import load_order
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class DeleteOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, order_id: int) -> OrderDeletionDTO:
        with self._uow_factory() as uow:
            order = load_order(uow, order_id, for_update=True)
            self._policy.authorize_delete(actor, order)
            order.ensure_deletable()

            released = order.reserved_quantities
            for product_id, quantity in released.items():
                uow.ledger.release(product_id, quantity)

            uow.orders.delete(order)
            uow.commit()

        logger.info(
            "Order deleted",
            order_id=order_id,
            order_number=order.order_number,
            released_units=sum(released.values()),
        )
        return OrderDeletionDTO(
            order_id=order_id,
            order_number=order.order_number,
            released_units=sum(released.values()),
        )
