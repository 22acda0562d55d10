"""Application service: move an order along its status chain."""

from __future__ import annotations

import structlog

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.application.lookups import load_order, parse_status
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, order_id: int, new_status: str) -> OrderDTO:
        """Apply a status change. Stock levels and totals are not touched."""
        target = parse_status(new_status)

        with self._uow_factory() as uow:
            order = load_order(uow, order_id, for_update=True)
            self._policy.authorize_update_status(actor, order)

            previous = order.status
            order.transition_to(target)

            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order status changed",
            order_id=order.id,
            from_status=previous.value,
            to_status=target.value,
        )
        return order_to_dto(order)
