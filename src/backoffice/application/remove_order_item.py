"""Application service: remove a line from a pending order."""

from __future__ import annotations

import structlog

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.application.lookups import load_order
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class RemoveOrderItemHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, order_id: int, item_id: str) -> OrderDTO:
        """Drop the line and return all of its units to stock."""
        with self._uow_factory() as uow:
            order = load_order(uow, order_id, for_update=True)
            self._policy.authorize_modify_items(actor, order)

            item = order.remove_item(item_id)
            uow.ledger.release(item.product_id, item.quantity.value)

            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order item removed",
            order_id=order.id,
            item_id=item_id,
            released=item.quantity.value,
            total=order.total.to_plain(),
        )
        return order_to_dto(order)
