"""Application service: Add Item to a pending order.

Adding a product that is already on the order merges into the existing
line (its original price snapshot is kept) and reserves only the added
units.
"""

from __future__ import annotations

import structlog

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.application.lookups import load_order, load_product
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class AddOrderItemHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, order_id: int, product_id: int, quantity: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = load_order(uow, order_id, for_update=True)
            self._policy.authorize_modify_items(actor, order)

            product = load_product(uow, product_id)
            product.ensure_orderable()

            # Aggregate first: it rejects non-pending orders before any
            # stock moves.
            item = order.add_item(product_id, product.snapshot(), quantity)
            uow.ledger.reserve(product_id, quantity)

            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order item added",
            order_id=order.id,
            item_id=item.id,
            product_id=product_id,
            added=quantity,
            line_quantity=item.quantity.value,
            total=order.total.to_plain(),
        )
        return order_to_dto(order)
