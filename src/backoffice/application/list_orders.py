"""Application service: List Orders use case (query).

Customers only ever see their own orders; actors allowed to view all
orders see everyone's. Newest first, optionally narrowed to one status.
"""

from __future__ import annotations

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.application.lookups import parse_status
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory


class ListOrdersHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, status: str | None = None) -> list[OrderDTO]:
        self._policy.authorize_list(actor)
        owner_id = None if self._policy.sees_all_orders(actor) else actor.user_id
        status_filter = parse_status(status) if status else None

        with self._uow_factory() as uow:
            orders = uow.orders.list_all(owner_id=owner_id, status=status_filter)
            return [order_to_dto(order) for order in orders]
