"""Application service: Show Order use case (query)."""

from __future__ import annotations

from backoffice.application.dto import OrderDTO, order_to_dto
from backoffice.application.lookups import load_order
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory


class ShowOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(self, actor: Actor, order_id: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = load_order(uow, order_id)
            self._policy.authorize_view(actor, order)
            return order_to_dto(order)
