"""Application service: List Products use case (query)."""

from __future__ import annotations

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.application.policies import VIEW_PRODUCTS, Actor, ProductPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory


class ListProductsHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: ProductPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or ProductPolicy()

    def handle(
        self,
        actor: Actor,
        search: str | None = None,
        active: bool | None = None,
    ) -> list[ProductDTO]:
        self._policy.authorize(actor, VIEW_PRODUCTS)
        with self._uow_factory() as uow:
            products = uow.products.search(text=search, active=active)
            return [product_to_dto(p) for p in products]
