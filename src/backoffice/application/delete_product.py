"""Application service: Delete Product use case.

A product that appears on any order item is only retired (deactivated
and stamped as deleted) so historical orders keep a valid reference.
Products that were never ordered are removed outright.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from backoffice.application.dto import ProductDeletionDTO
from backoffice.application.lookups import load_product
from backoffice.application.policies import DELETE_PRODUCTS, Actor, ProductPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: ProductPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or ProductPolicy()

    def handle(self, actor: Actor, product_id: int) -> ProductDeletionDTO:
        self._policy.authorize(actor, DELETE_PRODUCTS)

        with self._uow_factory() as uow:
            product = load_product(uow, product_id)
            soft = uow.products.is_referenced(product_id)
            if soft:
                product.soft_delete(datetime.now(timezone.utc))
                uow.products.save(product)
            else:
                uow.products.delete(product_id)
            uow.commit()

        logger.info("Product deleted", product_id=product_id, soft_deleted=soft)
        return ProductDeletionDTO(product_id=product_id, soft_deleted=soft)
