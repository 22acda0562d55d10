"""Application service: Update Product use case."""

from __future__ import annotations

import structlog

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.application.lookups import load_product
from backoffice.application.policies import EDIT_PRODUCTS, Actor, ProductPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.product import normalize_sku
from backoffice.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

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
        product_id: int,
        name: str | None = None,
        sku: str | None = None,
        price: str | None = None,
        stock_quantity: int | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> ProductDTO:
        """Update catalogue data and/or correct the stock level.

        This does NOT affect any existing orders — their items captured a
        snapshot at the time they were added.
        """
        self._policy.authorize(actor, EDIT_PRODUCTS)

        with self._uow_factory() as uow:
            product = load_product(uow, product_id)

            if sku is not None:
                clash = uow.products.get_by_sku(normalize_sku(sku))
                if clash is not None and clash.id != product.id:
                    raise ValidationError(f"SKU '{clash.sku}' already exists")

            product.update_details(
                name=name,
                sku=sku,
                price=Money.of(price) if price is not None else None,
                description=description,
                is_active=is_active,
            )
            if stock_quantity is not None:
                product.set_stock(stock_quantity)

            uow.products.save(product)
            uow.commit()

        logger.info("Product updated", product_id=product_id)
        return product_to_dto(product)
