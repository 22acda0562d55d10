"""Application service: Add Product use case."""

from __future__ import annotations

import structlog

from backoffice.application.dto import ProductDTO, product_to_dto
from backoffice.application.policies import CREATE_PRODUCTS, Actor, ProductPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class AddProductHandler:

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
        name: str,
        sku: str,
        price: str,
        stock_quantity: int = 0,
        description: str = "",
        is_active: bool = True,
    ) -> ProductDTO:
        """Add a new product to the catalogue."""
        self._policy.authorize(actor, CREATE_PRODUCTS)
        product = Product.create(
            name=name,
            sku=sku,
            price=Money.of(price),
            stock_quantity=stock_quantity,
            description=description,
            is_active=is_active,
        )

        with self._uow_factory() as uow:
            if uow.products.get_by_sku(product.sku) is not None:
                raise ValidationError(f"SKU '{product.sku}' already exists")
            uow.products.save(product)
            uow.commit()

        logger.info("Product added", product_id=product.id, sku=product.sku)
        return product_to_dto(product)
