"""Application service: Create Order use case.

Orchestrates the flow between the product catalogue, the inventory
ledger and the Order aggregate. Every requested line reserves its stock
as it is processed; if any line fails, the unit of work discards the
reservations already taken along with the half-built order.
"""

from __future__ import annotations

import structlog

from backoffice.application.dto import OrderDTO, OrderItemSpec, ShippingSpec, order_to_dto
from backoffice.application.lookups import load_product
from backoffice.application.policies import Actor, OrderPolicy
from backoffice.application.unit_of_work import UnitOfWorkFactory
from backoffice.domain.exceptions import ValidationError
from backoffice.domain.model.order import Order, OrderItem
from backoffice.domain.model.value_objects import Quantity, ShippingAddress

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        policy: OrderPolicy | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._policy = policy or OrderPolicy()

    def handle(
        self,
        actor: Actor,
        item_specs: list[OrderItemSpec],
        shipping: ShippingSpec | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new pending order.

        Steps:
        1. Check the actor may place orders.
        2. For each line: resolve the product, reserve stock, snapshot
           the product's current name/sku/price.
        3. Let the Order aggregate merge lines and compute totals once.
        4. Persist and commit, then return a DTO.
        """
        self._policy.authorize_create(actor)
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        shipping_address = _to_address(shipping)

        with self._uow_factory() as uow:
            lines: list[OrderItem] = []
            for spec in item_specs:
                quantity = Quantity(spec.quantity)
                product = load_product(uow, spec.product_id)
                product.ensure_orderable()
                uow.ledger.reserve(product.id, quantity.value)  # type: ignore[arg-type]
                lines.append(
                    OrderItem.new(product.id, product.snapshot(), quantity.value)  # type: ignore[arg-type]
                )

            order = Order.create(
                owner_id=actor.user_id,
                items=lines,
                shipping_address=shipping_address,
                notes=notes,
            )
            uow.orders.save(order)
            uow.commit()

        logger.info(
            "Order created",
            order_id=order.id,
            order_number=order.order_number,
            owner_id=order.owner_id,
            lines=len(order.items),
            total=order.total.to_plain(),
        )
        return order_to_dto(order)


def _to_address(spec: ShippingSpec | None) -> ShippingAddress | None:
    if spec is None:
        return None
    return ShippingAddress(
        name=spec.name,
        address=spec.address,
        city=spec.city,
        state=spec.state,
        zip=spec.zip,
        country=spec.country,
    )
