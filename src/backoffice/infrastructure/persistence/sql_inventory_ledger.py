"""SQL implementation of the inventory ledger.

A reservation is one conditional UPDATE::

    UPDATE products
       SET stock_quantity = stock_quantity - :qty
     WHERE id = :id AND stock_quantity >= :qty

The database row lock taken by the UPDATE serializes concurrent
reservations of the same product, and the WHERE clause is re-checked
against the latest committed value, so the last unit can only be taken
once. A zero row count means the product is short (or missing).
"""

from __future__ import annotations

import structlog
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from backoffice.domain.exceptions import InsufficientStock, ProductNotFound, ValidationError
from backoffice.domain.model.value_objects import MAX_QUANTITY
from backoffice.domain.repository.inventory_ledger import InventoryLedger
from backoffice.infrastructure.persistence.orm import ProductRow

logger = structlog.get_logger(__name__)

_products = ProductRow.__table__


class SqlInventoryLedger(InventoryLedger):

    def __init__(self, session: Session) -> None:
        self._session = session

    def reserve(self, product_id: int, quantity: int) -> None:
        _check_quantity(quantity)
        stmt = (
            update(_products)
            .where(_products.c.id == product_id)
            .where(_products.c.stock_quantity >= quantity)
            .values(stock_quantity=_products.c.stock_quantity - quantity)
        )
        result = self._session.execute(stmt)
        if result.rowcount == 1:
            logger.debug("Stock reserved", product_id=product_id, quantity=quantity)
            return

        current = self._session.execute(
            select(_products.c.name, _products.c.stock_quantity).where(
                _products.c.id == product_id
            )
        ).one_or_none()
        if current is None:
            raise ProductNotFound(product_id)
        logger.warning(
            "Stock reservation rejected",
            product_id=product_id,
            requested=quantity,
            available=current.stock_quantity,
        )
        raise InsufficientStock(
            product_id=product_id,
            available=current.stock_quantity,
            requested=quantity,
            product_name=current.name,
        )

    def release(self, product_id: int, quantity: int) -> None:
        _check_quantity(quantity)
        stmt = (
            update(_products)
            .where(_products.c.id == product_id)
            .values(stock_quantity=_products.c.stock_quantity + quantity)
        )
        result = self._session.execute(stmt)
        if result.rowcount != 1:
            raise ProductNotFound(product_id)
        logger.debug("Stock released", product_id=product_id, quantity=quantity)

    def available(self, product_id: int) -> int:
        value = self._session.scalar(
            select(_products.c.stock_quantity).where(_products.c.id == product_id)
        )
        if value is None:
            raise ProductNotFound(product_id)
        return value


def _check_quantity(quantity: int) -> None:
    if quantity <= 0:
        raise ValidationError("Stock movement quantity must be positive")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Stock movement quantity cannot exceed {MAX_QUANTITY}")
