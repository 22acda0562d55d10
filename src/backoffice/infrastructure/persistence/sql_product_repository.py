"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import delete, exists, or_, select
from sqlalchemy.orm import Session

from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.infrastructure.persistence.orm import OrderItemRow, ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._load_row(product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_sku(self, sku: str) -> Product | None:
        stmt = select(ProductRow).where(ProductRow.sku == sku)
        row = self._session.scalars(
            stmt.execution_options(populate_existing=True)
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    def search(self, text: str | None = None, active: bool | None = None) -> list[Product]:
        stmt = select(ProductRow).order_by(ProductRow.id.desc())
        if text:
            pattern = f"%{text}%"
            stmt = stmt.where(
                or_(
                    ProductRow.name.ilike(pattern),
                    ProductRow.description.ilike(pattern),
                    ProductRow.sku.ilike(pattern),
                )
            )
        if active is not None:
            stmt = stmt.where(ProductRow.is_active == active)
        rows = self._session.scalars(stmt.execution_options(populate_existing=True))
        return [self._to_domain(row) for row in rows]

    def save(self, product: Product) -> None:
        row = self._load_row(product.id) if product.id is not None else None
        if row is None:
            row = ProductRow()
            self._session.add(row)
        self._apply(product, row)
        self._session.flush()
        product.id = row.id

    def delete(self, product_id: int) -> None:
        self._session.execute(delete(ProductRow).where(ProductRow.id == product_id))

    def is_referenced(self, product_id: int) -> bool:
        stmt = select(exists().where(OrderItemRow.product_id == product_id))
        return bool(self._session.scalar(stmt))

    # --- Serialization --------------------------------------------------------

    def _load_row(self, product_id: int) -> ProductRow | None:
        # Stock is moved with bulk UPDATEs, so never trust a cached row.
        return self._session.get(ProductRow, product_id, populate_existing=True)

    @staticmethod
    def _apply(product: Product, row: ProductRow) -> None:
        row.name = product.name
        row.sku = product.sku
        row.description = product.description
        row.price = product.price.amount
        row.stock_quantity = product.stock_quantity
        row.is_active = product.is_active
        row.deleted_at = product.deleted_at

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        deleted_at = row.deleted_at
        if deleted_at is not None and deleted_at.tzinfo is None:
            deleted_at = deleted_at.replace(tzinfo=timezone.utc)
        return Product(
            id=row.id,
            name=row.name,
            sku=row.sku,
            price=Money.of(row.price),
            stock_quantity=row.stock_quantity,
            is_active=row.is_active,
            description=row.description or "",
            deleted_at=deleted_at,
        )
