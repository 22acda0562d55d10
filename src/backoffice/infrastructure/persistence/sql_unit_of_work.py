"""Unit of work over one SQLAlchemy session."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from backoffice.application.unit_of_work import UnitOfWork
from backoffice.infrastructure.persistence.sql_inventory_ledger import SqlInventoryLedger
from backoffice.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from backoffice.infrastructure.persistence.sql_product_repository import SqlProductRepository


class SqlAlchemyUnitOfWork(UnitOfWork):
    """One database transaction per ``with`` block.

    Repositories and the ledger share the session, so stock UPDATEs and
    order/item writes commit or roll back together.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        self.ledger = SqlInventoryLedger(self._session)
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()  # type: ignore[union-attr]
            self._session = None

    def commit(self) -> None:
        self._session.commit()  # type: ignore[union-attr]

    def rollback(self) -> None:
        self._session.rollback()  # type: ignore[union-attr]
