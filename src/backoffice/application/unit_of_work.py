"""Transaction boundary for application handlers.

Every handler that touches more than one record runs inside a single
unit of work::

    with self._uow_factory() as uow:
        ...
        uow.commit()

Leaving the block without calling ``commit()`` (normally because a
DomainException escaped) rolls back every stock movement and every
order/item write made inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from backoffice.domain.repository.inventory_ledger import InventoryLedger
from backoffice.domain.repository.order_repository import OrderRepository
from backoffice.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    ledger: InventoryLedger

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # A no-op once commit() has run.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit visible at once."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change in this unit."""


UnitOfWorkFactory = Callable[[], UnitOfWork]
