"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        """Return an order by its ID, or None if not found.

        ``for_update`` asks the store to hold the order row until the
        enclosing unit of work ends.
        """

    @abstractmethod
    def list_all(
        self,
        owner_id: int | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Return orders newest first, optionally filtered."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order together with its items."""

    @abstractmethod
    def delete(self, order: Order) -> None:
        """Remove the order and every item it owns."""
