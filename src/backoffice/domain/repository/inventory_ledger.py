"""Abstract inventory ledger.

The ledger is the only path by which order operations change a
product's ``stock_quantity``. Each call is a single atomic step on one
product's counter; grouping several calls with an order change is the
unit of work's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class InventoryLedger(ABC):

    @abstractmethod
    def reserve(self, product_id: int, quantity: int) -> None:
        """Take *quantity* units out of stock.

        Raises InsufficientStock (stock unchanged) when fewer units are
        available, ProductNotFound when the product does not exist.
        """

    @abstractmethod
    def release(self, product_id: int, quantity: int) -> None:
        """Put *quantity* units back into stock."""

    @abstractmethod
    def available(self, product_id: int) -> int:
        """Current stock level of a product."""
