"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from backoffice.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return a product by its (normalized) SKU, or None if not found."""

    @abstractmethod
    def search(self, text: str | None = None, active: bool | None = None) -> list[Product]:
        """Return products whose name, description or SKU contain *text*."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product, assigning an ID if new."""

    @abstractmethod
    def delete(self, product_id: int) -> None:
        """Remove a product row for good."""

    @abstractmethod
    def is_referenced(self, product_id: int) -> bool:
        """True if any order item points at this product."""
