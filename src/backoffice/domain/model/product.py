"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is corrected, products are deactivated or removed
from the catalogue. Order items keep a snapshot, never a live view.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from backoffice.domain.exceptions import InsufficientStock, ValidationError
from backoffice.domain.model.value_objects import MAX_QUANTITY, Money, ProductSnapshot


@dataclass
class Product:
    """A product in the catalogue.

    Invariant: ``stock_quantity`` is never negative. ``withdraw`` refuses
    rather than clamps when stock is short.
    """

    id: int | None
    name: str
    sku: str
    price: Money
    stock_quantity: int = 0
    is_active: bool = True
    description: str = ""
    deleted_at: datetime | None = None

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        sku: str,
        price: Money,
        stock_quantity: int = 0,
        description: str = "",
        is_active: bool = True,
    ) -> Product:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        _check_stock_value(stock_quantity)
        return Product(
            id=None,
            name=name.strip(),
            sku=normalize_sku(sku),
            price=price,
            stock_quantity=stock_quantity,
            is_active=is_active,
            description=description or "",
        )

    # --- Catalogue edits ------------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        sku: str | None = None,
        price: Money | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> None:
        """Change catalogue data.

        This does NOT affect any existing orders because order items
        capture a snapshot when they are created.
        """
        if name is not None:
            if not name.strip():
                raise ValidationError("Product name is required")
            self.name = name.strip()
        if sku is not None:
            self.sku = normalize_sku(sku)
        if price is not None:
            self.price = price
        if description is not None:
            self.description = description
        if is_active is not None:
            self.is_active = is_active

    def set_stock(self, quantity: int) -> None:
        """Administrative stock correction."""
        _check_stock_value(quantity)
        self.stock_quantity = quantity

    # --- Stock movements ------------------------------------------------------

    def withdraw(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Withdraw quantity must be positive")
        if quantity > self.stock_quantity:
            raise InsufficientStock(
                product_id=self.id,  # type: ignore[arg-type]
                available=self.stock_quantity,
                requested=quantity,
                product_name=self.name,
            )
        self.stock_quantity -= quantity

    def restock(self, quantity: int) -> None:
        if quantity <= 0:
            raise ValidationError("Restock quantity must be positive")
        _check_stock_value(self.stock_quantity + quantity)
        self.stock_quantity += quantity

    # --- Lifecycle ------------------------------------------------------------

    def soft_delete(self, now: datetime) -> None:
        """Keep the row for historical order references but retire it."""
        self.is_active = False
        self.deleted_at = now

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def ensure_orderable(self) -> None:
        if not self.is_active or self.is_deleted:
            raise ValidationError(f"Product '{self.name}' is not available for sale")

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(name=self.name, sku=self.sku, price=self.price)


def normalize_sku(sku: str) -> str:
    """Upper-case and trim so 'ab-1' and 'AB-1 ' are the same SKU."""
    if not sku or not sku.strip():
        raise ValidationError("Product SKU is required")
    return sku.strip().upper()


def _check_stock_value(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError("Stock quantity must be an integer")
    if quantity < 0:
        raise ValidationError("Stock quantity cannot be negative")
    if quantity > MAX_QUANTITY:
        raise ValidationError(f"Stock quantity cannot exceed {MAX_QUANTITY}")
