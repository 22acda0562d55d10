"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
A raised DomainException always means the operation was rejected and the
enclosing unit of work rolled back.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated, or input was malformed."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFound(EntityNotFoundError):

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product #{product_id} not found")


class OrderNotFound(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order #{order_id} not found")


class InsufficientStock(DomainException):
    """Not enough stock to reserve the requested quantity."""

    def __init__(
        self,
        product_id: int,
        available: int,
        requested: int,
        product_name: str | None = None,
    ) -> None:
        self.product_id = product_id
        self.available = available
        self.requested = requested
        self.product_name = product_name
        label = product_name or f"product #{product_id}"
        super().__init__(
            f"Insufficient stock for {label} "
            f"(need {requested}, have {available} available)"
        )


class ItemNotInOrder(DomainException):

    def __init__(self, order_id: int | None, item_id: str) -> None:
        self.order_id = order_id
        self.item_id = item_id
        super().__init__(f"Item '{item_id}' does not belong to order #{order_id}")


class InvalidTransition(DomainException):
    """The order's current status does not allow the requested change."""

    def __init__(self, current: str, requested: str, reason: str | None = None) -> None:
        self.current = current
        self.requested = requested
        if reason:
            message = f"Order is {current}; {reason}"
        else:
            message = f"Cannot move order from {current} to {requested}"
        super().__init__(message)


class AuthorizationError(DomainException):
    """The acting user is not allowed to perform the operation."""

    def __init__(self, actor_id: int | None, action: str) -> None:
        self.actor_id = actor_id
        self.action = action
        who = f"User #{actor_id}" if actor_id is not None else "Guest"
        super().__init__(f"{who} is not allowed to {action}")
