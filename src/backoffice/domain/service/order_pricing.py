"""Domain service: order pricing.

The one place where an order's derived amounts are computed. Both new
orders and every later item change go through ``compute_totals`` so the
subtotal / shipping / tax / total rules can never drift apart.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from backoffice.domain.model.value_objects import Money

if TYPE_CHECKING:
    from backoffice.domain.model.order import OrderItem

# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
TAX_RATE = Decimal("0.10")
FREE_SHIPPING_THRESHOLD = Money(Decimal("100.00"))
FLAT_SHIPPING_COST = Money(Decimal("10.00"))


@dataclass(frozen=True)
class OrderTotals:

    subtotal: Money
    shipping_cost: Money
    tax: Money
    total: Money


def shipping_for(subtotal: Money) -> Money:
    """Free shipping strictly above the threshold, flat rate otherwise."""
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Money.zero(subtotal.currency)
    return Money(FLAT_SHIPPING_COST.amount, subtotal.currency)


def tax_for(subtotal: Money) -> Money:
    return subtotal.scaled(TAX_RATE)


def compute_totals(items: Iterable[OrderItem]) -> OrderTotals:
    subtotal = Money.zero()
    for item in items:
        subtotal = subtotal + item.total_price

    shipping_cost = shipping_for(subtotal)
    tax = tax_for(subtotal)
    return OrderTotals(
        subtotal=subtotal,
        shipping_cost=shipping_cost,
        tax=tax,
        total=subtotal + shipping_cost + tax,
    )
