"""Integration tests for the DeleteOrder use case."""

import pytest

from backoffice.application.create_order import CreateOrderHandler
from backoffice.application.delete_order import DeleteOrderHandler
from backoffice.application.dto import OrderItemSpec
from backoffice.application.policies import Actor
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import AuthorizationError, InvalidTransition, OrderNotFound
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from tests.fakes import InMemoryStore, uow_factory

ALICE = Actor.customer(1)
BOB = Actor.customer(2)
ADMIN = Actor.admin(99)


def _setup():
    store = InMemoryStore(
        [
            Product(id=1, name="Widget", sku="WID-1", price=Money.of("20.00"), stock_quantity=10),
            Product(id=2, name="Gadget", sku="GAD-1", price=Money.of("5.00"), stock_quantity=10),
        ]
    )
    factory = uow_factory(store)
    order = CreateOrderHandler(factory).handle(
        ALICE, [OrderItemSpec(1, 2), OrderItemSpec(2, 4)]
    )
    return store, factory, order


class TestDeleteOrder:

    def test_restores_every_line(self):
        store, factory, order = _setup()
        result = DeleteOrderHandler(factory).handle(ALICE, order.id)

        assert result.order_id == order.id
        assert result.order_number == order.order_number
        assert result.released_units == 6
        assert result.deleted is True

        assert order.id not in store.orders
        assert store.stock_of(1) == 10
        assert store.stock_of(2) == 10

    def test_admin_may_delete_any_pending_order(self):
        store, factory, order = _setup()
        DeleteOrderHandler(factory).handle(ADMIN, order.id)
        assert store.orders == {}

    def test_other_customer_rejected(self):
        store, factory, order = _setup()
        with pytest.raises(AuthorizationError):
            DeleteOrderHandler(factory).handle(BOB, order.id)
        assert order.id in store.orders
        assert store.stock_of(1) == 8

    @pytest.mark.parametrize("status", ["processing", "cancelled"])
    def test_non_pending_rejected(self, status):
        store, factory, order = _setup()
        UpdateOrderStatusHandler(factory).handle(ADMIN, order.id, status)

        with pytest.raises(InvalidTransition, match="only pending orders"):
            DeleteOrderHandler(factory).handle(ADMIN, order.id)

        assert order.id in store.orders
        assert store.stock_of(1) == 8
        assert store.stock_of(2) == 6

    def test_owner_cannot_delete_once_processing(self):
        store, factory, order = _setup()
        UpdateOrderStatusHandler(factory).handle(ADMIN, order.id, "processing")
        with pytest.raises(AuthorizationError):
            DeleteOrderHandler(factory).handle(ALICE, order.id)

    def test_unknown_order(self):
        _, factory, _ = _setup()
        with pytest.raises(OrderNotFound):
            DeleteOrderHandler(factory).handle(ADMIN, 12345)
