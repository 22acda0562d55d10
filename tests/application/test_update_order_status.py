import pytest

from backoffice.application.create_order import CreateOrderHandler
from backoffice.application.dto import OrderItemSpec
from backoffice.application.policies import Actor
from backoffice.application.update_order_status import UpdateOrderStatusHandler
from backoffice.domain.exceptions import (
    AuthorizationError,
    InvalidTransition,
    OrderNotFound,
    ValidationError,
)
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.product import Product
from backoffice.domain.model.value_objects import Money
from tests.fakes import InMemoryStore, uow_factory

ALICE = Actor.customer(1)
ADMIN = Actor.admin(99)


def _setup():
    store = InMemoryStore(
        [Product(id=1, name="Widget", sku="WID-1", price=Money.of("20.00"), stock_quantity=10)]
    )
    factory = uow_factory(store)
    order = CreateOrderHandler(factory).handle(ALICE, [OrderItemSpec(1, 2)])
    return store, UpdateOrderStatusHandler(factory), order


class TestUpdateOrderStatus:

    def test_walks_the_full_chain(self):
        store, handler, order = _setup()
        for status in ("processing", "shipped", "delivered"):
            dto = handler.handle(ADMIN, order.id, status)
            assert dto.status == status
        assert store.orders[order.id].status == OrderStatus.DELIVERED

    def test_status_change_leaves_stock_and_totals(self):
        store, handler, order = _setup()
        dto = handler.handle(ADMIN, order.id, "processing")
        assert store.stock_of(1) == 8
        assert dto.total == "54.00"

    def test_cancelling_keeps_stock_reserved(self):
        store, handler, order = _setup()
        handler.handle(ADMIN, order.id, "cancelled")
        assert store.stock_of(1) == 8
        assert store.orders[order.id].status == OrderStatus.CANCELLED

    def test_status_name_is_case_insensitive(self):
        _, handler, order = _setup()
        assert handler.handle(ADMIN, order.id, " Processing ").status == "processing"

    def test_skipping_a_step_rejected(self):
        store, handler, order = _setup()
        with pytest.raises(InvalidTransition, match="pending to shipped"):
            handler.handle(ADMIN, order.id, "shipped")
        assert store.orders[order.id].status == OrderStatus.PENDING

    def test_cannot_cancel_after_processing(self):
        store, handler, order = _setup()
        handler.handle(ADMIN, order.id, "processing")
        with pytest.raises(InvalidTransition):
            handler.handle(ADMIN, order.id, "cancelled")
        assert store.orders[order.id].status == OrderStatus.PROCESSING

    def test_unknown_status_rejected(self):
        _, handler, order = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            handler.handle(ADMIN, order.id, "lost")

    def test_customer_cannot_change_status(self):
        store, handler, order = _setup()
        with pytest.raises(AuthorizationError):
            handler.handle(ALICE, order.id, "processing")
        assert store.orders[order.id].status == OrderStatus.PENDING

    def test_unknown_order(self):
        _, handler, _ = _setup()
        with pytest.raises(OrderNotFound):
            handler.handle(ADMIN, 404, "processing")
