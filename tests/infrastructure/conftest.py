import logging

import pytest

from backoffice.application.add_product import AddProductHandler
from backoffice.application.policies import Actor
from backoffice.infrastructure.bootstrap import build_engine, build_session_factory, create_schema
from backoffice.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork

ADMIN = Actor.admin(99)


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    create_schema(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def sql_uow(session_factory):
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
def catalogue(sql_uow):
    """Widget (id 1, $20.00, 10 in stock) and Gadget (id 2, $5.00, 3 in stock)."""
    add = AddProductHandler(sql_uow)
    widget = add.handle(ADMIN, name="Widget", sku="WID-1", price="20.00", stock_quantity=10)
    gadget = add.handle(ADMIN, name="Gadget", sku="GAD-1", price="5.00", stock_quantity=3)
    return widget, gadget


@pytest.fixture(autouse=True)
def _reset_root_logging():
    yield
    logging.getLogger().handlers = []
