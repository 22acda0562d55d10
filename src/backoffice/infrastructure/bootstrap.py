"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from backoffice.application.policies import OrderPolicy
from backoffice.infrastructure.config import Settings, get_settings
from backoffice.infrastructure.persistence.orm import Base
from backoffice.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


def build_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url)

    if url.database in (None, "", ":memory:"):
        # One shared connection, otherwise every session sees a fresh empty database.
        engine = create_engine(
            url, poolclass=StaticPool, connect_args={"check_same_thread": False}
        )
    else:
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    Base.metadata.create_all(engine)


@lru_cache(maxsize=1)
def engine() -> Engine:
    return build_engine(get_settings().database_url)


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    return build_session_factory(engine())


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory())


def order_policy(settings: Settings | None = None) -> OrderPolicy:
    settings = settings or get_settings()
    return OrderPolicy(allow_guest_orders=settings.allow_guest_orders)
