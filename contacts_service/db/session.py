"""Engine factory and session factory.

``SessionLocal`` is created unbound at import time and bound to an engine by
``bind_engine`` during application startup, so tests and scripts can point
the service at their own database.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from contacts_service.core.config import redact_url

logger = logging.getLogger(__name__)

SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False)


def create_db_engine(url: str, *, echo: bool = False, **kwargs: Any) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    SQLite connections get foreign keys enabled and driver-level transaction
    handling disabled so that SAVEPOINTs behave; in-memory databases share a
    single connection.
    """
    if not url.startswith("sqlite"):
        kwargs.setdefault("pool_pre_ping", True)
        engine = create_engine(url, echo=echo, **kwargs)
        logger.info("Database engine created for %s", redact_url(url))
        return engine

    kwargs.setdefault("connect_args", {"check_same_thread": False})
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs.setdefault("poolclass", StaticPool)

    engine = create_engine(url, echo=echo, **kwargs)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin_sqlite(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")

    logger.info("Database engine created for %s", redact_url(url))
    return engine


def bind_engine(engine: Engine) -> None:
    SessionLocal.configure(bind=engine)
