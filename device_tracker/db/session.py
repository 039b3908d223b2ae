"""SQLAlchemy engine/session plumbing for the device tracker.

Instead of a module-level engine, each running application owns one
``Database``. It is built during startup, handed to request handlers through
the ``get_db`` dependency and disposed when the application shuts down.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

# ``Base`` is the parent class for every SQLAlchemy model in device_tracker/models.
Base = declarative_base()


class Database:
    """One engine plus the session factory bound to it."""

    def __init__(self, url: str, *, busy_timeout_ms: int = 5000, enable_wal: bool = True) -> None:
        self.url = url
        self.busy_timeout_ms = busy_timeout_ms
        self.enable_wal = enable_wal
        # ``check_same_thread=False`` lets FastAPI's worker threads share pooled
        # connections; ``timeout`` is the driver-level twin of busy_timeout.
        connect_args = {"check_same_thread": False, "timeout": busy_timeout_ms / 1000}
        self.engine: Engine = create_engine(url, connect_args=connect_args)
        event.listen(self.engine, "connect", self._configure_connection)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def _configure_connection(self, dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute(f"PRAGMA busy_timeout = {int(self.busy_timeout_ms)}")
            if not self.enable_wal:
                return
            try:
                mode = cursor.execute("PRAGMA journal_mode = WAL").fetchone()
            except sqlite3.DatabaseError as exc:
                logger.warning(
                    "db.wal_unsupported",
                    extra={"extra_data": {"error": str(exc)}},
                )
                return
            logger.debug("db.journal_mode", extra={"extra_data": {"mode": mode[0] if mode else None}})
        finally:
            cursor.close()

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("db.disposed", extra={"extra_data": {"url": self.url}})


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency that yields a session and guarantees cleanup."""

    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
