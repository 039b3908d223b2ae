"""Startup sequence for the database file.

``open_database`` is what the application lifespan calls: make sure the data
directory exists, apply the configured file policy, connect, migrate and
optionally seed. The caller owns the returned ``Database`` and must dispose it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..settings import AppSettings
from .migrate import run_migrations
from .seed import seed_sample_data
from .session import Database

logger = logging.getLogger(__name__)

# SQLite keeps WAL-mode state in side files next to the main database.
_SIDE_SUFFIXES = ("-wal", "-shm", "-journal")


def prepare_database_file(path: Path, policy: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if policy != "recreate":
        return
    removed = []
    for candidate in (path, *(path.with_name(path.name + suffix) for suffix in _SIDE_SUFFIXES)):
        if candidate.exists():
            candidate.unlink()
            removed.append(candidate.name)
    logger.info("db.recreated", extra={"extra_data": {"path": str(path), "removed": removed}})


def open_database(settings: AppSettings) -> Database:
    prepare_database_file(settings.db_path, settings.DB_LIFECYCLE)
    database = Database(
        settings.db_url,
        busy_timeout_ms=settings.SQLITE_BUSY_TIMEOUT_MS,
        enable_wal=not settings.SQLITE_DISABLE_WAL,
    )
    try:
        version = run_migrations(database.engine)
        if settings.SEED_SAMPLE_DATA:
            with database.session() as db:
                seed_sample_data(db)
    except Exception:
        database.dispose()
        raise
    logger.info(
        "db.ready",
        extra={
            "extra_data": {
                "path": str(settings.db_path),
                "schema_version": version,
                "wal": not settings.SQLITE_DISABLE_WAL,
                "lifecycle": settings.DB_LIFECYCLE,
            }
        },
    )
    return database
