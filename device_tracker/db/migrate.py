"""Numbered schema migrations tracked with SQLite's ``user_version``."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

# Every schema change gets a new number; existing entries are never edited.
# Statements use IF NOT EXISTS so a database created before versioning was
# introduced (user_version 0, tables already present) upgrades cleanly.
MIGRATIONS: dict[int, tuple[str, ...]] = {
    1: (
        """
        CREATE TABLE IF NOT EXISTS devices (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            serialNumber TEXT NOT NULL,
            assetId TEXT NOT NULL,
            status TEXT NOT NULL,
            assignedTo TEXT,
            staffMember TEXT,
            ward TEXT,
            checkoutTime TEXT,
            checkoutNotes TEXT,
            dateAdded TEXT NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS device_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            deviceId TEXT NOT NULL,
            type TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            pupil TEXT,
            staff TEXT,
            ward TEXT,
            notes TEXT,
            FOREIGN KEY (deviceId) REFERENCES devices(id)
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS staff (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            role TEXT NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS wards (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL
        )
        """,
    ),
    2: (
        "CREATE INDEX IF NOT EXISTS ix_device_history_device_timestamp ON device_history (deviceId, timestamp)",
    ),
}

SCHEMA_VERSION = max(MIGRATIONS)


def _user_version(conn: Connection) -> int:
    return int(conn.execute(text("PRAGMA user_version")).scalar_one())


def run_migrations(engine: Engine) -> int:
    """Apply every migration newer than the database and return the final version."""

    with engine.begin() as conn:
        current = _user_version(conn)
        if current > SCHEMA_VERSION:
            raise RuntimeError(
                f"database schema version {current} is newer than this build supports ({SCHEMA_VERSION})"
            )
        for version in sorted(v for v in MIGRATIONS if v > current):
            for statement in MIGRATIONS[version]:
                conn.execute(text(statement))
            # PRAGMA does not accept bound parameters; version is an int we own.
            conn.execute(text(f"PRAGMA user_version = {version}"))
            logger.info("db.migrated", extra={"extra_data": {"version": version}})
            current = version
    return current
