"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a request-scoped unit of work (``transaction``)
and applying migrations on application start (``init_db``).

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.  Timestamps are stored as ISO
8601 strings without an offset so that lexical ordering in SQL matches
chronological ordering.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings
from ..models.destination import DestinationName


logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # trip_planner_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on per connection since
    SQLite leaves it off by default.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


# Largest value an SQLite INTEGER column can hold.
SQLITE_MAX_INTEGER = 2**63 - 1


@contextmanager
def transaction() -> Iterator[sqlite3.Connection]:
    """Unit of work for one service call.

    Commits when the block completes, rolls back when it raises and
    always closes the connection.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: members, destinations and plans
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS members (
            id TEXT PRIMARY KEY,
            login_id TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            password TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS destinations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            destination_name TEXT NOT NULL UNIQUE
        );

        CREATE TABLE IF NOT EXISTS plans (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            destination_id INTEGER NOT NULL,
            started_at TIMESTAMP NOT NULL,
            ended_at TIMESTAMP NOT NULL,
            vehicle TEXT NOT NULL,
            deleted_at TIMESTAMP,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(destination_id) REFERENCES destinations(id)
        );

        CREATE TABLE IF NOT EXISTS plan_members (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            plan_id INTEGER NOT NULL,
            member_id TEXT NOT NULL,
            joined_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(plan_id, member_id),
            FOREIGN KEY(plan_id) REFERENCES plans(id),
            FOREIGN KEY(member_id) REFERENCES members(id)
        );
        """,
    ),
    # Migration 2: places belonging to a plan
    (
        2,
        """
        -- Both visit columns are NULL while the visit window is unset.
        CREATE TABLE IF NOT EXISTS places (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            plan_id INTEGER NOT NULL,
            name TEXT NOT NULL,
            address TEXT,
            category TEXT,
            started_at TIMESTAMP,
            ended_at TIMESTAMP,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(plan_id) REFERENCES plans(id)
        );
        """,
    ),
    # Migration 3: audit trail and lookup indices
    (
        3,
        """
        CREATE TABLE IF NOT EXISTS audit_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            member_id TEXT,
            action TEXT NOT NULL,
            object_type TEXT,
            object_id INTEGER,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            details TEXT
        );

        CREATE INDEX IF NOT EXISTS idx_plan_members_member_id ON plan_members(member_id);
        CREATE INDEX IF NOT EXISTS idx_plans_started_at ON plans(started_at);
        CREATE INDEX IF NOT EXISTS idx_places_plan_id ON places(plan_id);
        CREATE INDEX IF NOT EXISTS idx_audit_logs_member_id ON audit_logs(member_id);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, applies every
    migration newer than the recorded version and makes sure each
    ``DestinationName`` has a row in ``destinations``.
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s", version)
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version

        # Destinations are a fixed catalogue; ids follow enum order.
        for destination_name in DestinationName:
            cursor.execute(
                "INSERT OR IGNORE INTO destinations (destination_name) VALUES (?)",
                (destination_name.value,),
            )
        conn.commit()
    finally:
        conn.close()
