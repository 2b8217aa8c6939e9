"""
SQLite database integration and simple migration system.

This module provides functions for opening a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  The database holds three tables: ``admins`` (the
credential store), ``artists`` (the ordered collection) and
``sessions`` (server-side sessions used when ``AUTH_MODE=session``).

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

from .errors import StoreError

logger = logging.getLogger(__name__)

# Append new migrations with an incremented version number; never edit
# one that has already shipped.
MIGRATIONS: List[Tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS admins (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- NUMERIC affinity keeps integral orders as integers and
        -- fractional ones as reals.
        CREATE TABLE IF NOT EXISTS artists (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            instagram_url TEXT,
            position NUMERIC NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_artists_position ON artists (position);
        """,
    ),
    (
        2,
        """
        CREATE TABLE IF NOT EXISTS sessions (
            id TEXT PRIMARY KEY,
            username TEXT NOT NULL,
            created_at INTEGER NOT NULL,
            expires_at INTEGER NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_sessions_expires_at ON sessions (expires_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root (the directory containing ``artist_roster_api``).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by
    name.  ``check_same_thread`` is disabled because FastAPI may open
    the connection in a worker thread and use it from the event loop;
    each connection still serves a single request.
    """
    conn = sqlite3.connect(get_database_path(database_url), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Re-raise ``sqlite3.Error`` as ``StoreError``, logging the cause.

    ``action`` names the operation in the log record, e.g.
    ``"delete artist"``.  Other exceptions pass through untouched.
    """
    try:
        yield
    except sqlite3.Error as exc:
        logger.exception("Database error during %s", action)
        raise StoreError() from exc


def init_db(database_url: str) -> None:
    """Create the database if needed and apply pending migrations."""
    conn = get_connection(database_url)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS migrations (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current = row["version"] or 0
        for version, script in MIGRATIONS:
            if version <= current:
                continue
            cursor.executescript(script)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            conn.commit()
            logger.info("Applied migration %s", version)
    finally:
        conn.close()
