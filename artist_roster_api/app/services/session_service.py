"""
Server-side sessions for ``AUTH_MODE=session``.

A session is a row keyed by a random URL-safe identifier that the
browser holds in a cookie.  Sessions expire ``ttl_seconds`` after login;
an expired row is removed the first time it is looked up, and
``purge_expired`` sweeps the rest at application startup.
"""

import logging
import secrets
import sqlite3
import time
from typing import Optional

from ..core.db import store_errors

logger = logging.getLogger(__name__)


class SessionService:
    def __init__(self, conn: sqlite3.Connection, ttl_seconds: int) -> None:
        self.conn = conn
        self.ttl_seconds = ttl_seconds

    async def create(self, username: str) -> str:
        """Start a session for ``username`` and return its identifier."""
        session_id = secrets.token_urlsafe(32)
        now = int(time.time())
        with store_errors("create session"):
            self.conn.execute(
                "INSERT INTO sessions (id, username, created_at, expires_at) VALUES (?, ?, ?, ?)",
                (session_id, username, now, now + self.ttl_seconds),
            )
            self.conn.commit()
        logger.info("Session started for admin %s", username)
        return session_id

    async def resolve(self, session_id: str) -> Optional[str]:
        """Return the username behind a live session, or ``None``."""
        with store_errors("load session"):
            row = self.conn.execute(
                "SELECT username, expires_at FROM sessions WHERE id = ?",
                (session_id,),
            ).fetchone()
            if row is None:
                return None
            if row["expires_at"] <= int(time.time()):
                self.conn.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
                self.conn.commit()
                logger.info("Session for admin %s expired", row["username"])
                return None
        return row["username"]

    async def destroy(self, session_id: str) -> None:
        """End a session.  Unknown identifiers are ignored."""
        with store_errors("destroy session"):
            cursor = self.conn.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            self.conn.commit()
        if cursor.rowcount:
            logger.info("Session destroyed")

    async def purge_expired(self) -> int:
        with store_errors("purge sessions"):
            cursor = self.conn.execute(
                "DELETE FROM sessions WHERE expires_at <= ?",
                (int(time.time()),),
            )
            self.conn.commit()
        if cursor.rowcount:
            logger.info("Purged %d expired sessions", cursor.rowcount)
        return cursor.rowcount
