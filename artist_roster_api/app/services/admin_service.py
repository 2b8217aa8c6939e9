"""
Business logic for admin accounts.

Admins are stored in the ``admins`` table with a PBKDF2 password hash
(see ``core.security``).  ``authenticate`` answers every failure with
the same ``AuthError`` and performs a password verification even for
unknown usernames, so callers cannot tell which half of the credentials
was wrong.
"""

import logging
import sqlite3
from typing import Optional

from ..core.db import store_errors
from ..core.errors import AuthError, ConflictError
from ..core.security import AdminIdentity, dummy_password_hash, hash_password, verify_password
from ..schemas.admin import AdminCredentials, AdminRead

logger = logging.getLogger(__name__)


class AdminService:
    """Credential store operations for admin accounts."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    async def count_admins(self) -> int:
        with store_errors("count admins"):
            row = self.conn.execute("SELECT COUNT(*) AS count FROM admins").fetchone()
        return row["count"]

    async def get_admin(self, username: str) -> Optional[AdminRead]:
        with store_errors("load admin"):
            row = self.conn.execute(
                "SELECT id, username FROM admins WHERE username = ?",
                (username,),
            ).fetchone()
        if row is None:
            return None
        return AdminRead(id=row["id"], username=row["username"])

    async def register(self, data: AdminCredentials) -> AdminRead:
        """Create an admin.  Raises ``ConflictError`` if the username is taken."""
        hashed = hash_password(data.password)
        with store_errors("register admin"):
            try:
                cursor = self.conn.execute(
                    "INSERT INTO admins (username, password) VALUES (?, ?)",
                    (data.username, hashed),
                )
            except sqlite3.IntegrityError:
                # UNIQUE(username)
                self.conn.rollback()
                raise ConflictError("Admin already exists") from None
            self.conn.commit()
        logger.info("Registered admin %s", data.username)
        return AdminRead(id=cursor.lastrowid, username=data.username)

    async def authenticate(self, username: str, password: str) -> AdminIdentity:
        """Check a username/password pair and return the admin identity.

        Raises ``AuthError("Invalid credentials")`` whether the username
        is unknown or the password is wrong.
        """
        with store_errors("authenticate admin"):
            row = self.conn.execute(
                "SELECT id, username, password FROM admins WHERE username = ?",
                (username,),
            ).fetchone()
        if row is None:
            verify_password(password, dummy_password_hash())
            logger.warning("Failed login for unknown admin")
            raise AuthError("Invalid credentials")
        if not verify_password(password, row["password"]):
            logger.warning("Failed login for admin %s", username)
            raise AuthError("Invalid credentials")
        return AdminIdentity(username=row["username"], admin_id=row["id"])
