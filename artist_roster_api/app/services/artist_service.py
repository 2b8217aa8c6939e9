"""
Service layer for the ordered artist collection.

Artists are listed by ascending ``position`` (exposed as ``order``);
records sharing a position come back in insertion order (SQLite
``rowid``).  Add and reorder never renumber or deduplicate positions,
and delete leaves gaps behind.

Reordering is a batch of independent updates, each committed on its
own.  It is deliberately not a transaction: when some identifiers in a
batch are unknown, every update for a known identifier still lands and
the batch as a whole is reported as failed.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from typing import List, Sequence

from ..core.db import store_errors
from ..core.errors import NotFoundError, PartialReorderError
from ..schemas.artist import ArtistCreate, ArtistRead, ReorderItem

logger = logging.getLogger(__name__)


class ArtistService:
    """CRUD and ordering over the ``artists`` table.

    The service works on the connection it is given; opening and
    closing it is the caller's job (see ``api.deps.get_db``).
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    async def list_artists(self) -> List[ArtistRead]:
        """Return every artist ordered by ``order`` then insertion."""
        with store_errors("list artists"):
            rows = self.conn.execute(
                "SELECT id, name, instagram_url, position FROM artists "
                "ORDER BY position ASC, rowid ASC"
            ).fetchall()
        return [self._row_to_artist(row) for row in rows]

    async def add_artist(self, data: ArtistCreate) -> ArtistRead:
        """Insert a new artist under a freshly generated identifier.

        The supplied ``order`` is stored as is, even if another artist
        already uses it.
        """
        artist_id = uuid.uuid4().hex
        with store_errors("add artist"):
            self.conn.execute(
                "INSERT INTO artists (id, name, instagram_url, position) VALUES (?, ?, ?, ?)",
                (artist_id, data.name, data.instagram_url, data.order),
            )
            self.conn.commit()
        logger.info("Added artist %s (%r) at order %s", artist_id, data.name, data.order)
        return ArtistRead(id=artist_id, name=data.name, instagram_url=data.instagram_url, order=data.order)

    async def delete_artist(self, artist_id: str) -> None:
        """Delete one artist.  Raises ``NotFoundError`` if it does not exist."""
        with store_errors("delete artist"):
            cursor = self.conn.execute("DELETE FROM artists WHERE id = ?", (artist_id,))
            self.conn.commit()
        if cursor.rowcount == 0:
            raise NotFoundError("Artist not found")
        logger.info("Deleted artist %s", artist_id)

    async def reorder_artists(self, items: Sequence[ReorderItem]) -> int:
        """Apply each ``{id, order}`` pair as its own committed update.

        Updates run sequentially in the given order.  Unknown ids are
        skipped and collected; once the batch is done a
        ``PartialReorderError`` is raised if there were any.  A database
        failure stops the batch at once, leaving earlier updates applied.

        Returns the number of records updated.
        """
        applied = 0
        missing: List[str] = []
        for item in items:
            with store_errors("reorder artists"):
                cursor = self.conn.execute(
                    "UPDATE artists SET position = ? WHERE id = ?",
                    (item.order, item.id),
                )
                self.conn.commit()
            if cursor.rowcount == 0:
                missing.append(item.id)
            else:
                applied += 1
        if missing:
            logger.warning(
                "Reorder applied %d of %d updates; unknown ids: %s",
                applied,
                len(items),
                ", ".join(missing),
            )
            raise PartialReorderError(missing)
        logger.info("Reordered %d artists", applied)
        return applied

    @staticmethod
    def _row_to_artist(row: sqlite3.Row) -> ArtistRead:
        return ArtistRead(
            id=row["id"],
            name=row["name"],
            instagram_url=row["instagram_url"],
            order=row["position"],
        )
