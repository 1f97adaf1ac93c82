# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Service layer for the hidden-albums store."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from onlyalbums.models.database import HiddenAlbum
from onlyalbums.models.db_manager import get_library_db

if TYPE_CHECKING:
    from collections.abc import Iterable

    from onlyalbums.models.db_manager import DatabaseManager

logger = logging.getLogger(__name__)


class HiddenAlbumsService:
    """Insert, delete and list hidden album ids.

    Each call runs in its own session and commits immediately, so a hide or
    unhide is visible to the next read.
    """

    def __init__(self, db_manager: DatabaseManager | None = None) -> None:
        self.db = db_manager or get_library_db()

    def insert(
        self,
        album_id: str,
        hidden_at: datetime | None = None,
        *,
        title: str | None = None,
        artist_name: str | None = None,
    ) -> bool:
        """Hide an album, refreshing the timestamp if it is already hidden.

        Returns True on success, False if a DB error occurred.
        """
        hidden_at = hidden_at or datetime.now(UTC)
        try:
            with self.db.get_session() as session:
                existing = session.get(HiddenAlbum, album_id)
                if existing:
                    existing.hidden_at = hidden_at
                    if title:
                        existing.title = title
                    if artist_name:
                        existing.artist_name = artist_name
                else:
                    session.add(
                        HiddenAlbum(
                            album_id=album_id,
                            hidden_at=hidden_at,
                            title=title,
                            artist_name=artist_name,
                        )
                    )
                session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to hide album %s", album_id)
            return False
        else:
            logger.info("Album %s hidden", album_id)
            return True

    def delete(self, album_id: str) -> bool:
        """Unhide an album. Deleting an id that is not hidden succeeds."""
        try:
            with self.db.get_session() as session:
                row = session.get(HiddenAlbum, album_id)
                if not row:
                    return True
                session.delete(row)
                session.commit()
        except SQLAlchemyError:
            logger.exception("Failed to unhide album %s", album_id)
            return False
        else:
            logger.info("Album %s unhidden", album_id)
            return True

    def list_all(self) -> list[dict[str, Any]]:
        """Return all hidden albums as dictionaries, most recently hidden first."""
        try:
            with self.db.get_session() as session:
                rows: Iterable[HiddenAlbum] = session.scalars(
                    select(HiddenAlbum).order_by(HiddenAlbum.hidden_at.desc())
                )
                return [row.to_dict() for row in rows]
        except SQLAlchemyError:
            logger.exception("Failed to list hidden albums")
            return []

    def hidden_ids(self) -> set[str]:
        """Return the set of hidden album ids."""
        try:
            with self.db.get_session() as session:
                return set(session.scalars(select(HiddenAlbum.album_id)))
        except SQLAlchemyError:
            logger.exception("Failed to read hidden album ids")
            return set()

    def is_hidden(self, album_id: str) -> bool:
        """Check if an album is hidden."""
        try:
            with self.db.get_session() as session:
                return session.get(HiddenAlbum, album_id) is not None
        except SQLAlchemyError:
            logger.exception("Failed to check hidden state of %s", album_id)
            return False
