# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""SQLAlchemy ORM models for locally persisted library state."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""


class HiddenAlbum(Base):
    """An album the user chose to keep out of the album list."""

    __tablename__ = "hidden_albums"

    # Catalog album id, unique by construction
    album_id: Mapped[str] = mapped_column(String(100), primary_key=True)

    hidden_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )

    # Captured at hide time for the hidden albums page
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    artist_name: Mapped[str | None] = mapped_column(String(500), nullable=True)

    @property
    def display_title(self) -> str:
        """Get a label for the hidden albums page."""
        if self.title and self.artist_name:
            return f"{self.title} - {self.artist_name}"
        return self.title or self.album_id

    def to_dict(self) -> dict[str, object]:
        """Convert the row to a plain dictionary."""
        return {
            "album_id": self.album_id,
            "hidden_at": self.hidden_at,
            "title": self.title,
            "artist_name": self.artist_name,
            "display_title": self.display_title,
        }
