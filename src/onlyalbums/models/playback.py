# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Playback queue entries and now-playing snapshots."""

from pydantic import Field

from onlyalbums.models.album import Track
from onlyalbums.models.base import OnlyAlbumsBaseModel
from onlyalbums.models.enums import PlaybackStatus


class QueueEntry(OnlyAlbumsBaseModel):
    """An item in the playback queue."""

    id: str = Field(..., description="Identifier of the queued item")
    title: str | None = Field(None, description="Item title, if known")
    artist_name: str | None = Field(None, description="Item artist, if known")
    artwork_url: str | None = Field(None, description="Cover image URL")
    preview_url: str = Field(..., description="Audio URL handed to the media player")

    @classmethod
    def from_track(cls, track: Track, artwork_url: str | None = None) -> "QueueEntry":
        """Build a queue entry from a playable track."""
        if not track.preview_url:
            msg = f"Track {track.id} has no playable URL"
            raise ValueError(msg)
        return cls(
            id=track.id,
            title=track.title or None,
            artist_name=track.artist_name or None,
            artwork_url=track.artwork_url or artwork_url,
            preview_url=track.preview_url,
        )


class PlaybackSnapshot(OnlyAlbumsBaseModel):
    """Display fields derived from the live playback state."""

    status: PlaybackStatus = Field(default=PlaybackStatus.STOPPED)
    title: str = Field(default="")
    subtitle: str = Field(default="")
    artwork_url: str | None = Field(None)

    @property
    def is_active(self) -> bool:
        """Check if something is loaded in the player."""
        return bool(self.title)

    @property
    def is_playing(self) -> bool:
        """Check if playback is running."""
        return self.status == PlaybackStatus.PLAYING
