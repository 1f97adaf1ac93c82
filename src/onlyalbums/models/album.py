# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Album and track models."""

from datetime import date

from pydantic import Field, field_validator

from onlyalbums.models.base import OnlyAlbumsBaseModel
from onlyalbums.models.enums import StreamingSource


class Track(OnlyAlbumsBaseModel):
    """A single track of a hydrated album."""

    id: str = Field(..., description="Track identifier from the catalog")
    title: str = Field(default="", description="Track title")
    artist_name: str = Field(default="", description="Performing artist")
    track_number: int | None = Field(None, description="Position on the album")
    duration_seconds: int | None = Field(None, description="Track length")
    preview_url: str | None = Field(None, description="Streamable audio URL")
    artwork_url: str | None = Field(None, description="Cover image URL")

    @field_validator("duration_seconds")
    @classmethod
    def validate_duration(cls, v: int | None) -> int | None:
        """Validate duration is non-negative."""
        if v is not None and v < 0:
            msg = "Track duration must be non-negative"
            raise ValueError(msg)
        return v

    @property
    def duration_formatted(self) -> str:
        """Get duration in M:SS format."""
        if not self.duration_seconds:
            return "0:00"
        minutes, seconds = divmod(self.duration_seconds, 60)
        return f"{minutes}:{seconds:02d}"

    @property
    def is_playable(self) -> bool:
        """Check if the track has a URL the queue player can stream."""
        return bool(self.preview_url)


class Album(OnlyAlbumsBaseModel):
    """An album from the user's library.

    ``tracks`` stays ``None`` for albums seen only in the library listing and
    is populated once the album has been hydrated with its detail.
    """

    id: str = Field(..., description="Album identifier from the catalog")
    title: str = Field(default="", description="Album title")
    artist_name: str = Field(default="", description="Album artist")
    release_date: date | None = Field(None, description="Release date")
    artwork_url: str | None = Field(None, description="Cover image URL")
    tracks: tuple[Track, ...] | None = Field(
        None, description="Ordered tracks, set after hydration"
    )
    track_count: int = Field(default=0, description="Number of tracks")
    source: StreamingSource = Field(
        default=StreamingSource.DEEZER, description="Catalog the album came from"
    )

    @field_validator("track_count")
    @classmethod
    def validate_track_count(cls, v: int) -> int:
        """Validate track count is non-negative."""
        if v < 0:
            msg = "Track count must be non-negative"
            raise ValueError(msg)
        return v

    @property
    def release_year(self) -> int | None:
        """Get the release year if the release date is known."""
        if self.release_date is None:
            return None
        return self.release_date.year

    @property
    def is_hydrated(self) -> bool:
        """Check if the album carries its track listing."""
        return self.tracks is not None

    @property
    def playable_tracks(self) -> list[Track]:
        """Get the tracks that can be queued for playback."""
        return [t for t in self.tracks or () if t.is_playable]
