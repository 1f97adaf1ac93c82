# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Enums for catalog sources, sorting, playback and authorization state."""

from enum import StrEnum


class StreamingSource(StrEnum):
    """Supported streaming catalogs."""

    DEEZER = "deezer"
    UNKNOWN = "unknown"


class SortMode(StrEnum):
    """Album list orderings offered by the sort menu."""

    BY_TITLE = "by_title"
    BY_ARTIST_THEN_TITLE = "by_artist_then_title"

    @property
    def label(self) -> str:
        """Human-readable label shown in the sort menu."""
        if self is SortMode.BY_ARTIST_THEN_TITLE:
            return "Artist + Album"
        return "Album"


class PlaybackStatus(StrEnum):
    """Playback states reported by the playback surface."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class AuthorizationStatus(StrEnum):
    """Catalog authorization state."""

    NOT_DETERMINED = "not_determined"
    AUTHORIZED = "authorized"
    DENIED = "denied"
