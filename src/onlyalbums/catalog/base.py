# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Base abstract classes for catalog clients and playback surfaces."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from onlyalbums.models.album import Album, Track
from onlyalbums.models.enums import AuthorizationStatus, PlaybackStatus, StreamingSource
from onlyalbums.models.playback import QueueEntry


class PlaybackSurface(ABC):
    """Live player state and transport controls.

    State reads are synchronous and cheap so they can run on a timer.
    Transport requests are coroutines that either complete or raise
    ``PlaybackError``.
    """

    @abstractmethod
    def current_status(self) -> PlaybackStatus:
        """Get the current playback status."""
        ...

    @abstractmethod
    def current_entry(self) -> QueueEntry | None:
        """Get the queue entry being played, if any."""
        ...

    @abstractmethod
    async def set_queue(
        self, entries: Sequence[QueueEntry], *, autoplay: bool = True
    ) -> None:
        """Replace the queue."""
        ...

    @abstractmethod
    async def play(self) -> None:
        """Start or resume playback."""
        ...

    @abstractmethod
    async def pause(self) -> None:
        """Pause playback."""
        ...

    @abstractmethod
    async def skip_next(self) -> None:
        """Advance to the next queue entry."""
        ...

    @abstractmethod
    async def skip_previous(self) -> None:
        """Go back to the previous queue entry."""
        ...


class BaseCatalogClient(ABC):
    """Abstract base class for streaming catalog clients."""

    def __init__(
        self, playback: PlaybackSurface, credentials: dict[str, Any] | None = None
    ):
        """Initialize the client with a playback surface and optional credentials."""
        self.credentials = credentials or {}
        self._playback = playback
        self._authorization_status = AuthorizationStatus.NOT_DETERMINED

    @property
    @abstractmethod
    def service_name(self) -> str:
        """Get the name of the streaming service."""
        ...

    @property
    @abstractmethod
    def streaming_source(self) -> StreamingSource:
        """Get the StreamingSource enum value."""
        ...

    @property
    def authorization_status(self) -> AuthorizationStatus:
        """Get the last known authorization status."""
        return self._authorization_status

    @property
    def playback(self) -> PlaybackSurface:
        """Get the live playback surface."""
        return self._playback

    @abstractmethod
    async def ensure_authorized(self) -> bool:
        """Make sure catalog access is granted.

        Idempotent: once authorized, later calls return True without I/O.
        """
        ...

    @abstractmethod
    async def fetch_favorited_albums(self) -> list[Album]:
        """Fetch the albums saved in the user's library."""
        ...

    @abstractmethod
    async def fetch_album_detail(self, album_id: str) -> Album:
        """Fetch an album hydrated with its tracks."""
        ...

    @abstractmethod
    async def play_tracks(self, tracks: Sequence[Track]) -> None:
        """Replace the playback queue with the tracks and start playing."""
        ...

    def reset_authorization(self, credentials: dict[str, Any] | None = None) -> None:
        """Forget the authorization state, optionally switching credentials."""
        if credentials is not None:
            self.credentials = credentials
        self._authorization_status = AuthorizationStatus.NOT_DETERMINED

    async def cleanup(self) -> None:  # noqa: B027
        """Clean up resources. Override in subclasses if needed."""
