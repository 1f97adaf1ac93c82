# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Deezer catalog client backed by deezer-python.

Library albums and album detail come from the Deezer REST API through
`deezer.Client`. Deezer only exposes 30-second MP3 previews to third-party
applications, so playback queues those previews on the local queue player.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Sequence
from datetime import date
from typing import Any

import deezer
import requests
from deezer.exceptions import (
    DeezerAPIException,
    DeezerErrorResponse,
    DeezerForbiddenError,
    DeezerNotFoundError,
)

from onlyalbums.catalog.base import BaseCatalogClient, PlaybackSurface
from onlyalbums.catalog.exceptions import (
    AlbumNotFoundError,
    CatalogError,
    CatalogFetchError,
    NotAuthorizedError,
    PlaybackError,
)
from onlyalbums.models.album import Album, Track
from onlyalbums.models.enums import AuthorizationStatus, StreamingSource
from onlyalbums.models.playback import QueueEntry

logger = logging.getLogger(__name__)

DEFAULT_FETCH_LIMIT = 500

# Deezer error codes (https://developers.deezer.com/api/errors)
_OAUTH_ERROR_CODES = frozenset({200, 300})
_NO_DATA_ERROR_CODE = 800


class DeezerCatalogClient(BaseCatalogClient):
    """Deezer-specific catalog client backed by deezer-python API."""

    def __init__(
        self,
        playback: PlaybackSurface,
        credentials: dict[str, Any] | None = None,
        fetch_limit: int = DEFAULT_FETCH_LIMIT,
    ):
        super().__init__(playback, credentials)
        self.client: deezer.Client | None = None
        self.fetch_limit = fetch_limit

    @property
    def service_name(self) -> str:
        """Get the name of the streaming service."""
        return "Deezer"

    @property
    def streaming_source(self) -> StreamingSource:
        """Get the StreamingSource enum value."""
        return StreamingSource.DEEZER

    @property
    def access_token(self) -> str:
        """Get the OAuth access token from the credentials."""
        token = (self.credentials or {}).get("access_token")
        return token.strip() if isinstance(token, str) else ""

    def reset_authorization(self, credentials: dict[str, Any] | None = None) -> None:
        """Forget the authorization state and drop the current client."""
        super().reset_authorization(credentials)
        self.client = None

    async def ensure_authorized(self) -> bool:
        """Validate the configured access token against the current user.

        Without a token the status becomes DENIED. A rejected token also
        results in DENIED; a transport failure raises CatalogFetchError and
        leaves the status undetermined so the next call retries.
        """
        if self._authorization_status == AuthorizationStatus.AUTHORIZED:
            return True

        token = self.access_token
        if not token:
            logger.info("No Deezer access token configured")
            self._authorization_status = AuthorizationStatus.DENIED
            return False

        client = deezer.Client(access_token=token)
        try:
            user = await asyncio.to_thread(client.get_user)
        except (DeezerAPIException, requests.RequestException) as e:
            translated = _translate_error(e)
            if isinstance(translated, NotAuthorizedError):
                logger.warning("Deezer rejected the access token: %s", e)
                self._authorization_status = AuthorizationStatus.DENIED
                return False
            raise translated from e

        self.client = client
        self._authorization_status = AuthorizationStatus.AUTHORIZED
        logger.info("Authorized with Deezer as %s", getattr(user, "name", "unknown"))
        return True

    async def fetch_favorited_albums(self) -> list[Album]:
        """Fetch the albums saved in the user's Deezer library."""
        client = await self._require_client()

        def _load() -> list[dict[str, Any]]:
            page = client.get_user_albums()
            return [res.as_dict() for res in itertools.islice(page, self.fetch_limit)]

        try:
            raw_albums = await asyncio.to_thread(_load)
        except (DeezerAPIException, requests.RequestException) as e:
            raise self._handle_request_error(e) from e

        albums = [_build_album(data) for data in raw_albums]
        logger.info("Fetched %d library albums from Deezer", len(albums))
        return albums

    async def fetch_album_detail(self, album_id: str) -> Album:
        """Fetch album metadata including all tracks."""
        client = await self._require_client()

        def _load() -> tuple[dict[str, Any], list[dict[str, Any]]]:
            album_res = client.get_album(int(album_id))
            tracks = [t.as_dict() for t in album_res.get_tracks()]
            return album_res.as_dict(), tracks

        try:
            album_data, tracks_data = await asyncio.to_thread(_load)
        except ValueError as e:
            msg = f"Invalid Deezer album id: {album_id}"
            raise AlbumNotFoundError(msg, album_id=album_id) from e
        except (DeezerAPIException, requests.RequestException) as e:
            raise self._handle_request_error(e, album_id=album_id) from e

        album = _build_album(album_data, tracks_data)
        logger.debug("Hydrated album %s with %d tracks", album.id, len(album.tracks or ()))
        return album

    async def play_tracks(self, tracks: Sequence[Track]) -> None:
        """Queue the playable tracks and start playback."""
        if not await self.ensure_authorized():
            msg = "Deezer access is not authorized"
            raise NotAuthorizedError(msg, source=self.streaming_source.value)

        entries = [QueueEntry.from_track(t) for t in tracks if t.is_playable]
        if not entries:
            msg = "None of the tracks can be played"
            raise PlaybackError(msg, {"track_count": len(tracks)})

        logger.info("Queueing %d of %d tracks", len(entries), len(tracks))
        await self.playback.set_queue(entries, autoplay=True)

    async def cleanup(self) -> None:
        """Drop the HTTP client."""
        if self.client is not None:
            session = getattr(self.client, "session", None)
            if session is not None and hasattr(session, "close"):
                session.close()
            self.client = None

    async def _require_client(self) -> deezer.Client:
        """Return an authorized client or raise NotAuthorizedError."""
        if not await self.ensure_authorized() or self.client is None:
            msg = "Deezer access is not authorized"
            raise NotAuthorizedError(msg, source=self.streaming_source.value)
        return self.client

    def _handle_request_error(
        self, error: Exception, album_id: str | None = None
    ) -> CatalogError:
        """Translate a request error, dropping authorization if it was revoked."""
        translated = _translate_error(error, album_id=album_id)
        if isinstance(translated, NotAuthorizedError):
            logger.warning("Deezer access was revoked: %s", error)
            self._authorization_status = AuthorizationStatus.DENIED
            self.client = None
        return translated


def _error_code(error: DeezerErrorResponse) -> int | None:
    """Extract the numeric error code from a Deezer error payload."""
    payload = getattr(error, "json_data", None)
    if isinstance(payload, dict):
        code = (payload.get("error") or {}).get("code")
        if isinstance(code, int):
            return code
    return None


def _translate_error(error: Exception, album_id: str | None = None) -> CatalogError:
    """Map deezer-python and requests errors onto catalog exceptions."""
    source = StreamingSource.DEEZER.value
    if isinstance(error, DeezerForbiddenError):
        return NotAuthorizedError(str(error), source=source)
    if isinstance(error, DeezerNotFoundError):
        return AlbumNotFoundError(f"Album {album_id} not found", album_id=album_id)
    if isinstance(error, DeezerErrorResponse):
        code = _error_code(error)
        if code in _OAUTH_ERROR_CODES:
            return NotAuthorizedError(str(error), source=source)
        if code == _NO_DATA_ERROR_CODE and album_id is not None:
            return AlbumNotFoundError(f"Album {album_id} not found", album_id=album_id)
        return CatalogFetchError(str(error), details={"code": code})
    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)
    return CatalogFetchError(str(error), status_code=status_code)


def _parse_release_date(value: Any) -> date | None:
    """Parse Deezer release dates ("YYYY-MM-DD", date objects, "0000-00-00")."""
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _get_album_cover_url(album_dict: dict[str, Any]) -> str | None:
    """Pick the largest cover URL the payload offers."""
    for key in ("cover_xl", "cover_big", "cover_medium", "cover"):
        url = album_dict.get(key)
        if isinstance(url, str) and url:
            return url
    return None


def _get_artist_name(item: dict[str, Any]) -> str:
    """Get the artist name from a nested Deezer artist payload."""
    artist = item.get("artist")
    if isinstance(artist, dict):
        return str(artist.get("name") or "")
    return str(artist or "")


def _build_track(track_dict: dict[str, Any], album_artwork: str | None) -> Track:
    """Convert a Deezer track payload into a Track."""
    duration = track_dict.get("duration")
    return Track(
        id=str(track_dict.get("id")),
        title=str(track_dict.get("title") or ""),
        artist_name=_get_artist_name(track_dict),
        track_number=track_dict.get("track_position"),
        duration_seconds=int(duration) if duration is not None else None,
        preview_url=track_dict.get("preview") or None,
        artwork_url=album_artwork,
    )


def _build_album(
    album_dict: dict[str, Any], tracks: list[dict[str, Any]] | None = None
) -> Album:
    """Convert a Deezer album payload (and optional track payloads) into an Album."""
    artwork = _get_album_cover_url(album_dict)
    built_tracks = (
        tuple(_build_track(t, artwork) for t in tracks) if tracks is not None else None
    )
    track_count = album_dict.get("nb_tracks")
    if not track_count and built_tracks is not None:
        track_count = len(built_tracks)
    return Album(
        id=str(album_dict.get("id")),
        title=str(album_dict.get("title") or ""),
        artist_name=_get_artist_name(album_dict),
        release_date=_parse_release_date(album_dict.get("release_date")),
        artwork_url=artwork,
        tracks=built_tracks,
        track_count=int(track_count or 0),
        source=StreamingSource.DEEZER,
    )
