# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Catalog service running client requests on background threads."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot
from PyQt6.QtGui import QImage

from onlyalbums.catalog.base import BaseCatalogClient
from onlyalbums.catalog.exceptions import CatalogError, NotAuthorizedError
from onlyalbums.models.album import Album
from onlyalbums.ui.workers import ArtworkFetcher, CatalogTaskWorker

logger = logging.getLogger(__name__)

LIBRARY_TAG_PREFIX = "library:"
DETAIL_TAG_PREFIX = "detail:"
PLAY_TAG_PREFIX = "play:"


class CatalogService(QObject):
    """Service for loading the library, album detail, artwork and playback.

    Every request runs in its own worker thread; results come back on the
    thread that owns the service.
    """

    authorization_changed = pyqtSignal(object)  # AuthorizationStatus
    albums_loaded = pyqtSignal(list)  # list[Album]
    albums_failed = pyqtSignal(object)  # CatalogError
    album_detail_ready = pyqtSignal(object)  # Album
    album_detail_failed = pyqtSignal(str, object)  # album_id, CatalogError
    playback_started = pyqtSignal(str)  # album_id
    playback_failed = pyqtSignal(str, object)  # album_id, CatalogError
    artwork_ready = pyqtSignal(str, QImage)  # key, image

    def __init__(
        self,
        client: BaseCatalogClient,
        artwork_cache_dir: Path | None = None,
        artwork_timeout: float = 10.0,
        parent=None,
    ):
        super().__init__(parent)
        self.client = client
        self.artwork_cache_dir = artwork_cache_dir
        self.artwork_timeout = artwork_timeout
        self._workers: set[CatalogTaskWorker] = set()
        self._artwork_fetchers: set[ArtworkFetcher] = set()
        self._hydrated: dict[str, Album] = {}
        self._library_generation = 0

    @property
    def active_workers(self) -> int:
        """Count requests still running."""
        return len(self._workers)

    def update_credentials(self, credentials: dict[str, Any]) -> None:
        """Switch credentials; the next request re-authorizes.

        Library loads started before the switch are dropped when they finish.
        """
        self._library_generation += 1
        self.client.reset_authorization(credentials)
        self._hydrated.clear()
        self.authorization_changed.emit(self.client.authorization_status)

    def hydrated_album(self, album_id: str) -> Album | None:
        """Get a previously hydrated album."""
        return self._hydrated.get(album_id)

    def load_library(self) -> CatalogTaskWorker:
        """Authorize if needed, then fetch the library albums."""

        async def _load() -> list[Album] | None:
            if not await self.client.ensure_authorized():
                return None
            return await self.client.fetch_favorited_albums()

        return self._start_worker(_load, self._library_tag())

    def fetch_album_detail(self, album_id: str) -> CatalogTaskWorker:
        """Hydrate an album with its tracks."""
        return self._start_worker(
            lambda: self.client.fetch_album_detail(album_id),
            DETAIL_TAG_PREFIX + album_id,
        )

    def play_album(self, album: Album) -> CatalogTaskWorker:
        """Play an album, hydrating it first when its tracks are unknown."""
        known = album if album.is_hydrated else self._hydrated.get(album.id)

        async def _play() -> Album:
            hydrated = known or await self.client.fetch_album_detail(album.id)
            await self.client.play_tracks(hydrated.tracks or ())
            return hydrated

        return self._start_worker(_play, PLAY_TAG_PREFIX + album.id)

    def fetch_artwork(
        self, requests: Sequence[tuple[str, str]]
    ) -> ArtworkFetcher | None:
        """Download artwork for ``(key, url)`` pairs."""
        requests = [(key, url) for key, url in requests if url]
        if not requests:
            return None
        fetcher = ArtworkFetcher(
            requests,
            cache_dir=self.artwork_cache_dir,
            timeout_seconds=self.artwork_timeout,
        )
        fetcher.artwork_ready.connect(self.artwork_ready.emit)
        fetcher.finished.connect(lambda: self._artwork_fetchers.discard(fetcher))
        self._artwork_fetchers.add(fetcher)
        fetcher.start()
        return fetcher

    def _start_worker(
        self, task_factory: Callable[[], Awaitable[Any]], tag: str
    ) -> CatalogTaskWorker:
        worker = CatalogTaskWorker(task_factory, tag)
        worker.succeeded.connect(self._on_task_succeeded)
        worker.failed.connect(self._on_task_failed)
        worker.finished.connect(lambda: self._workers.discard(worker))
        self._workers.add(worker)
        worker.start()
        return worker

    def _library_tag(self) -> str:
        return f"{LIBRARY_TAG_PREFIX}{self._library_generation}"

    def _is_stale(self, tag: str) -> bool:
        if not tag.startswith(LIBRARY_TAG_PREFIX) or tag == self._library_tag():
            return False
        logger.debug("Dropping result of superseded request %s", tag)
        return True

    @pyqtSlot(str, object)
    def _on_task_succeeded(self, tag: str, result: Any) -> None:
        if self._is_stale(tag):
            return
        self.authorization_changed.emit(self.client.authorization_status)

        if tag.startswith(LIBRARY_TAG_PREFIX):
            if result is None:
                msg = f"{self.client.service_name} access is not authorized"
                self.albums_failed.emit(NotAuthorizedError(msg))
            else:
                self.albums_loaded.emit(result)
        elif tag.startswith(DETAIL_TAG_PREFIX):
            self._hydrated[result.id] = result
            self.album_detail_ready.emit(result)
        elif tag.startswith(PLAY_TAG_PREFIX):
            self._hydrated[result.id] = result
            self.playback_started.emit(tag.removeprefix(PLAY_TAG_PREFIX))

    @pyqtSlot(str, object)
    def _on_task_failed(self, tag: str, error: Exception) -> None:
        if self._is_stale(tag):
            return
        self.authorization_changed.emit(self.client.authorization_status)

        if not isinstance(error, CatalogError):
            logger.error("Unexpected error in %s: %s", tag, error)
            error = CatalogError(str(error) or error.__class__.__name__)

        if tag.startswith(LIBRARY_TAG_PREFIX):
            self.albums_failed.emit(error)
        elif tag.startswith(DETAIL_TAG_PREFIX):
            self.album_detail_failed.emit(tag.removeprefix(DETAIL_TAG_PREFIX), error)
        elif tag.startswith(PLAY_TAG_PREFIX):
            self.playback_failed.emit(tag.removeprefix(PLAY_TAG_PREFIX), error)

    def cleanup(self) -> None:
        """Wait for running requests and stop artwork downloads."""
        for fetcher in list(self._artwork_fetchers):
            fetcher.cancel()
            fetcher.wait(2000)
        for worker in list(self._workers):
            worker.wait(2000)
