# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Background threads for catalog requests and artwork downloads."""

import asyncio
import hashlib
import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

import aiohttp
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QImage

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENT_DOWNLOADS = 6


class CatalogTaskWorker(QThread):
    """Runs one catalog coroutine on its own asyncio loop.

    Exactly one of ``succeeded`` or ``failed`` is emitted per run, carrying
    the worker's tag so the receiver knows which request finished.
    """

    succeeded = pyqtSignal(str, object)  # tag, coroutine result
    failed = pyqtSignal(str, object)  # tag, exception

    def __init__(
        self,
        task_factory: Callable[[], Awaitable[Any]],
        tag: str = "",
        parent=None,
    ):
        super().__init__(parent)
        self.task_factory = task_factory
        self.tag = tag

    def run(self):
        """Run the coroutine to completion."""
        try:
            result = asyncio.run(self._run_task())
        except Exception as e:
            logger.warning("Catalog task %r failed: %s", self.tag, e, exc_info=True)
            self.failed.emit(self.tag, e)
        else:
            self.succeeded.emit(self.tag, result)

    async def _run_task(self) -> Any:
        return await self.task_factory()


class ArtworkFetcher(QThread):
    """Downloads cover images with aiohttp and caches them on disk.

    Requests are ``(key, url)`` pairs. Keys whose download fails get no
    ``artwork_ready`` emission and keep their placeholder.
    """

    artwork_ready = pyqtSignal(str, QImage)  # key, image

    def __init__(
        self,
        requests: Sequence[tuple[str, str]],
        cache_dir: Path | None = None,
        timeout_seconds: float = 10.0,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT_DOWNLOADS,
        parent=None,
    ):
        super().__init__(parent)
        self.requests = list(requests)
        self.cache_dir = cache_dir or Path.home() / ".cache" / "onlyalbums"
        self.timeout_seconds = timeout_seconds
        self.max_concurrent = max_concurrent
        self._cancelled = False

    def cancel(self) -> None:
        """Stop emitting results for requests that have not finished."""
        self._cancelled = True

    def run(self):
        """Fetch all requested artwork."""
        if not self.requests:
            return
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            asyncio.run(self._fetch_all())
        except Exception:
            logger.exception("Artwork fetching stopped unexpectedly")

    async def _fetch_all(self) -> None:
        semaphore = asyncio.Semaphore(self.max_concurrent)
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:

            async def fetch(key: str, url: str) -> None:
                async with semaphore:
                    if self._cancelled:
                        return
                    image = await self._download_artwork(session, url)
                if image is not None and not self._cancelled:
                    self.artwork_ready.emit(key, image)

            await asyncio.gather(*(fetch(key, url) for key, url in self.requests))

    def cache_file_for(self, artwork_url: str) -> Path:
        """Get the cache location for an artwork URL."""
        url_hash = hashlib.sha256(artwork_url.encode()).hexdigest()
        return self.cache_dir / f"artwork_{url_hash}.jpg"

    async def _download_artwork(
        self, session: aiohttp.ClientSession, artwork_url: str
    ) -> QImage | None:
        """Load artwork from the cache or the network."""
        cache_file = self.cache_file_for(artwork_url)
        if cache_file.exists():
            image = QImage(str(cache_file))
            if not image.isNull():
                return image

        try:
            image = await self._fetch_artwork_from_url(session, artwork_url)
        except (aiohttp.ClientError, TimeoutError):
            logger.warning("Failed to fetch artwork %s", artwork_url, exc_info=True)
            image = None

        if image is None or image.isNull():
            return None

        if not image.save(str(cache_file), "JPG"):
            logger.debug("Could not cache artwork at %s", cache_file)
        return image

    async def _fetch_artwork_from_url(
        self, session: aiohttp.ClientSession, artwork_url: str
    ) -> QImage | None:
        """Fetch artwork from URL using aiohttp."""
        async with session.get(artwork_url) as response:
            if response.status != 200:
                logger.warning(
                    "HTTP %d when fetching artwork from %s",
                    response.status,
                    artwork_url,
                )
                return None
            image_data = await response.read()

        image = QImage()
        if image.loadFromData(image_data):
            return image
        logger.warning("Failed to load image data from %s", artwork_url)
        return None
