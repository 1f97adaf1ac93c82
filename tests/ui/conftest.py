# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Shared fixtures and fakes for UI tests."""

import sys
from collections.abc import Sequence

import pytest
from PyQt6.QtGui import QColor, QImage
from PyQt6.QtWidgets import QApplication

from onlyalbums.catalog.base import BaseCatalogClient, PlaybackSurface
from onlyalbums.catalog.exceptions import AlbumNotFoundError
from onlyalbums.config.user import UserConfig
from onlyalbums.models.album import Album, Track
from onlyalbums.models.enums import AuthorizationStatus, PlaybackStatus, StreamingSource
from onlyalbums.models.hidden_service import HiddenAlbumsService
from onlyalbums.models.playback import QueueEntry
from onlyalbums.ui.config_manager import ConfigManager


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for testing."""
    if not QApplication.instance():
        app = QApplication(sys.argv)
        app.setApplicationName("OnlyAlbumsTest")
        app.setOrganizationName("onlyalbums-test")
        yield app
        app.quit()
    else:
        yield QApplication.instance()


# qtbot fixture is provided by pytest-qt plugin


class StubPlayback(PlaybackSurface):
    """Playback surface that records queued entries."""

    def __init__(self):
        self.status = PlaybackStatus.STOPPED
        self.queue: list[QueueEntry] = []

    def current_status(self) -> PlaybackStatus:
        return self.status

    def current_entry(self) -> QueueEntry | None:
        return self.queue[0] if self.queue else None

    async def set_queue(
        self, entries: Sequence[QueueEntry], *, autoplay: bool = True
    ) -> None:
        self.queue = list(entries)
        if autoplay:
            self.status = PlaybackStatus.PLAYING

    async def play(self) -> None:
        self.status = PlaybackStatus.PLAYING

    async def pause(self) -> None:
        self.status = PlaybackStatus.PAUSED

    async def skip_next(self) -> None:
        pass

    async def skip_previous(self) -> None:
        pass


class FakeCatalogClient(BaseCatalogClient):
    """In-memory catalog client.

    ``authorized`` decides the outcome of ``ensure_authorized``; the
    ``*_error`` attributes make the matching request raise.
    """

    def __init__(self, albums: Sequence[Album] = (), authorized: bool = True):
        super().__init__(StubPlayback(), {"access_token": "token"})
        self.albums = list(albums)
        self.authorized = authorized
        self.library_error: Exception | None = None
        self.detail_error: Exception | None = None
        self.play_error: Exception | None = None
        self.detail_requests: list[str] = []
        self.played: list[list[Track]] = []

    @property
    def service_name(self) -> str:
        return "Deezer"

    @property
    def streaming_source(self) -> StreamingSource:
        return StreamingSource.DEEZER

    async def ensure_authorized(self) -> bool:
        self._authorization_status = (
            AuthorizationStatus.AUTHORIZED
            if self.authorized
            else AuthorizationStatus.DENIED
        )
        return self.authorized

    async def fetch_favorited_albums(self) -> list[Album]:
        if self.library_error is not None:
            raise self.library_error
        return list(self.albums)

    async def fetch_album_detail(self, album_id: str) -> Album:
        self.detail_requests.append(album_id)
        if self.detail_error is not None:
            raise self.detail_error
        album = next((a for a in self.albums if a.id == album_id), None)
        if album is None:
            msg = f"Album {album_id} not found"
            raise AlbumNotFoundError(msg, album_id=album_id)
        return _hydrate(album)

    async def play_tracks(self, tracks: Sequence[Track]) -> None:
        if self.play_error is not None:
            raise self.play_error
        self.played.append(list(tracks))
        await self.playback.set_queue(
            [QueueEntry.from_track(t) for t in tracks if t.is_playable]
        )


def _hydrate(album: Album, count: int = 2) -> Album:
    """Return the album with a short playable track listing."""
    tracks = tuple(
        Track(
            id=f"{album.id}-t{i}",
            title=f"{album.title} {i}",
            artist_name=album.artist_name,
            track_number=i,
            duration_seconds=180 + i,
            preview_url=f"https://cdn/preview/{album.id}/{i}.mp3",
            artwork_url=album.artwork_url,
        )
        for i in range(1, count + 1)
    )
    return album.model_copy(update={"tracks": tracks, "track_count": count})


@pytest.fixture
def sample_albums(make_album) -> list[Album]:
    """A small library spanning several sections."""
    return [
        make_album("Abbey Road", "The Beatles", id="a1"),
        make_album("Blue", "Joni Mitchell", id="b1"),
        make_album("1989", "Taylor Swift", id="n1"),
        make_album("apple", "Fruit", id="a2"),
    ]


@pytest.fixture
def fake_client(sample_albums) -> FakeCatalogClient:
    return FakeCatalogClient(sample_albums)


@pytest.fixture
def hidden_service(temp_db) -> HiddenAlbumsService:
    return HiddenAlbumsService(temp_db)


@pytest.fixture
def config_manager(tmp_path) -> ConfigManager:
    """Config manager writing under a temporary directory."""
    manager = ConfigManager(tmp_path / "config.json")
    config = manager.load_config()
    config.artwork.cache_dir = tmp_path / "artwork"
    config.database.database_path = tmp_path / "library.db"
    manager.save_config()
    return manager


@pytest.fixture
def sample_user_config():
    """Create a sample UserConfig for testing."""
    return UserConfig()


@pytest.fixture
def sample_image() -> QImage:
    """Create a small solid-color image."""
    image = QImage(20, 20, QImage.Format.Format_RGB32)
    image.fill(QColor("red"))
    return image


@pytest.fixture
def hydrate():
    """Give albums a short playable track listing."""
    return _hydrate
