# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Tests for the threaded catalog service."""

import pytest

from onlyalbums.catalog.exceptions import (
    AlbumNotFoundError,
    CatalogError,
    CatalogFetchError,
    NotAuthorizedError,
    PlaybackError,
)
from onlyalbums.models.enums import AuthorizationStatus
from onlyalbums.ui.catalog_service import CatalogService
from onlyalbums.ui.workers import ArtworkFetcher

TIMEOUT_MS = 5000


@pytest.fixture
def service(qapp, fake_client, tmp_path):
    svc = CatalogService(fake_client, artwork_cache_dir=tmp_path / "artwork")
    yield svc
    svc.cleanup()


class TestLibrary:
    """Test library loading."""

    def test_load_library(self, qtbot, service: CatalogService, sample_albums):
        statuses = []
        service.authorization_changed.connect(statuses.append)

        with qtbot.waitSignal(service.albums_loaded, timeout=TIMEOUT_MS) as blocker:
            service.load_library()

        assert [a.id for a in blocker.args[0]] == [a.id for a in sample_albums]
        assert statuses == [AuthorizationStatus.AUTHORIZED]

    def test_denied_access(self, qtbot, service: CatalogService, fake_client):
        fake_client.authorized = False

        with qtbot.waitSignal(service.albums_failed, timeout=TIMEOUT_MS) as blocker:
            service.load_library()

        assert isinstance(blocker.args[0], NotAuthorizedError)
        assert fake_client.authorization_status == AuthorizationStatus.DENIED

    def test_fetch_error(self, qtbot, service: CatalogService, fake_client):
        fake_client.library_error = CatalogFetchError("offline")

        with qtbot.waitSignal(service.albums_failed, timeout=TIMEOUT_MS) as blocker:
            service.load_library()

        assert blocker.args[0].message == "offline"

    def test_unexpected_error_is_wrapped(
        self, qtbot, service: CatalogService, fake_client
    ):
        fake_client.library_error = RuntimeError("boom")

        with qtbot.waitSignal(service.albums_failed, timeout=TIMEOUT_MS) as blocker:
            service.load_library()

        error = blocker.args[0]
        assert type(error) is CatalogError
        assert error.message == "boom"

    def test_update_credentials(self, qtbot, service: CatalogService, fake_client):
        with qtbot.waitSignal(service.authorization_changed) as blocker:
            service.update_credentials({"access_token": "new"})

        assert blocker.args == [AuthorizationStatus.NOT_DETERMINED]
        assert fake_client.credentials == {"access_token": "new"}

    def test_load_started_before_credential_switch_is_dropped(
        self, qtbot, service: CatalogService, fake_client
    ):
        fake_client.library_error = CatalogFetchError("old token rejected")

        with qtbot.assertNotEmitted(service.albums_loaded), qtbot.assertNotEmitted(
            service.albums_failed
        ):
            service.load_library()
            service.update_credentials({"access_token": "new"})
            qtbot.waitUntil(lambda: service.active_workers == 0, timeout=TIMEOUT_MS)

    def test_load_after_credential_switch_is_delivered(
        self, qtbot, service: CatalogService, sample_albums
    ):
        service.update_credentials({"access_token": "new"})

        with qtbot.waitSignal(service.albums_loaded, timeout=TIMEOUT_MS) as blocker:
            service.load_library()

        assert len(blocker.args[0]) == len(sample_albums)


class TestAlbumDetail:
    """Test hydration requests."""

    def test_detail_ready_is_cached(self, qtbot, service: CatalogService):
        with qtbot.waitSignal(
            service.album_detail_ready, timeout=TIMEOUT_MS
        ) as blocker:
            service.fetch_album_detail("a1")

        album = blocker.args[0]
        assert album.id == "a1"
        assert album.is_hydrated
        assert service.hydrated_album("a1") == album

    def test_detail_failure(self, qtbot, service: CatalogService):
        with qtbot.waitSignal(
            service.album_detail_failed, timeout=TIMEOUT_MS
        ) as blocker:
            service.fetch_album_detail("missing")

        album_id, error = blocker.args
        assert album_id == "missing"
        assert isinstance(error, AlbumNotFoundError)
        assert service.hydrated_album("missing") is None


class TestPlayback:
    """Test play requests."""

    def test_play_unhydrated_album(
        self, qtbot, service: CatalogService, fake_client, sample_albums
    ):
        album = sample_albums[0]

        with qtbot.waitSignal(service.playback_started, timeout=TIMEOUT_MS) as blocker:
            service.play_album(album)

        assert blocker.args == [album.id]
        assert fake_client.detail_requests == [album.id]
        assert len(fake_client.played[0]) == 2
        assert service.hydrated_album(album.id).is_hydrated

    def test_play_hydrated_album_skips_detail(
        self, qtbot, service: CatalogService, fake_client, sample_albums, hydrate
    ):
        album = hydrate(sample_albums[1], count=4)

        with qtbot.waitSignal(service.playback_started, timeout=TIMEOUT_MS):
            service.play_album(album)

        assert fake_client.detail_requests == []
        assert len(fake_client.played[0]) == 4

    def test_play_failure(
        self, qtbot, service: CatalogService, fake_client, sample_albums, hydrate
    ):
        fake_client.play_error = PlaybackError("None of the tracks can be played")

        with qtbot.waitSignal(service.playback_failed, timeout=TIMEOUT_MS) as blocker:
            service.play_album(hydrate(sample_albums[0]))

        album_id, error = blocker.args
        assert album_id == sample_albums[0].id
        assert isinstance(error, PlaybackError)


class TestArtwork:
    """Test artwork requests."""

    def test_nothing_to_fetch(self, service: CatalogService):
        assert service.fetch_artwork([]) is None
        assert service.fetch_artwork([("album:a1", "")]) is None

    def test_cached_artwork_is_emitted(
        self, qtbot, service: CatalogService, tmp_path, sample_image
    ):
        url = "https://cdn/cover.jpg"
        cache_dir = tmp_path / "artwork"
        cache_dir.mkdir()
        cache_file = ArtworkFetcher([], cache_dir=cache_dir).cache_file_for(url)
        assert sample_image.save(str(cache_file), "JPG")

        with qtbot.waitSignal(service.artwork_ready, timeout=TIMEOUT_MS) as blocker:
            service.fetch_artwork([("album:a1", url)])

        key, image = blocker.args
        assert key == "album:a1"
        assert not image.isNull()
