# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Tests for the background worker threads."""

import aiohttp
import pytest

from onlyalbums.ui.workers import ArtworkFetcher, CatalogTaskWorker


class FakeResponse:
    def __init__(self, status: int, body: bytes = b""):
        self.status = status
        self.body = body

    async def read(self) -> bytes:
        return self.body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *_exc):
        return False


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error=None):
        self.response = response
        self.error = error
        self.requested: list[str] = []

    def get(self, url: str):
        self.requested.append(url)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fetcher(qapp, tmp_path) -> ArtworkFetcher:
    return ArtworkFetcher([("album:a1", "https://cdn/a1.jpg")], cache_dir=tmp_path)


class TestCatalogTaskWorker:
    def test_success_carries_tag(self, qtbot):
        async def task():
            return [1, 2, 3]

        worker = CatalogTaskWorker(task, tag="library")
        with qtbot.waitSignal(worker.succeeded, timeout=5000) as blocker:
            worker.start()
        worker.wait()

        assert blocker.args == ["library", [1, 2, 3]]

    def test_failure_carries_exception(self, qtbot):
        async def task():
            raise ValueError("bad album id")

        worker = CatalogTaskWorker(task, tag="detail:x")
        with qtbot.waitSignal(worker.failed, timeout=5000) as blocker:
            worker.start()
        worker.wait()

        tag, error = blocker.args
        assert tag == "detail:x"
        assert isinstance(error, ValueError)


class TestArtworkFetcher:
    def test_cache_file_name(self, fetcher: ArtworkFetcher, tmp_path):
        path = fetcher.cache_file_for("https://cdn/a1.jpg")

        assert path.parent == tmp_path
        assert path.name.startswith("artwork_")
        assert path.suffix == ".jpg"
        assert path == fetcher.cache_file_for("https://cdn/a1.jpg")
        assert path != fetcher.cache_file_for("https://cdn/a2.jpg")

    @pytest.mark.asyncio
    async def test_download_and_cache(
        self, fetcher: ArtworkFetcher, tmp_path, sample_image
    ):
        source = tmp_path / "source.png"
        sample_image.save(str(source), "PNG")
        session = FakeSession(FakeResponse(200, source.read_bytes()))

        image = await fetcher._download_artwork(session, "https://cdn/a1.jpg")

        assert image is not None
        assert image.width() == 20
        assert fetcher.cache_file_for("https://cdn/a1.jpg").exists()

    @pytest.mark.asyncio
    async def test_cache_hit_skips_network(
        self, fetcher: ArtworkFetcher, sample_image
    ):
        url = "https://cdn/a1.jpg"
        sample_image.save(str(fetcher.cache_file_for(url)), "JPG")
        session = FakeSession(error=AssertionError("network used"))

        image = await fetcher._download_artwork(session, url)

        assert image is not None
        assert session.requested == []

    @pytest.mark.asyncio
    async def test_http_error_gives_nothing(self, fetcher: ArtworkFetcher):
        session = FakeSession(FakeResponse(404))

        assert await fetcher._download_artwork(session, "https://cdn/x.jpg") is None

    @pytest.mark.asyncio
    async def test_client_error_gives_nothing(self, fetcher: ArtworkFetcher):
        session = FakeSession(error=aiohttp.ClientConnectionError("offline"))

        assert await fetcher._download_artwork(session, "https://cdn/x.jpg") is None

    @pytest.mark.asyncio
    async def test_undecodable_data_gives_nothing(self, fetcher: ArtworkFetcher):
        session = FakeSession(FakeResponse(200, b"not an image"))

        assert await fetcher._download_artwork(session, "https://cdn/x.jpg") is None
        assert not fetcher.cache_file_for("https://cdn/x.jpg").exists()
