# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Global pytest configuration for onlyalbums tests."""

import os

import pytest

# Qt widgets and multimedia objects are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Configure pytest-asyncio for all async tests
pytest_plugins = ["pytest_asyncio"]


def pytest_configure(config):
    """Configure pytest with asyncio markers."""
    config.addinivalue_line("markers", "asyncio: mark test as async")


# Note: Async tests should be manually marked with @pytest.mark.asyncio


@pytest.fixture
def make_album():
    """Build Album instances with sensible defaults."""
    from onlyalbums.models.album import Album

    counter = iter(range(1, 10_000))

    def _make(title: str = "Album", artist_name: str = "Artist", **kwargs) -> Album:
        kwargs.setdefault("id", f"album-{next(counter)}")
        return Album(title=title, artist_name=artist_name, **kwargs)

    return _make


@pytest.fixture
def temp_db(tmp_path):
    """Create a temporary library database."""
    from onlyalbums.models.db_manager import DatabaseManager

    db_manager = DatabaseManager(tmp_path / "library.db")
    db_manager.initialize()

    yield db_manager

    db_manager.close()
