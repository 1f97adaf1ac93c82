# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Tests for the database manager and hidden album table."""

from datetime import UTC, datetime

import pytest
from sqlalchemy import select

import onlyalbums.models.db_manager as db_manager_module
from onlyalbums.models.database import HiddenAlbum
from onlyalbums.models.db_manager import (
    DatabaseManager,
    close_databases,
    initialize_databases,
)


@pytest.fixture
def reset_library_db():
    """Restore the module-level database after the test."""
    original = db_manager_module._library_db
    db_manager_module._library_db = None
    yield
    close_databases()
    db_manager_module._library_db = original


class TestDatabaseManager:
    """Test DatabaseManager lifecycle."""

    def test_initialize_creates_file(self, tmp_path):
        db_manager = DatabaseManager(tmp_path / "nested" / "library.db")
        assert not db_manager.is_initialized

        db_manager.initialize()

        assert db_manager.is_initialized
        assert (tmp_path / "nested" / "library.db").exists()
        db_manager.close()
        assert not db_manager.is_initialized

    def test_session_requires_initialize(self, tmp_path):
        db_manager = DatabaseManager(tmp_path / "library.db")

        with pytest.raises(RuntimeError), db_manager.get_session():
            pass

    def test_session_rolls_back_on_error(self, temp_db):
        hidden_at = datetime(2024, 1, 1, tzinfo=UTC)

        with pytest.raises(ValueError), temp_db.get_session() as session:
            session.add(HiddenAlbum(album_id="a1", hidden_at=hidden_at))
            session.flush()
            msg = "abort"
            raise ValueError(msg)

        with temp_db.get_session() as session:
            assert session.scalars(select(HiddenAlbum)).all() == []

    def test_hidden_album_round_trip(self, temp_db):
        hidden_at = datetime(2024, 1, 1, tzinfo=UTC)

        with temp_db.get_session() as session:
            session.add(
                HiddenAlbum(
                    album_id="a1",
                    hidden_at=hidden_at,
                    title="Abbey Road",
                    artist_name="The Beatles",
                )
            )
            session.commit()

        with temp_db.get_session() as session:
            row = session.get(HiddenAlbum, "a1")
            assert row is not None
            assert row.display_title == "Abbey Road - The Beatles"
            assert row.to_dict()["album_id"] == "a1"


class TestModuleDatabase:
    """Test the module-level library database."""

    def test_initialize_at_path(self, tmp_path, reset_library_db):
        db = initialize_databases(tmp_path / "library.db")

        assert db.is_initialized
        assert db_manager_module._library_db is db

    def test_close_databases(self, tmp_path, reset_library_db):
        db = initialize_databases(tmp_path / "library.db")

        close_databases()

        assert not db.is_initialized
        assert db_manager_module._library_db is None
