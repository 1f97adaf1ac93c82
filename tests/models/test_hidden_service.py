# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from onlyalbums.models.hidden_service import HiddenAlbumsService


@pytest.fixture
def hidden(temp_db):
    return HiddenAlbumsService(temp_db)


def test_insert_and_is_hidden(hidden: HiddenAlbumsService):
    assert hidden.insert("apple", title="apple", artist_name="Fruit") is True
    assert hidden.is_hidden("apple") is True
    assert hidden.hidden_ids() == {"apple"}


def test_insert_is_an_upsert(hidden: HiddenAlbumsService):
    earlier = datetime(2024, 1, 1, tzinfo=UTC)
    later = earlier + timedelta(days=3)

    assert hidden.insert("a1", earlier)
    assert hidden.insert("a1", later)

    rows = hidden.list_all()
    assert len(rows) == 1
    assert rows[0]["hidden_at"].replace(tzinfo=UTC) == later


def test_delete_restores_album(hidden: HiddenAlbumsService):
    hidden.insert("apple")
    assert hidden.delete("apple") is True
    assert hidden.is_hidden("apple") is False
    assert hidden.hidden_ids() == set()


def test_delete_missing_id_succeeds(hidden: HiddenAlbumsService):
    assert hidden.delete("never-hidden") is True


def test_list_all_newest_first(hidden: HiddenAlbumsService):
    base = datetime(2024, 5, 1, tzinfo=UTC)
    hidden.insert("old", base, title="Old One")
    hidden.insert("new", base + timedelta(hours=1), title="New One", artist_name="X")

    rows = hidden.list_all()
    assert [r["album_id"] for r in rows] == ["new", "old"]
    assert rows[0]["display_title"] == "New One - X"
    assert rows[1]["display_title"] == "Old One"


def test_display_title_falls_back_to_id(hidden: HiddenAlbumsService):
    hidden.insert("123456")
    assert hidden.list_all()[0]["display_title"] == "123456"


def test_database_errors_are_reported_as_failures():
    db = MagicMock()
    db.get_session.side_effect = OperationalError("stmt", {}, Exception("boom"))
    service = HiddenAlbumsService(db)

    assert service.insert("a") is False
    assert service.delete("a") is False
    assert service.list_all() == []
    assert service.hidden_ids() == set()
    assert service.is_hidden("a") is False


def test_default_db_comes_from_global_getter(temp_db, monkeypatch):
    from onlyalbums.models import hidden_service as hs

    monkeypatch.setattr(hs, "get_library_db", lambda: temp_db, raising=True)
    service = HiddenAlbumsService()
    assert service.db is temp_db
