# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Tests for the sectioned album list view."""

import pytest
from PyQt6.QtCore import QPoint
from PyQt6.QtWidgets import QMenu

import onlyalbums.ui.album_list as album_list_module
from onlyalbums.catalog.exceptions import CatalogFetchError
from onlyalbums.models.enums import AuthorizationStatus, SortMode
from onlyalbums.ui.album_list import (
    ALBUM_ID_ROLE,
    CONTENT_PAGE,
    MESSAGE_PAGE,
    AlbumListView,
)
from onlyalbums.ui.library_state import LibraryState


@pytest.fixture
def state(qapp) -> LibraryState:
    return LibraryState()


@pytest.fixture
def view(qtbot, state: LibraryState) -> AlbumListView:
    widget = AlbumListView(state, artwork_size=32)
    qtbot.addWidget(widget)
    return widget


@pytest.fixture
def loaded_view(view: AlbumListView, state: LibraryState, sample_albums):
    state.set_authorization_status(AuthorizationStatus.AUTHORIZED)
    state.set_albums(sample_albums)
    return view


class TestAlbumListContent:
    """Test the rendered sections."""

    def test_sections_follow_state(self, loaded_view: AlbumListView):
        assert loaded_view.section_keys() == ["#", "A", "B"]
        assert loaded_view.album_ids() == ["n1", "a1", "a2", "b1"]
        assert loaded_view.stack.currentIndex() == CONTENT_PAGE

    def test_album_rows_show_title_and_artist(self, loaded_view: AlbumListView):
        section = loaded_view.tree.topLevelItem(1)
        first = section.child(0)

        assert section.text(0) == "A"
        assert first.text(0) == "Abbey Road"
        assert first.text(1) == "The Beatles"
        assert first.data(0, ALBUM_ID_ROLE) == "a1"

    def test_search_input_filters(
        self, loaded_view: AlbumListView, state: LibraryState
    ):
        loaded_view.search_input.setText("joni")

        assert state.search_text == "joni"
        assert loaded_view.album_ids() == ["b1"]

    def test_sort_combo_changes_mode(
        self, loaded_view: AlbumListView, state: LibraryState
    ):
        loaded_view.sort_combo.setCurrentIndex(
            loaded_view.sort_combo.findData(SortMode.BY_ARTIST_THEN_TITLE)
        )

        assert state.sort_mode == SortMode.BY_ARTIST_THEN_TITLE
        assert loaded_view.section_keys() == ["F", "J", "T"]

    def test_hidden_album_disappears(
        self, loaded_view: AlbumListView, state: LibraryState
    ):
        state.set_hidden_ids({"b1"})

        assert "b1" not in loaded_view.album_ids()
        assert "B" not in loaded_view.section_keys()

    def test_scroll_to_section(self, loaded_view: AlbumListView):
        assert loaded_view.scroll_to_section("B") is True
        assert loaded_view.scroll_to_section("Z") is False

    def test_index_letter_reaches_accented_section(
        self, monkeypatch, view: AlbumListView, state: LibraryState, make_album
    ):
        state.set_authorization_status(AuthorizationStatus.AUTHORIZED)
        state.set_albums([make_album("Zulu"), make_album("Écho"), make_album("Delta")])
        scrolled = []
        monkeypatch.setattr(
            view.tree, "scrollToItem", lambda item, _hint: scrolled.append(item.text(0))
        )

        assert view.section_keys() == ["D", "É", "Z"]
        view.index_bar.buttons["E"].click()

        assert view.scroll_to_section("E") is True
        assert scrolled == ["É", "É"]

    def test_index_bar_letters(self, loaded_view: AlbumListView):
        assert list(loaded_view.index_bar.buttons) == [
            chr(c) for c in range(ord("A"), ord("Z") + 1)
        ]

    def test_update_artwork(self, loaded_view: AlbumListView, sample_image):
        loaded_view.update_artwork("a1", sample_image)
        loaded_view.update_artwork("unknown", sample_image)

        item = loaded_view.tree.topLevelItem(1).child(0)
        assert not item.icon(0).isNull()


class TestAlbumListSignals:
    """Test user interactions."""

    def test_activation_emits_album_id(self, qtbot, loaded_view: AlbumListView):
        item = loaded_view.tree.topLevelItem(2).child(0)

        with qtbot.waitSignal(loaded_view.album_activated) as blocker:
            loaded_view.tree.itemActivated.emit(item, 0)

        assert blocker.args == ["b1"]

    def test_section_header_activation_is_ignored(
        self, qtbot, loaded_view: AlbumListView
    ):
        with qtbot.assertNotEmitted(loaded_view.album_activated):
            loaded_view.tree.itemActivated.emit(loaded_view.tree.topLevelItem(0), 0)

    def test_context_menu_hide(
        self, qtbot, monkeypatch, loaded_view: AlbumListView
    ):
        class TriggeringMenu(QMenu):
            def exec(self, *_args):
                for action in self.actions():
                    if action.text() == "Hide":
                        action.trigger()

        item = loaded_view.tree.topLevelItem(1).child(1)
        monkeypatch.setattr(album_list_module, "QMenu", TriggeringMenu)
        monkeypatch.setattr(loaded_view.tree, "itemAt", lambda _pos: item)

        with qtbot.waitSignal(loaded_view.hide_requested) as blocker:
            loaded_view._show_context_menu(QPoint(5, 5))

        assert blocker.args == ["a2"]

    def test_refresh_button(self, qtbot, loaded_view: AlbumListView):
        with qtbot.waitSignal(loaded_view.refresh_requested):
            loaded_view.refresh_button.click()


class TestAlbumListMessages:
    """Test the message page shown instead of the list."""

    def test_access_needed(self, qtbot, view: AlbumListView, state: LibraryState):
        state.set_authorization_status(AuthorizationStatus.DENIED)

        assert view.stack.currentIndex() == MESSAGE_PAGE
        assert view.message_page.title_label.text() == "Deezer Access Needed"
        assert view.message_page.action_button.text() == "Open Settings"
        with qtbot.waitSignal(view.settings_requested):
            view.message_page.action_button.click()

    def test_connecting_while_loading(self, view: AlbumListView, state: LibraryState):
        state.set_loading(True)

        assert view.is_showing_message()
        assert view.message_page.title_label.text() == "Connecting to Deezer"
        assert view.message_page.action_button.isHidden()
        assert not view.refresh_button.isEnabled()

    def test_error_offers_retry(self, qtbot, view: AlbumListView, state: LibraryState):
        state.set_authorization_status(AuthorizationStatus.AUTHORIZED)
        state.set_error(CatalogFetchError("The network connection was lost"))

        assert view.is_showing_message()
        assert view.message_page.title_label.text() == "Couldn't Load Albums"
        assert (
            view.message_page.description_label.text()
            == "The network connection was lost"
        )
        with qtbot.waitSignal(view.refresh_requested):
            view.message_page.action_button.click()

    def test_loaded_albums_replace_error(
        self, view: AlbumListView, state: LibraryState, sample_albums
    ):
        state.set_authorization_status(AuthorizationStatus.AUTHORIZED)
        state.set_error(CatalogFetchError("offline"))

        state.set_albums(sample_albums)

        assert not view.is_showing_message()
