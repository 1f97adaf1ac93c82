# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Observable state behind the album list."""

import logging
from collections.abc import Iterable

from PyQt6.QtCore import QObject, pyqtSignal

from onlyalbums.catalog.exceptions import CatalogError
from onlyalbums.core.presentation import count_albums, present
from onlyalbums.models.album import Album
from onlyalbums.models.enums import AuthorizationStatus, SortMode

logger = logging.getLogger(__name__)


class LibraryState(QObject):
    """Owns the album-list inputs and publishes the sectioned result.

    ``sections_changed`` carries the output of ``present`` whenever albums,
    hidden ids, search text or sort mode change. ``status_changed`` fires on
    authorization, loading or error changes.
    """

    sections_changed = pyqtSignal(dict)  # section key -> list[Album]
    status_changed = pyqtSignal()

    def __init__(self, sort_mode: SortMode = SortMode.BY_TITLE, parent=None):
        super().__init__(parent)
        self._albums: list[Album] = []
        self._hidden_ids: frozenset[str] = frozenset()
        self._search_text = ""
        self._sort_mode = SortMode(sort_mode)
        self._authorization_status = AuthorizationStatus.NOT_DETERMINED
        self._error: CatalogError | None = None
        self._is_loading = False
        self._sections: dict[str, list[Album]] = {}

    @property
    def albums(self) -> list[Album]:
        return list(self._albums)

    @property
    def hidden_ids(self) -> frozenset[str]:
        return self._hidden_ids

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self._authorization_status

    @property
    def error(self) -> CatalogError | None:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def sections(self) -> dict[str, list[Album]]:
        """Get the last computed sections."""
        return self._sections

    @property
    def visible_count(self) -> int:
        """Count albums currently shown."""
        return count_albums(self._sections)

    def find_album(self, album_id: str) -> Album | None:
        """Look up a loaded album by id."""
        return next((a for a in self._albums if a.id == album_id), None)

    def set_albums(self, albums: Iterable[Album]) -> None:
        """Replace the loaded albums and clear any loading error."""
        self._albums = list(albums)
        self._error = None
        logger.debug("Library state holds %d albums", len(self._albums))
        self.status_changed.emit()
        self.recompute()

    def set_hidden_ids(self, hidden_ids: Iterable[str]) -> None:
        hidden = frozenset(hidden_ids)
        if hidden != self._hidden_ids:
            self._hidden_ids = hidden
            self.recompute()

    def set_search_text(self, text: str) -> None:
        text = text or ""
        if text != self._search_text:
            self._search_text = text
            self.recompute()

    def set_sort_mode(self, sort_mode: SortMode) -> None:
        sort_mode = SortMode(sort_mode)
        if sort_mode != self._sort_mode:
            self._sort_mode = sort_mode
            self.recompute()

    def set_authorization_status(self, status: AuthorizationStatus) -> None:
        if status != self._authorization_status:
            self._authorization_status = status
            self.status_changed.emit()

    def set_loading(self, loading: bool) -> None:
        if loading != self._is_loading:
            self._is_loading = loading
            self.status_changed.emit()

    def set_error(self, error: CatalogError | None) -> None:
        """Record the last loading error (None clears it)."""
        self._error = error
        self.status_changed.emit()

    def recompute(self) -> dict[str, list[Album]]:
        """Run the presentation pipeline and publish the sections."""
        self._sections = present(
            self._albums, self._hidden_ids, self._search_text, self._sort_mode
        )
        self.sections_changed.emit(self._sections)
        return self._sections
