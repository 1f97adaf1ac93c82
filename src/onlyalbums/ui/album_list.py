# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Sectioned album list with search, sort and an alphabet index."""

import logging
import string

import qtawesome as qta
from PyQt6.QtCore import QPoint, QSize, Qt, pyqtSignal
from PyQt6.QtGui import QFont, QIcon, QImage, QPixmap
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QMenu,
    QPushButton,
    QStackedWidget,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from onlyalbums.core.utils import strip_accents
from onlyalbums.models.album import Album
from onlyalbums.models.enums import AuthorizationStatus, SortMode
from onlyalbums.ui.library_state import LibraryState
from onlyalbums.ui.resources import placeholder_pixmap

logger = logging.getLogger(__name__)

ALBUM_ID_ROLE = Qt.ItemDataRole.UserRole
SECTION_KEY_ROLE = Qt.ItemDataRole.UserRole + 1

CONTENT_PAGE = 0
MESSAGE_PAGE = 1


class AlphabetIndexBar(QWidget):
    """Vertical A-Z strip; clicking a letter requests a jump to its section."""

    letter_selected = pyqtSignal(str)

    LETTERS = tuple(string.ascii_uppercase)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.buttons: dict[str, QPushButton] = {}
        self.setup_ui()

    def setup_ui(self):
        """Set up the letter buttons."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 8, 4, 8)
        layout.setSpacing(0)

        for letter in self.LETTERS:
            button = QPushButton(letter)
            button.setFlat(True)
            button.setFixedSize(18, 16)
            button.setStyleSheet("color: #666; font-size: 10px; padding: 0;")
            button.clicked.connect(
                lambda _checked=False, value=letter: self.letter_selected.emit(value)
            )
            layout.addWidget(button)
            self.buttons[letter] = button

        layout.addStretch()


class MessagePage(QWidget):
    """Centered icon, title and description shown instead of the list."""

    action_clicked = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.addStretch()

        self.icon_label = QLabel()
        self.icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.icon_label)

        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(self.title_label)

        self.description_label = QLabel()
        self.description_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.description_label.setWordWrap(True)
        self.description_label.setStyleSheet("color: #666;")
        layout.addWidget(self.description_label)

        self.action_button = QPushButton()
        self.action_button.clicked.connect(self.action_clicked.emit)
        layout.addWidget(self.action_button, 0, Qt.AlignmentFlag.AlignCenter)

        layout.addStretch()

    def show_message(
        self, icon_name: str, title: str, description: str, action: str | None = None
    ):
        """Fill the page."""
        self.icon_label.setPixmap(qta.icon(icon_name, color="#999").pixmap(48, 48))
        self.title_label.setText(title)
        self.description_label.setText(description)
        self.action_button.setText(action or "")
        self.action_button.setVisible(bool(action))


class AlbumListView(QWidget):
    """Album list driven by a LibraryState."""

    album_activated = pyqtSignal(str)  # album_id
    hide_requested = pyqtSignal(str)  # album_id
    refresh_requested = pyqtSignal()
    settings_requested = pyqtSignal()

    def __init__(self, state: LibraryState, artwork_size: int = 56, parent=None):
        super().__init__(parent)
        self.state = state
        self.artwork_size = artwork_size
        self._section_items: dict[str, QTreeWidgetItem] = {}
        self._album_items: dict[str, QTreeWidgetItem] = {}
        self._artwork: dict[str, QPixmap] = {}
        self.setup_ui()

        self.state.sections_changed.connect(self.set_sections)
        self.state.status_changed.connect(self.update_status)
        self.set_sections(self.state.sections)
        self.update_status()

    def setup_ui(self):
        """Set up the list UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        controls = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search albums or artists...")
        self.search_input.setClearButtonEnabled(True)
        self.search_input.textChanged.connect(self.state.set_search_text)
        controls.addWidget(self.search_input, 1)

        self.sort_combo = QComboBox()
        self.sort_combo.setToolTip("Sort")
        for mode in SortMode:
            self.sort_combo.addItem(mode.label, mode)
        self.sort_combo.setCurrentIndex(self.sort_combo.findData(self.state.sort_mode))
        self.sort_combo.currentIndexChanged.connect(self._on_sort_changed)
        controls.addWidget(QLabel("Sort:"))
        controls.addWidget(self.sort_combo)

        self.refresh_button = QPushButton()
        self.refresh_button.setIcon(qta.icon("fa5s.sync-alt"))
        self.refresh_button.setToolTip("Reload albums")
        self.refresh_button.clicked.connect(self.refresh_requested.emit)
        controls.addWidget(self.refresh_button)
        layout.addLayout(controls)

        self.stack = QStackedWidget()

        content = QWidget()
        content_layout = QHBoxLayout(content)
        content_layout.setContentsMargins(0, 0, 0, 0)

        self.tree = QTreeWidget()
        self.tree.setHeaderLabels(["Album", "Artist", "Year"])
        self.tree.setRootIsDecorated(False)
        self.tree.setIconSize(QSize(self.artwork_size, self.artwork_size))
        self.tree.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.tree.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.tree.setContextMenuPolicy(Qt.ContextMenuPolicy.CustomContextMenu)
        self.tree.customContextMenuRequested.connect(self._show_context_menu)
        self.tree.itemActivated.connect(self._on_item_activated)
        header = self.tree.header()
        if header is not None:
            header.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
            header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        content_layout.addWidget(self.tree, 1)

        self.index_bar = AlphabetIndexBar()
        self.index_bar.letter_selected.connect(self.scroll_to_section)
        content_layout.addWidget(self.index_bar)

        self.message_page = MessagePage()
        self.message_page.action_clicked.connect(self._on_message_action)

        self.stack.addWidget(content)
        self.stack.addWidget(self.message_page)
        layout.addWidget(self.stack, 1)

    def set_sections(self, sections: dict[str, list[Album]]):
        """Rebuild the tree from sectioned albums."""
        self.tree.clear()
        self._section_items.clear()
        self._album_items.clear()

        header_font = QFont()
        header_font.setBold(True)

        for key, albums in sections.items():
            section_item = QTreeWidgetItem([key])
            section_item.setData(0, SECTION_KEY_ROLE, key)
            section_item.setFont(0, header_font)
            section_item.setFlags(Qt.ItemFlag.ItemIsEnabled)
            self.tree.addTopLevelItem(section_item)
            self._section_items[key] = section_item

            for album in albums:
                section_item.addChild(self._create_album_item(album))
            section_item.setExpanded(True)

    def _create_album_item(self, album: Album) -> QTreeWidgetItem:
        year = str(album.release_year) if album.release_year else ""
        item = QTreeWidgetItem([album.title, album.artist_name, year])
        item.setData(0, ALBUM_ID_ROLE, album.id)
        item.setIcon(0, QIcon(self._artwork_for(album)))
        item.setToolTip(0, album.title)
        self._album_items[album.id] = item
        return item

    def _artwork_for(self, album: Album) -> QPixmap:
        pixmap = self._artwork.get(album.id)
        if pixmap is None:
            pixmap = placeholder_pixmap(album.title, self.artwork_size)
        return pixmap

    def update_artwork(self, album_id: str, image: QImage):
        """Apply downloaded artwork to an album row."""
        pixmap = QPixmap.fromImage(image).scaled(
            self.artwork_size,
            self.artwork_size,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self._artwork[album_id] = pixmap
        item = self._album_items.get(album_id)
        if item is not None:
            item.setIcon(0, QIcon(pixmap))

    def section_keys(self) -> list[str]:
        """Get the displayed section keys in order."""
        return list(self._section_items)

    def album_ids(self) -> list[str]:
        """Get the displayed album ids in order."""
        return list(self._album_items)

    def scroll_to_section(self, key: str) -> bool:
        """Scroll so the section header is at the top. False if absent.

        An index letter with no section of its own lands on the first
        accented section built on it ("E" reaches "É").
        """
        item = self._section_items.get(key)
        if item is None:
            item = next(
                (
                    section_item
                    for section, section_item in self._section_items.items()
                    if strip_accents(section) == key
                ),
                None,
            )
        if item is None:
            return False
        self.tree.scrollToItem(item, QAbstractItemView.ScrollHint.PositionAtTop)
        return True

    def update_status(self):
        """Switch between the list and the message page."""
        status = self.state.authorization_status
        error = self.state.error

        if status != AuthorizationStatus.AUTHORIZED:
            if self.state.is_loading:
                self.message_page.show_message(
                    "fa5s.music", "Connecting to Deezer", "Checking access..."
                )
            else:
                self.message_page.show_message(
                    "fa5s.music",
                    "Deezer Access Needed",
                    "Add a Deezer access token in Settings to load your albums.",
                    action="Open Settings",
                )
            self.stack.setCurrentIndex(MESSAGE_PAGE)
        elif error is not None:
            self.message_page.show_message(
                "fa5s.exclamation-triangle",
                "Couldn't Load Albums",
                error.message,
                action="Try Again",
            )
            self.stack.setCurrentIndex(MESSAGE_PAGE)
        else:
            self.stack.setCurrentIndex(CONTENT_PAGE)

        self.refresh_button.setEnabled(not self.state.is_loading)

    def is_showing_message(self) -> bool:
        """Check if the message page is displayed instead of the list."""
        return self.stack.currentIndex() == MESSAGE_PAGE

    def _on_message_action(self):
        if self.state.authorization_status != AuthorizationStatus.AUTHORIZED:
            self.settings_requested.emit()
        else:
            self.refresh_requested.emit()

    def _on_sort_changed(self, index: int):
        mode = self.sort_combo.itemData(index)
        if mode is not None:
            self.state.set_sort_mode(mode)

    def _on_item_activated(self, item: QTreeWidgetItem, _column: int):
        album_id = item.data(0, ALBUM_ID_ROLE)
        if album_id:
            self.album_activated.emit(album_id)

    def _show_context_menu(self, position: QPoint):
        item = self.tree.itemAt(position)
        if item is None:
            return
        album_id = item.data(0, ALBUM_ID_ROLE)
        if not album_id:
            return

        menu = QMenu(self)
        hide_action = menu.addAction(qta.icon("fa5s.eye-slash"), "Hide")
        hide_action.triggered.connect(lambda: self.hide_requested.emit(album_id))
        viewport = self.tree.viewport()
        menu.exec(viewport.mapToGlobal(position) if viewport else position)
