# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""List of hidden albums with Unhide buttons."""

import logging
from typing import Any

import qtawesome as qta
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from onlyalbums.models.hidden_service import HiddenAlbumsService

logger = logging.getLogger(__name__)


class HiddenAlbumRow(QWidget):
    """One hidden album: its name and an Unhide button."""

    unhide_clicked = pyqtSignal(str)  # album_id

    def __init__(self, record: dict[str, Any], parent=None):
        super().__init__(parent)
        self.album_id = record["album_id"]

        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        self.name_label = QLabel(record.get("display_title") or self.album_id)
        self.name_label.setStyleSheet("color: #666;")
        layout.addWidget(self.name_label, 1)

        self.unhide_button = QPushButton("Unhide")
        self.unhide_button.setIcon(qta.icon("fa5s.eye"))
        self.unhide_button.clicked.connect(
            lambda: self.unhide_clicked.emit(self.album_id)
        )
        layout.addWidget(self.unhide_button)


class HiddenAlbumsView(QWidget):
    """Hidden albums, most recently hidden first."""

    album_unhidden = pyqtSignal(str)  # album_id

    def __init__(self, service: HiddenAlbumsService, parent=None):
        super().__init__(parent)
        self.service = service
        self.rows: dict[str, HiddenAlbumRow] = {}
        self.setup_ui()
        self.refresh()

    def setup_ui(self):
        """Set up the hidden albums UI."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.stack = QStackedWidget()

        self.list_widget = QListWidget()
        self.stack.addWidget(self.list_widget)

        empty = QWidget()
        empty_layout = QVBoxLayout(empty)
        empty_layout.addStretch()
        icon_label = QLabel()
        icon_label.setPixmap(qta.icon("fa5s.eye", color="#999").pixmap(40, 40))
        icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        empty_layout.addWidget(icon_label)
        self.empty_title = QLabel("No Hidden Albums")
        self.empty_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_title.setStyleSheet("font-size: 16px; font-weight: bold;")
        empty_layout.addWidget(self.empty_title)
        description = QLabel("Albums you hide from the main list will show up here.")
        description.setAlignment(Qt.AlignmentFlag.AlignCenter)
        description.setStyleSheet("color: #666;")
        empty_layout.addWidget(description)
        empty_layout.addStretch()
        self.stack.addWidget(empty)

        layout.addWidget(self.stack)

    def refresh(self):
        """Reload the hidden albums from the store."""
        self.list_widget.clear()
        self.rows.clear()

        for record in self.service.list_all():
            row = HiddenAlbumRow(record)
            row.unhide_clicked.connect(self.unhide)
            item = QListWidgetItem(self.list_widget)
            item.setSizeHint(row.sizeHint())
            self.list_widget.setItemWidget(item, row)
            self.rows[row.album_id] = row

        self.stack.setCurrentIndex(1 if self.is_empty() else 0)

    def is_empty(self) -> bool:
        return not self.rows

    def unhide(self, album_id: str):
        """Remove an album from the hidden store."""
        if self.service.delete(album_id):
            self.album_unhidden.emit(album_id)
        else:
            logger.warning("Could not unhide album %s", album_id)
        self.refresh()
