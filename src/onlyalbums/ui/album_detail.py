# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Album detail page with artwork, metadata, Play button and tracks."""

import logging

import qtawesome as qta
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from onlyalbums.models.album import Album
from onlyalbums.ui.resources import placeholder_pixmap

logger = logging.getLogger(__name__)

LOADING_PAGE = 0
TRACKS_PAGE = 1
ERROR_PAGE = 2


class AlbumDetailView(QWidget):
    """Shows one album; hydration and playback are driven from outside."""

    play_requested = pyqtSignal(object)  # Album
    back_requested = pyqtSignal()

    def __init__(self, artwork_size: int = 320, parent=None):
        super().__init__(parent)
        self.artwork_size = artwork_size
        self._album: Album | None = None
        self._hydrated: Album | None = None
        self._play_in_flight = False
        self.setup_ui()

    def setup_ui(self):
        """Set up the detail UI."""
        layout = QVBoxLayout(self)

        top_bar = QHBoxLayout()
        self.back_button = QPushButton("Albums")
        self.back_button.setIcon(qta.icon("fa5s.chevron-left"))
        self.back_button.setFlat(True)
        self.back_button.clicked.connect(self.back_requested.emit)
        top_bar.addWidget(self.back_button)
        top_bar.addStretch()
        layout.addLayout(top_bar)

        header = QHBoxLayout()
        self.artwork_label = QLabel()
        self.artwork_label.setFixedSize(self.artwork_size, self.artwork_size)
        self.artwork_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        header.addWidget(self.artwork_label)

        info = QVBoxLayout()
        info.addStretch()
        self.title_label = QLabel()
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet("font-size: 20px; font-weight: 600;")
        info.addWidget(self.title_label)

        self.artist_label = QLabel()
        self.artist_label.setStyleSheet("font-size: 14px; color: #666;")
        info.addWidget(self.artist_label)

        self.year_label = QLabel()
        self.year_label.setStyleSheet("color: #666;")
        info.addWidget(self.year_label)

        self.play_button = QPushButton("Play")
        self.play_button.setIcon(qta.icon("fa5s.play"))
        self.play_button.clicked.connect(self._on_play_clicked)
        info.addWidget(self.play_button, 0, Qt.AlignmentFlag.AlignLeft)

        self.play_error_label = QLabel()
        self.play_error_label.setStyleSheet("color: #c62828;")
        self.play_error_label.setWordWrap(True)
        self.play_error_label.hide()
        info.addWidget(self.play_error_label)
        info.addStretch()
        header.addLayout(info, 1)
        layout.addLayout(header)

        tracks_heading = QLabel("Tracks")
        tracks_heading.setStyleSheet("font-size: 14px; font-weight: bold;")
        layout.addWidget(tracks_heading)

        self.tracks_stack = QStackedWidget()

        self.loading_label = QLabel("Loading tracks...")
        self.loading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.tracks_stack.addWidget(self.loading_label)

        self.track_table = QTableWidget()
        self.track_table.setColumnCount(4)
        self.track_table.setHorizontalHeaderLabels(["#", "Title", "Artist", "Duration"])
        self.track_table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.track_table.setSelectionBehavior(
            QAbstractItemView.SelectionBehavior.SelectRows
        )
        self.track_table.setAlternatingRowColors(True)
        vertical_header = self.track_table.verticalHeader()
        if vertical_header is not None:
            vertical_header.setVisible(False)
        table_header = self.track_table.horizontalHeader()
        if table_header is not None:
            table_header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
            table_header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
            table_header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
            table_header.setSectionResizeMode(3, QHeaderView.ResizeMode.ResizeToContents)
        self.tracks_stack.addWidget(self.track_table)

        error_page = QWidget()
        error_layout = QVBoxLayout(error_page)
        error_layout.addStretch()
        error_title = QLabel("Couldn't Load Tracks")
        error_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        error_title.setStyleSheet("font-size: 16px; font-weight: bold;")
        error_layout.addWidget(error_title)
        self.error_label = QLabel()
        self.error_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.error_label.setWordWrap(True)
        self.error_label.setStyleSheet("color: #666;")
        error_layout.addWidget(self.error_label)
        error_layout.addStretch()
        self.tracks_stack.addWidget(error_page)

        layout.addWidget(self.tracks_stack, 1)

    @property
    def album(self) -> Album | None:
        """Get the displayed album, hydrated when available."""
        return self._hydrated or self._album

    @property
    def album_id(self) -> str | None:
        return self._album.id if self._album else None

    @property
    def is_play_in_flight(self) -> bool:
        return self._play_in_flight

    def show_album(self, album: Album):
        """Display an album from the list and wait for its tracks."""
        self._album = album
        self._hydrated = album if album.is_hydrated else None
        self._play_in_flight = False
        self.play_error_label.hide()
        self._update_header(album)
        self.artwork_label.setPixmap(placeholder_pixmap(album.title, self.artwork_size))
        self._update_play_button()

        if self._hydrated is not None:
            self._populate_tracks(self._hydrated)
        else:
            self.track_table.setRowCount(0)
            self.tracks_stack.setCurrentIndex(LOADING_PAGE)

    def set_hydrated_album(self, album: Album):
        """Show the track listing if the album is still displayed."""
        if self._album is None or album.id != self._album.id:
            return
        self._hydrated = album
        self._update_header(album)
        self._populate_tracks(album)

    def show_error(self, album_id: str, message: str):
        """Show a loading error for the displayed album."""
        if album_id != self.album_id:
            return
        if self._hydrated is None:
            self.error_label.setText(message)
            self.tracks_stack.setCurrentIndex(ERROR_PAGE)
        else:
            self.play_error_label.setText(message)
            self.play_error_label.show()

    def set_play_in_flight(self, album_id: str, in_flight: bool):
        """Disable Play while a play request for the album is running."""
        if album_id != self.album_id:
            return
        self._play_in_flight = in_flight
        self._update_play_button()

    def set_artwork(self, album_id: str, image: QImage):
        """Apply downloaded artwork if it belongs to the displayed album."""
        if album_id != self.album_id:
            return
        pixmap = QPixmap.fromImage(image).scaled(
            self.artwork_size,
            self.artwork_size,
            Qt.AspectRatioMode.KeepAspectRatio,
            Qt.TransformationMode.SmoothTransformation,
        )
        self.artwork_label.setPixmap(pixmap)

    def _update_header(self, album: Album):
        self.title_label.setText(album.title)
        self.artist_label.setText(album.artist_name)
        self.year_label.setText(str(album.release_year) if album.release_year else "")
        self.year_label.setVisible(album.release_year is not None)

    def _update_play_button(self):
        self.play_button.setEnabled(self._album is not None and not self._play_in_flight)
        self.play_button.setText("Starting..." if self._play_in_flight else "Play")

    def _populate_tracks(self, album: Album):
        tracks = album.tracks or ()
        self.track_table.setRowCount(len(tracks))
        for row, track in enumerate(tracks):
            number = str(track.track_number) if track.track_number else str(row + 1)
            self.track_table.setItem(row, 0, QTableWidgetItem(number))
            self.track_table.setItem(row, 1, QTableWidgetItem(track.title))
            self.track_table.setItem(row, 2, QTableWidgetItem(track.artist_name))
            self.track_table.setItem(
                row, 3, QTableWidgetItem(track.duration_formatted)
            )
        self.tracks_stack.setCurrentIndex(TRACKS_PAGE)

    def _on_play_clicked(self):
        album = self.album
        if album is None or self._play_in_flight:
            return
        self.play_error_label.hide()
        self.play_requested.emit(album)
