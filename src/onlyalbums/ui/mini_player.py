# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Mini-player bar docked under the main content."""

import asyncio
import logging

import qtawesome as qta
from PyQt6.QtCore import QSize, Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from onlyalbums.models.playback import PlaybackSnapshot
from onlyalbums.player.observer import NowPlayingObserver
from onlyalbums.ui.resources import placeholder_pixmap

logger = logging.getLogger(__name__)

ARTWORK_SIZE = 44


class MiniPlayerBar(QWidget):
    """Now-playing summary with previous, play/pause and next buttons.

    Hidden while nothing is loaded in the player.
    """

    artwork_requested = pyqtSignal(str)  # artwork_url

    def __init__(self, observer: NowPlayingObserver, parent=None):
        super().__init__(parent)
        self.observer = observer
        self._artwork_url: str | None = None
        self.setup_ui()

        self.observer.snapshot_changed.connect(self.update_snapshot)
        self.update_snapshot(self.observer.snapshot)

    def setup_ui(self):
        """Set up the mini-player UI."""
        self.setObjectName("MiniPlayerBar")
        self.setStyleSheet(
            "#MiniPlayerBar { background: #f5f5f5; border-top: 1px solid #ddd; }"
        )
        layout = QHBoxLayout(self)
        layout.setContentsMargins(12, 8, 12, 8)
        layout.setSpacing(12)

        self.artwork_label = QLabel()
        self.artwork_label.setFixedSize(ARTWORK_SIZE, ARTWORK_SIZE)
        layout.addWidget(self.artwork_label)

        text_layout = QVBoxLayout()
        text_layout.setSpacing(2)
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-weight: 600;")
        text_layout.addWidget(self.title_label)
        self.subtitle_label = QLabel()
        self.subtitle_label.setStyleSheet("color: #666; font-size: 11px;")
        text_layout.addWidget(self.subtitle_label)
        layout.addLayout(text_layout, 1)

        self.previous_button = self._create_button("fa5s.backward", "Previous")
        self.previous_button.clicked.connect(self.on_previous_clicked)
        layout.addWidget(self.previous_button)

        self.play_pause_button = self._create_button("fa5s.play", "Play")
        self.play_pause_button.clicked.connect(self.on_play_pause_clicked)
        layout.addWidget(self.play_pause_button)

        self.next_button = self._create_button("fa5s.forward", "Next")
        self.next_button.clicked.connect(self.on_next_clicked)
        layout.addWidget(self.next_button)

    def _create_button(self, icon_name: str, tooltip: str) -> QPushButton:
        button = QPushButton()
        button.setIcon(qta.icon(icon_name))
        button.setIconSize(QSize(16, 16))
        button.setFlat(True)
        button.setToolTip(tooltip)
        return button

    def update_snapshot(self, snapshot: PlaybackSnapshot):
        """Render a playback snapshot."""
        self.setVisible(snapshot.is_active)
        self.title_label.setText(snapshot.title)
        self.subtitle_label.setText(snapshot.subtitle)
        self.subtitle_label.setVisible(bool(snapshot.subtitle))

        if snapshot.is_playing:
            self.play_pause_button.setIcon(qta.icon("fa5s.pause"))
            self.play_pause_button.setToolTip("Pause")
        else:
            self.play_pause_button.setIcon(qta.icon("fa5s.play"))
            self.play_pause_button.setToolTip("Play")

        if snapshot.artwork_url != self._artwork_url:
            self._artwork_url = snapshot.artwork_url
            self.artwork_label.setPixmap(
                placeholder_pixmap(snapshot.title, ARTWORK_SIZE)
            )
            if snapshot.artwork_url:
                self.artwork_requested.emit(snapshot.artwork_url)

    def set_artwork(self, artwork_url: str, image: QImage):
        """Apply downloaded artwork if it is still the current one."""
        if artwork_url != self._artwork_url:
            return
        self.artwork_label.setPixmap(
            QPixmap.fromImage(image).scaled(
                ARTWORK_SIZE,
                ARTWORK_SIZE,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )

    def on_previous_clicked(self):
        asyncio.run(self.observer.previous())

    def on_play_pause_clicked(self):
        asyncio.run(self.observer.toggle_play_pause())

    def on_next_clicked(self):
        asyncio.run(self.observer.next())
