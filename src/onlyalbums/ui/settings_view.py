# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Settings tab: Deezer access, library defaults and hidden albums."""

import qtawesome as qta
from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from onlyalbums.config.user import UserConfig
from onlyalbums.models.enums import AuthorizationStatus, SortMode
from onlyalbums.models.hidden_service import HiddenAlbumsService
from onlyalbums.ui.hidden_albums import HiddenAlbumsView

STATUS_TEXT = {
    AuthorizationStatus.NOT_DETERMINED: ("Not checked yet", "#666"),
    AuthorizationStatus.AUTHORIZED: ("Connected", "#2e7d32"),
    AuthorizationStatus.DENIED: ("Access needed", "#c62828"),
}


class SettingsView(QWidget):
    """Settings page."""

    access_token_saved = pyqtSignal(str)  # plain-text token
    default_sort_changed = pyqtSignal(object)  # SortMode

    def __init__(
        self, config: UserConfig, hidden_service: HiddenAlbumsService, parent=None
    ):
        super().__init__(parent)
        self.config = config
        self.hidden_service = hidden_service
        self.setup_ui()
        self.load_config()

    def setup_ui(self):
        """Set up the settings UI."""
        layout = QVBoxLayout(self)

        deezer_group = QGroupBox("Deezer")
        deezer_layout = QFormLayout(deezer_group)

        token_row = QHBoxLayout()
        self.token_input = QLineEdit()
        self.token_input.setEchoMode(QLineEdit.EchoMode.Password)
        self.token_input.setPlaceholderText("OAuth access token")
        self.token_input.returnPressed.connect(self.save_token)
        token_row.addWidget(self.token_input, 1)

        self.save_token_button = QPushButton("Save")
        self.save_token_button.setIcon(qta.icon("fa5s.key"))
        self.save_token_button.clicked.connect(self.save_token)
        token_row.addWidget(self.save_token_button)
        deezer_layout.addRow("Access token:", token_row)

        self.status_label = QLabel()
        deezer_layout.addRow("Status:", self.status_label)
        layout.addWidget(deezer_group)

        library_group = QGroupBox("Library")
        library_layout = QFormLayout(library_group)
        self.sort_combo = QComboBox()
        for mode in SortMode:
            self.sort_combo.addItem(mode.label, mode)
        self.sort_combo.currentIndexChanged.connect(self._on_sort_changed)
        library_layout.addRow("Default sort:", self.sort_combo)
        layout.addWidget(library_group)

        hidden_group = QGroupBox("Hidden Albums")
        hidden_layout = QVBoxLayout(hidden_group)
        self.hidden_albums_view = HiddenAlbumsView(self.hidden_service)
        hidden_layout.addWidget(self.hidden_albums_view)
        layout.addWidget(hidden_group, 1)

    def load_config(self):
        """Load values from the configuration."""
        credentials = self.config.deezer.get_decoded_credentials()
        self.token_input.setText(credentials["access_token"])
        self.sort_combo.blockSignals(True)  # noqa: FBT003
        self.sort_combo.setCurrentIndex(
            self.sort_combo.findData(SortMode(self.config.library.default_sort_mode))
        )
        self.sort_combo.blockSignals(False)  # noqa: FBT003
        self.set_authorization_status(AuthorizationStatus.NOT_DETERMINED)

    def save_token(self):
        """Emit the entered token."""
        self.access_token_saved.emit(self.token_input.text().strip())

    def set_authorization_status(self, status: AuthorizationStatus):
        """Show the catalog connection state."""
        text, color = STATUS_TEXT[AuthorizationStatus(status)]
        self.status_label.setText(text)
        self.status_label.setStyleSheet(f"color: {color};")

    def _on_sort_changed(self, index: int):
        mode = self.sort_combo.itemData(index)
        if mode is not None:
            self.default_sort_changed.emit(mode)
