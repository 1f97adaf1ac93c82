# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Main application window for Only Albums."""

import asyncio
import logging
import sys

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QAction, QCloseEvent, QImage, QKeySequence
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStackedWidget,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from onlyalbums.catalog.base import BaseCatalogClient
from onlyalbums.catalog.deezer import DeezerCatalogClient
from onlyalbums.catalog.exceptions import CatalogError
from onlyalbums.models.album import Album
from onlyalbums.models.db_manager import close_databases, initialize_databases
from onlyalbums.models.enums import AuthorizationStatus, SortMode
from onlyalbums.models.hidden_service import HiddenAlbumsService
from onlyalbums.player.observer import NowPlayingObserver
from onlyalbums.player.queue_player import QueuePlayer
from onlyalbums.ui.album_detail import AlbumDetailView
from onlyalbums.ui.album_list import AlbumListView
from onlyalbums.ui.catalog_service import CatalogService
from onlyalbums.ui.config_manager import ConfigManager
from onlyalbums.ui.library_state import LibraryState
from onlyalbums.ui.mini_player import MiniPlayerBar
from onlyalbums.ui.resources import get_application_icon
from onlyalbums.ui.settings_view import SettingsView

logger = logging.getLogger(__name__)

ALBUM_ARTWORK_PREFIX = "album:"
PLAYER_ARTWORK_PREFIX = "player:"

ALBUMS_TAB = 0
SETTINGS_TAB = 1
LIST_PAGE = 0
DETAIL_PAGE = 1


class MainWindow(QMainWindow):
    """Main application window.

    Collaborators can be injected; anything not given is built from the
    configuration.
    """

    def __init__(
        self,
        config_manager: ConfigManager | None = None,
        client: BaseCatalogClient | None = None,
        hidden_service: HiddenAlbumsService | None = None,
    ):
        super().__init__()

        self.config_manager = config_manager or ConfigManager()
        self.config = self.config_manager.load_config()

        if hidden_service is None:
            db = initialize_databases(self.config.database.database_path)
            hidden_service = HiddenAlbumsService(db)
        self.hidden_service = hidden_service

        if client is None:
            player = QueuePlayer(
                volume=self.config.player.volume,
                restart_threshold_seconds=self.config.player.restart_threshold_seconds,
            )
            client = DeezerCatalogClient(
                player,
                self.config_manager.get_catalog_credentials(),
                fetch_limit=self.config.library.fetch_limit,
            )
        self.client = client

        self.catalog_service = CatalogService(
            self.client,
            artwork_cache_dir=self.config.artwork.cache_dir,
            artwork_timeout=self.config.artwork.timeout_seconds,
            parent=self,
        )
        self.state = LibraryState(
            SortMode(self.config.library.default_sort_mode), parent=self
        )
        self.state.set_hidden_ids(self.hidden_service.hidden_ids())
        self.observer = NowPlayingObserver(
            self.client.playback, self.config.player.poll_interval_ms, parent=self
        )
        self.settings = QSettings("onlyalbums", "onlyalbums")

        self.setWindowTitle("Only Albums")
        self.setGeometry(100, 100, 1000, 760)
        self.setWindowIcon(get_application_icon())

        self.setup_ui()
        self.setup_menus()
        self._connect_signals()
        self.restore_geometry()

    def setup_ui(self):
        """Set up tabs, mini-player and status bar."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.tabs = QTabWidget()

        self.albums_stack = QStackedWidget()
        self.album_list = AlbumListView(
            self.state, artwork_size=self.config.artwork.list_size
        )
        self.album_detail = AlbumDetailView(
            artwork_size=self.config.artwork.detail_size
        )
        self.albums_stack.addWidget(self.album_list)
        self.albums_stack.addWidget(self.album_detail)
        self.tabs.addTab(self.albums_stack, "Albums")

        self.settings_view = SettingsView(self.config, self.hidden_service)
        self.tabs.addTab(self.settings_view, "Settings")

        layout.addWidget(self.tabs, 1)

        self.mini_player = MiniPlayerBar(self.observer)
        layout.addWidget(self.mini_player)

        self.setCentralWidget(central)

        self.status_label = QLabel("Ready")
        self.statusBar().addWidget(self.status_label)

    def setup_menus(self):
        """Set up the menu bar."""
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")

        reload_action = QAction("&Reload Albums", self)
        reload_action.setShortcut(QKeySequence.StandardKey.Refresh)
        reload_action.triggered.connect(self.load_library)
        file_menu.addAction(reload_action)

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.StandardKey.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        help_menu = menubar.addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def _connect_signals(self):
        service = self.catalog_service
        service.authorization_changed.connect(self.handle_authorization_changed)
        service.albums_loaded.connect(self.handle_albums_loaded)
        service.albums_failed.connect(self.handle_albums_failed)
        service.album_detail_ready.connect(self.album_detail.set_hydrated_album)
        service.album_detail_failed.connect(self.handle_album_detail_failed)
        service.playback_started.connect(self.handle_playback_started)
        service.playback_failed.connect(self.handle_playback_failed)
        service.artwork_ready.connect(self.handle_artwork_ready)

        self.album_list.album_activated.connect(self.show_album_detail)
        self.album_list.hide_requested.connect(self.hide_album)
        self.album_list.refresh_requested.connect(self.load_library)
        self.album_list.settings_requested.connect(
            lambda: self.tabs.setCurrentIndex(SETTINGS_TAB)
        )

        self.album_detail.back_requested.connect(self.show_album_list)
        self.album_detail.play_requested.connect(self.play_album)

        self.settings_view.access_token_saved.connect(self.handle_access_token_saved)
        self.settings_view.default_sort_changed.connect(self.handle_default_sort_changed)
        self.settings_view.hidden_albums_view.album_unhidden.connect(
            self.reload_hidden_ids
        )

        self.mini_player.artwork_requested.connect(self.fetch_player_artwork)

    def start(self):
        """Start polling playback and load the library."""
        if not self.observer.is_polling:
            self.observer.start()
        self.load_library()

    def update_status(self, message: str):
        """Update the status bar message."""
        self.status_label.setText(message)

    def load_library(self):
        """Fetch the library albums in the background."""
        if self.state.is_loading:
            return
        self.state.set_loading(True)
        self.update_status("Loading albums...")
        self.catalog_service.load_library()

    def handle_authorization_changed(self, status: AuthorizationStatus):
        self.state.set_authorization_status(status)
        self.settings_view.set_authorization_status(status)

    def handle_albums_loaded(self, albums: list[Album]):
        self.state.set_loading(False)
        self.state.set_albums(albums)
        shown = self.state.visible_count
        if shown == len(albums):
            self.update_status(f"Loaded {len(albums)} albums")
        else:
            self.update_status(f"Loaded {len(albums)} albums ({shown} shown)")
        self.catalog_service.fetch_artwork(
            [(ALBUM_ARTWORK_PREFIX + a.id, a.artwork_url) for a in albums]
        )

    def handle_albums_failed(self, error: CatalogError):
        self.state.set_loading(False)
        self.state.set_error(error)
        self.update_status(f"Error: {error.message}")

    def hide_album(self, album_id: str):
        """Hide an album from the list."""
        album = self.state.find_album(album_id)
        if not self.hidden_service.insert(
            album_id,
            title=album.title if album else None,
            artist_name=album.artist_name if album else None,
        ):
            self.update_status("Could not hide album")
            return
        self.reload_hidden_ids()
        self.settings_view.hidden_albums_view.refresh()
        self.update_status(f"Hidden: {album.title if album else album_id}")

    def reload_hidden_ids(self, *_args):
        """Re-read the hidden set and re-run the list pipeline."""
        self.state.set_hidden_ids(self.hidden_service.hidden_ids())

    def show_album_detail(self, album_id: str):
        """Open the detail page for an album and hydrate it."""
        album = self.catalog_service.hydrated_album(album_id) or self.state.find_album(
            album_id
        )
        if album is None:
            logger.warning("Album %s is not loaded", album_id)
            return

        self.album_detail.show_album(album)
        self.albums_stack.setCurrentIndex(DETAIL_PAGE)
        if not album.is_hydrated:
            self.catalog_service.fetch_album_detail(album_id)
        if album.artwork_url:
            self.catalog_service.fetch_artwork(
                [(ALBUM_ARTWORK_PREFIX + album.id, album.artwork_url)]
            )

    def show_album_list(self):
        self.albums_stack.setCurrentIndex(LIST_PAGE)

    def handle_album_detail_failed(self, album_id: str, error: CatalogError):
        self.album_detail.show_error(album_id, error.message)
        self.update_status(f"Couldn't load album: {error.message}")

    def play_album(self, album: Album):
        """Queue the album for playback."""
        self.album_detail.set_play_in_flight(album.id, True)
        self.update_status(f"Starting {album.title}...")
        self.catalog_service.play_album(album)

    def handle_playback_started(self, album_id: str):
        self.album_detail.set_play_in_flight(album_id, False)
        self.observer.refresh()
        self.update_status("Playing")

    def handle_playback_failed(self, album_id: str, error: CatalogError):
        self.album_detail.set_play_in_flight(album_id, False)
        self.album_detail.show_error(album_id, error.message)
        self.update_status(f"Playback failed: {error.message}")

    def fetch_player_artwork(self, artwork_url: str):
        self.catalog_service.fetch_artwork(
            [(PLAYER_ARTWORK_PREFIX + artwork_url, artwork_url)]
        )

    def handle_artwork_ready(self, key: str, image: QImage):
        """Route downloaded artwork to the widget that asked for it."""
        if key.startswith(ALBUM_ARTWORK_PREFIX):
            album_id = key.removeprefix(ALBUM_ARTWORK_PREFIX)
            self.album_list.update_artwork(album_id, image)
            self.album_detail.set_artwork(album_id, image)
        elif key.startswith(PLAYER_ARTWORK_PREFIX):
            self.mini_player.set_artwork(key.removeprefix(PLAYER_ARTWORK_PREFIX), image)

    def handle_access_token_saved(self, token: str):
        """Store a new access token and reload with it."""
        self.config_manager.set_access_token(token)
        self.catalog_service.update_credentials(
            self.config_manager.get_catalog_credentials()
        )
        self.state.set_albums([])
        # Any load still running belongs to the old token
        self.state.set_loading(False)
        self.show_album_list()
        self.tabs.setCurrentIndex(ALBUMS_TAB)
        self.load_library()

    def handle_default_sort_changed(self, sort_mode: SortMode):
        self.config.library.default_sort_mode = sort_mode
        self.config_manager.save_config()

    def show_about(self):
        """Show about dialog."""
        QMessageBox.about(
            self,
            "About Only Albums",
            "Only Albums\n\n"
            "Browse the albums saved in your Deezer library.\n\n"
            "Copyright (c) 2025 onlyalbums and contributors.\n"
            "Licensed under the MIT license.",
        )

    def restore_geometry(self):
        """Restore window geometry from settings."""
        geometry = self.settings.value("geometry")
        if geometry:
            self.restoreGeometry(geometry)

    def save_geometry(self):
        """Save window geometry to settings."""
        self.settings.setValue("geometry", self.saveGeometry())

    def closeEvent(self, a0: QCloseEvent):  # noqa: N802
        """Stop background work and release resources."""
        self.observer.stop()
        self.catalog_service.cleanup()
        try:
            asyncio.run(self.client.cleanup())
        except CatalogError:
            logger.exception("Failed to clean up catalog client")
        close_databases()
        self.save_geometry()
        a0.accept()


def main() -> int:
    """Execute application."""
    from onlyalbums import __version__

    config_manager = ConfigManager()
    config = config_manager.load_config()

    logging.basicConfig(
        format="%(levelname)s:%(message)s",
        level=getattr(logging, config.logging.level, logging.INFO),
    )

    app = QApplication(sys.argv)

    app.setApplicationName("Only Albums")
    app.setApplicationDisplayName("Only Albums")
    app.setApplicationVersion(__version__)
    app.setOrganizationName("onlyalbums")
    app.setOrganizationDomain("onlyalbums.app")

    app.setWindowIcon(get_application_icon())

    window = MainWindow(config_manager=config_manager)
    window.show()
    window.start()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
