# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Now-playing observer feeding the mini-player."""

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from onlyalbums.catalog.base import PlaybackSurface
from onlyalbums.models.enums import PlaybackStatus
from onlyalbums.models.playback import PlaybackSnapshot

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 1000
FALLBACK_TITLE = "Now Playing"


class NowPlayingObserver(QObject):
    """Polls the playback surface and drives transport controls.

    The displayed snapshot is only ever built from what the playback surface
    reports. Transport actions never guess the resulting state; they refresh
    once the request has settled, whether it succeeded or not.
    """

    snapshot_changed = pyqtSignal(object)  # PlaybackSnapshot

    def __init__(
        self,
        playback: PlaybackSurface,
        interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        parent=None,
    ):
        super().__init__(parent)
        self.playback = playback
        self._snapshot = PlaybackSnapshot()

        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.refresh)

    @property
    def snapshot(self) -> PlaybackSnapshot:
        """Get the last computed snapshot."""
        return self._snapshot

    @property
    def interval_ms(self) -> int:
        """Get the polling interval."""
        return self._timer.interval()

    @property
    def is_polling(self) -> bool:
        """Check if the polling timer is running."""
        return self._timer.isActive()

    def start(self) -> None:
        """Refresh now and then on every timer tick."""
        self.refresh()
        self._timer.start()

    def stop(self) -> None:
        """Stop polling."""
        self._timer.stop()

    def refresh(self) -> PlaybackSnapshot:
        """Re-read playback state and recompute the snapshot."""
        status = self.playback.current_status()
        entry = self.playback.current_entry()

        if entry is not None:
            snapshot = PlaybackSnapshot(
                status=status,
                title=entry.title or FALLBACK_TITLE,
                subtitle=entry.artist_name or "",
                artwork_url=entry.artwork_url,
            )
        else:
            snapshot = PlaybackSnapshot(status=status)

        if snapshot != self._snapshot:
            self._snapshot = snapshot
            self.snapshot_changed.emit(snapshot)
        return snapshot

    async def toggle_play_pause(self) -> None:
        """Pause if playing, otherwise play; then refresh."""
        try:
            if self.playback.current_status() == PlaybackStatus.PLAYING:
                await self.playback.pause()
            else:
                await self.playback.play()
        except Exception:
            logger.warning("Play/pause request failed", exc_info=True)
        self.refresh()

    async def next(self) -> None:
        """Skip to the next entry; then refresh."""
        try:
            await self.playback.skip_next()
        except Exception:
            logger.debug("Skip to next entry failed", exc_info=True)
        self.refresh()

    async def previous(self) -> None:
        """Skip to the previous entry; then refresh."""
        try:
            await self.playback.skip_previous()
        except Exception:
            logger.debug("Skip to previous entry failed", exc_info=True)
        self.refresh()
