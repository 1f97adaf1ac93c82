# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Queue-based audio player on top of Qt Multimedia."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence

from PyQt6.QtCore import QObject, QUrl, pyqtSignal, pyqtSlot
from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer

from onlyalbums.catalog.base import PlaybackSurface
from onlyalbums.catalog.exceptions import PlaybackError
from onlyalbums.models.enums import PlaybackStatus
from onlyalbums.models.playback import QueueEntry

logger = logging.getLogger(__name__)

DEFAULT_RESTART_THRESHOLD_SECONDS = 3.0


class _QueueLoader(QObject):
    """Hands queue replacements to the thread that owns the media player."""

    queue_requested = pyqtSignal(object, bool)  # entries, autoplay

    def __init__(self, on_load: Callable[[list[QueueEntry], bool], None], parent=None):
        super().__init__(parent)
        self._on_load = on_load
        self.queue_requested.connect(self._handle_queue_requested)

    @pyqtSlot(object, bool)
    def _handle_queue_requested(self, entries: list[QueueEntry], autoplay: bool):
        self._on_load(entries, autoplay)


class QueuePlayer(PlaybackSurface):
    """Plays an ordered list of queue entries through QMediaPlayer."""

    def __init__(
        self,
        media_player: QMediaPlayer | None = None,
        audio_output: QAudioOutput | None = None,
        volume: float = 0.8,
        restart_threshold_seconds: float = DEFAULT_RESTART_THRESHOLD_SECONDS,
    ):
        self._media = media_player if media_player is not None else QMediaPlayer()
        if media_player is None:
            self._audio_output = audio_output or QAudioOutput()
            self._media.setAudioOutput(self._audio_output)
        else:
            self._audio_output = audio_output
        self.set_volume(volume)
        self.restart_threshold_seconds = restart_threshold_seconds

        self._lock = threading.Lock()
        self._entries: list[QueueEntry] = []
        self._index: int | None = None

        self._loader = _QueueLoader(self._load_queue)
        self._media.mediaStatusChanged.connect(self._on_media_status_changed)

    @property
    def entries(self) -> list[QueueEntry]:
        """Get a copy of the queued entries."""
        with self._lock:
            return list(self._entries)

    def set_volume(self, volume: float) -> None:
        """Set output volume (0.0 - 1.0)."""
        if self._audio_output is not None:
            self._audio_output.setVolume(max(0.0, min(1.0, volume)))

    def current_status(self) -> PlaybackStatus:
        """Map the Qt playback state onto PlaybackStatus."""
        state = self._media.playbackState()
        if state == QMediaPlayer.PlaybackState.PlayingState:
            return PlaybackStatus.PLAYING
        if state == QMediaPlayer.PlaybackState.PausedState:
            return PlaybackStatus.PAUSED
        return PlaybackStatus.STOPPED

    def current_entry(self) -> QueueEntry | None:
        """Get the entry at the current index, if any."""
        with self._lock:
            if self._index is None or not 0 <= self._index < len(self._entries):
                return None
            return self._entries[self._index]

    async def set_queue(
        self, entries: Sequence[QueueEntry], *, autoplay: bool = True
    ) -> None:
        """Replace the queue.

        Safe to call from a worker thread: loading happens on the thread that
        owns the media player.
        """
        self._loader.queue_requested.emit(list(entries), autoplay)

    async def play(self) -> None:
        """Start or resume playback of the current entry."""
        if self.current_entry() is None:
            msg = "Playback queue is empty"
            raise PlaybackError(msg)
        self._media.play()

    async def pause(self) -> None:
        """Pause playback."""
        self._media.pause()

    async def skip_next(self) -> None:
        """Advance to the next entry."""
        with self._lock:
            if self._index is None or self._index + 1 >= len(self._entries):
                msg = "Already at the end of the queue"
                raise PlaybackError(msg)
            self._index += 1
            entry = self._entries[self._index]
        self._start(entry)

    async def skip_previous(self) -> None:
        """Restart the entry, or go back one if it just started."""
        with self._lock:
            if self._index is None:
                msg = "Playback queue is empty"
                raise PlaybackError(msg)
            position_seconds = self._media.position() / 1000
            if position_seconds <= self.restart_threshold_seconds and self._index > 0:
                self._index -= 1
            entry = self._entries[self._index]
        self._start(entry)

    def clear(self) -> None:
        """Stop playback and empty the queue."""
        with self._lock:
            self._entries = []
            self._index = None
        self._media.stop()
        self._media.setSource(QUrl())

    def _load_queue(self, entries: list[QueueEntry], autoplay: bool) -> None:
        """Install a new queue on the media player thread."""
        if not entries:
            self.clear()
            return
        with self._lock:
            self._entries = list(entries)
            self._index = 0
            first = self._entries[0]
        logger.info("Loaded queue with %d entries", len(entries))
        self._start(first, autoplay=autoplay)

    def _start(self, entry: QueueEntry, autoplay: bool = True) -> None:
        """Point the media player at an entry."""
        logger.debug("Now loading %s (%s)", entry.title, entry.id)
        self._media.setSource(QUrl(entry.preview_url))
        if autoplay:
            self._media.play()

    def _on_media_status_changed(self, status: QMediaPlayer.MediaStatus) -> None:
        """Advance when an entry finishes; stop after the last one."""
        if status == QMediaPlayer.MediaStatus.InvalidMedia:
            logger.warning("Media player could not load %s", self.current_entry())
            return
        if status != QMediaPlayer.MediaStatus.EndOfMedia:
            return

        with self._lock:
            has_next = self._index is not None and self._index + 1 < len(self._entries)
            if has_next:
                self._index += 1
                entry = self._entries[self._index]
        if has_next:
            self._start(entry)
        else:
            logger.info("Reached the end of the queue")
            self.clear()
