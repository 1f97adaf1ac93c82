# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Only Albums models package with catalog values and local persistence."""

from onlyalbums.models.album import Album, Track
from onlyalbums.models.base import OnlyAlbumsBaseModel

# Database models
from onlyalbums.models.database import Base, HiddenAlbum
from onlyalbums.models.db_manager import (
    DatabaseManager,
    close_databases,
    get_library_db,
    initialize_databases,
)
from onlyalbums.models.enums import (
    AuthorizationStatus,
    PlaybackStatus,
    SortMode,
    StreamingSource,
)
from onlyalbums.models.hidden_service import HiddenAlbumsService
from onlyalbums.models.playback import PlaybackSnapshot, QueueEntry

__all__ = [
    "Album",
    "AuthorizationStatus",
    "Base",
    "DatabaseManager",
    "HiddenAlbum",
    "HiddenAlbumsService",
    "OnlyAlbumsBaseModel",
    "PlaybackSnapshot",
    "PlaybackStatus",
    "QueueEntry",
    "SortMode",
    "StreamingSource",
    "Track",
    "close_databases",
    "get_library_db",
    "initialize_databases",
]
