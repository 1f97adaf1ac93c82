# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Configuration models for Only Albums."""

from onlyalbums.config.base import BaseConfig
from onlyalbums.config.user import (
    ArtworkConfig,
    DatabaseConfig,
    DeezerConfig,
    LibraryConfig,
    LoggingConfig,
    PlayerConfig,
    UserConfig,
)

__all__ = [
    "ArtworkConfig",
    "BaseConfig",
    "DatabaseConfig",
    "DeezerConfig",
    "LibraryConfig",
    "LoggingConfig",
    "PlayerConfig",
    "UserConfig",
]
