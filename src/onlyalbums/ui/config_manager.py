# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Configuration manager for handling application configuration."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from onlyalbums.config.user import UserConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages application configuration loading, saving, and validation."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or self._get_default_config_path()
        self.config: UserConfig | None = None

    def _get_default_config_path(self) -> Path:
        """Get the default configuration file path."""
        return Path.home() / ".config" / "onlyalbums" / "config.json"

    def load_config(self) -> UserConfig:
        """Load configuration from file or create default."""
        try:
            if self.config_path.exists():
                self.config = UserConfig.from_json_file(self.config_path)
                logger.info("Configuration loaded from %s", self.config_path)
            else:
                self.config = UserConfig()
                self.save_config()
                logger.info("Default configuration created at %s", self.config_path)

        except (ValidationError, json.JSONDecodeError) as e:
            logger.warning("Invalid configuration file, creating default: %s", e)
            self.config = UserConfig()
            self.save_config()

        except OSError:
            logger.exception("Failed to load configuration")
            self.config = UserConfig()

        return self.config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if not self.config:
            logger.warning("No configuration to save")
            return

        try:
            self.config.to_json_file(self.config_path)
            logger.info("Configuration saved to %s", self.config_path)
        except OSError:
            logger.exception("Failed to save configuration")

    def get_config(self) -> UserConfig:
        """Get the current configuration."""
        if not self.config:
            self.load_config()
        return self.config

    def set_access_token(self, token: str) -> None:
        """Store a new Deezer access token and persist it."""
        config = self.get_config()
        config.deezer.set_access_token(token)
        self.save_config()

    def get_catalog_credentials(self) -> dict:
        """Get decoded credentials for the catalog client."""
        return self.get_config().deezer.get_decoded_credentials()
