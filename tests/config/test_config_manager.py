# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Tests for the configuration manager."""

from onlyalbums.config.user import UserConfig
from onlyalbums.ui.config_manager import ConfigManager


class TestConfigManager:
    """Test loading, creating and saving the config file."""

    def test_creates_default_file(self, tmp_path):
        path = tmp_path / "onlyalbums" / "config.json"
        manager = ConfigManager(path)

        config = manager.load_config()

        assert isinstance(config, UserConfig)
        assert path.exists()

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        manager = ConfigManager(path)

        config = manager.load_config()

        assert config.library.fetch_limit == 500
        assert path.read_text(encoding="utf-8").startswith("{")

    def test_invalid_values_fall_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text('{"player": {"volume": 7}}', encoding="utf-8")

        config = ConfigManager(path).load_config()

        assert config.player.volume == 0.8

    def test_set_access_token_persists(self, tmp_path):
        path = tmp_path / "config.json"
        manager = ConfigManager(path)
        manager.load_config()

        manager.set_access_token("  new-token  ")

        reloaded = ConfigManager(path).load_config()
        assert reloaded.deezer.get_decoded_credentials()["access_token"] == "new-token"
        assert manager.get_catalog_credentials()["access_token"] == "new-token"
