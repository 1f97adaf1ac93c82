# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""User configuration classes for general settings."""

from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator

from onlyalbums.config.base import BaseConfig, PathConfig
from onlyalbums.models.enums import SortMode


class DeezerConfig(BaseConfig):
    """Configuration for the Deezer catalog."""

    app_id: str = Field(default="", description="Deezer application id")
    access_token: str = Field(
        default="",
        description="OAuth access token (base64-encoded)",
    )

    @field_validator("app_id", "access_token")
    @classmethod
    def validate_auth_fields(cls, v: str) -> str:
        """Validate authentication fields are strings."""
        return str(v).strip()

    def get_decoded_credentials(self) -> dict[str, Any]:
        """Get decoded credentials for the catalog client."""
        from onlyalbums.core.utils import decode_secret

        return {
            "app_id": self.app_id,
            "access_token": decode_secret(self.access_token),
        }

    def set_access_token(self, token: str) -> None:
        """Store a plain-text access token in encoded form."""
        from onlyalbums.core.utils import encode_secret

        self.access_token = encode_secret(token.strip())


class LibraryConfig(BaseConfig):
    """Configuration for the album list."""

    default_sort_mode: SortMode = Field(
        default=SortMode.BY_TITLE,
        description="Sort mode selected when the application starts",
    )
    fetch_limit: int = Field(
        default=500,
        description="Maximum number of library albums to fetch",
    )

    @field_validator("fetch_limit")
    @classmethod
    def validate_fetch_limit(cls, v: int) -> int:
        """Validate fetch limit is positive."""
        if v <= 0:
            msg = "Fetch limit must be positive"
            raise ValueError(msg)
        return v


class PlayerConfig(BaseConfig):
    """Configuration for playback and the mini-player."""

    poll_interval_ms: int = Field(
        default=1000,
        description="How often the mini-player re-reads playback state",
    )
    volume: float = Field(default=0.8, description="Output volume (0.0 - 1.0)")
    restart_threshold_seconds: float = Field(
        default=3.0,
        description="Seconds into a track after which 'previous' restarts it",
    )

    @field_validator("poll_interval_ms")
    @classmethod
    def validate_poll_interval(cls, v: int) -> int:
        """Validate poll interval is not absurdly small."""
        if v < 100:
            msg = "Poll interval must be at least 100 ms"
            raise ValueError(msg)
        return v

    @field_validator("volume")
    @classmethod
    def validate_volume(cls, v: float) -> float:
        """Validate volume is between 0 and 1."""
        if not 0.0 <= v <= 1.0:
            msg = "Volume must be between 0.0 and 1.0"
            raise ValueError(msg)
        return v

    @field_validator("restart_threshold_seconds")
    @classmethod
    def validate_restart_threshold(cls, v: float) -> float:
        """Validate restart threshold is non-negative."""
        if v < 0:
            msg = "Restart threshold must be non-negative"
            raise ValueError(msg)
        return v


class DatabaseConfig(PathConfig):
    """Configuration for database settings."""

    database_path: Path = Field(
        default=Path("~/.config/onlyalbums/library.db").expanduser(),
        description="Path to the library database (hidden albums)",
    )


class ArtworkConfig(PathConfig):
    """Configuration for artwork loading."""

    cache_dir: Path = Field(
        default=Path("~/.cache/onlyalbums").expanduser(),
        description="Directory for cached cover images",
    )
    timeout_seconds: float = Field(
        default=10.0, description="Timeout for a single artwork download"
    )
    list_size: int = Field(default=56, description="Cover size in the album list")
    detail_size: int = Field(default=320, description="Cover size on album detail")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout_seconds(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            msg = "Timeout must be positive"
            raise ValueError(msg)
        return float(v)

    @field_validator("list_size", "detail_size")
    @classmethod
    def validate_sizes(cls, v: int) -> int:
        """Validate cover sizes are positive."""
        if v <= 0:
            msg = "Artwork sizes must be positive"
            raise ValueError(msg)
        return v


class LoggingConfig(BaseConfig):
    """Configuration for application logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lower-case level names."""
        return v.upper() if isinstance(v, str) else v


class UserConfig(BaseConfig):
    """Main user configuration combining all settings."""

    deezer: DeezerConfig = Field(
        default_factory=DeezerConfig, description="Deezer catalog configuration"
    )
    library: LibraryConfig = Field(
        default_factory=LibraryConfig, description="Album list settings"
    )
    player: PlayerConfig = Field(
        default_factory=PlayerConfig, description="Playback settings"
    )
    database: DatabaseConfig = Field(
        default_factory=DatabaseConfig, description="Database settings"
    )
    artwork: ArtworkConfig = Field(
        default_factory=ArtworkConfig, description="Artwork settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging settings"
    )

    @classmethod
    def from_json_file(cls, file_path: Path | str) -> "UserConfig":
        """Load configuration from a JSON file."""
        import json

        if isinstance(file_path, str):
            file_path = Path(file_path)

        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for serialization."""
        return self.model_dump(mode="json")

    def to_json_file(self, file_path: Path | str) -> None:
        """Save configuration to a JSON file."""
        import json

        if isinstance(file_path, str):
            file_path = Path(file_path)

        file_path.parent.mkdir(parents=True, exist_ok=True)

        with file_path.open("w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
