# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Base configuration classes with common functionality."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class BaseConfig(BaseModel):
    """Base configuration class with common settings."""

    model_config = ConfigDict(
        # Enable validation on assignment
        validate_assignment=True,
        # Use enum values instead of enum objects in serialization
        use_enum_values=True,
        # Reject unknown keys
        extra="forbid",
        # Validate default values
        validate_default=True,
    )


class PathConfig(BaseConfig):
    """Base configuration for path-related settings."""

    @field_validator("*", mode="before")
    @classmethod
    def validate_paths(cls, v: Any, info) -> Any:
        """Expand ``~`` in string or Path values of ``*path*``/``*dir*`` fields."""
        name = (info.field_name or "").lower()
        if ("path" in name or "dir" in name) and isinstance(v, str | Path):
            return Path(v).expanduser()
        return v
