# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Base model classes with common functionality."""

from pydantic import BaseModel, ConfigDict


class OnlyAlbumsBaseModel(BaseModel):
    """Base model for all catalog value objects.

    Catalog values are fetched and displayed but never edited in place, so
    every model is frozen (and therefore hashable).
    """

    model_config = ConfigDict(
        # Values are immutable once fetched
        frozen=True,
        # Ignore unknown keys coming from catalog payloads
        extra="ignore",
        # Validate default values
        validate_default=True,
        # Section keys are derived from the raw text, keep whitespace as-is
        str_strip_whitespace=False,
    )
