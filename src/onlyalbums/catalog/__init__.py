# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Catalog clients for streaming services."""

from onlyalbums.catalog.base import BaseCatalogClient, PlaybackSurface
from onlyalbums.catalog.deezer import DeezerCatalogClient
from onlyalbums.catalog.exceptions import (
    AlbumNotFoundError,
    CatalogError,
    CatalogFetchError,
    NotAuthorizedError,
    PlaybackError,
)

__all__ = [
    "AlbumNotFoundError",
    "BaseCatalogClient",
    "CatalogError",
    "CatalogFetchError",
    "DeezerCatalogClient",
    "NotAuthorizedError",
    "PlaybackError",
    "PlaybackSurface",
]
