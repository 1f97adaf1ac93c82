# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Exceptions for the catalog module."""

from typing import Any


class CatalogError(Exception):
    """Base exception for catalog-related errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotAuthorizedError(CatalogError):
    """Exception raised when catalog access is denied or revoked."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.source = source


class AlbumNotFoundError(CatalogError):
    """Exception raised when an album can no longer be resolved."""

    def __init__(
        self,
        message: str,
        album_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.album_id = album_id


class CatalogFetchError(CatalogError):
    """Exception raised for network or transient catalog failures."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class PlaybackError(CatalogError):
    """Exception raised when a playback request cannot be honoured."""
