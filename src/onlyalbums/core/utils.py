# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Core utility functions for onlyalbums."""

import base64
import unicodedata


def encode_secret(value: str) -> str:
    """Encode a secret value using base64."""
    if not value:
        return ""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def decode_secret(encoded_value: str) -> str:
    """Decode a base64-encoded secret value."""
    if not encoded_value:
        return ""
    try:
        return base64.b64decode(encoded_value.encode("ascii")).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return ""


def strip_accents(value: str) -> str:
    """Remove combining marks after NFKD decomposition ("Björk" -> "Bjork")."""
    normalized = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def collation_key(value: str) -> tuple[str, str]:
    """Build a case-insensitive, accent-aware sort key.

    Accented and unaccented spellings compare equal on the first element and
    are ordered deterministically by the second.
    """
    folded = (value or "").casefold()
    return strip_accents(folded), folded
