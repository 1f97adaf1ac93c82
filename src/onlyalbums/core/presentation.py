# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Album presentation pipeline.

Turns the raw library listing into the sectioned view model shown by the
album list::

    albums -> filter_visible -> filter_by_search -> sort_albums
           -> group_into_sections

Every function here is pure: no I/O, no shared state, and the same inputs
always produce the same output.
"""

from collections.abc import Collection, Iterable

from onlyalbums.core.utils import collation_key
from onlyalbums.models.album import Album
from onlyalbums.models.enums import SortMode

NON_ALPHA_SECTION = "#"


def filter_visible(albums: Iterable[Album], hidden_ids: Collection[str]) -> list[Album]:
    """Drop albums whose id is hidden."""
    return [album for album in albums if album.id not in hidden_ids]


def filter_by_search(albums: Iterable[Album], search_text: str) -> list[Album]:
    """Keep albums whose title or artist contains the search text.

    Matching is case-insensitive on the text as typed, surrounding spaces
    included. Empty or whitespace-only search text keeps everything.
    """
    if not (search_text or "").strip():
        return list(albums)
    query = search_text.casefold()
    return [
        album
        for album in albums
        if query in album.title.casefold() or query in album.artist_name.casefold()
    ]


def sort_albums(albums: Iterable[Album], sort_mode: SortMode) -> list[Album]:
    """Sort albums for the given mode (stable)."""
    if sort_mode == SortMode.BY_ARTIST_THEN_TITLE:
        return sorted(
            albums,
            key=lambda a: (collation_key(a.artist_name), collation_key(a.title)),
        )
    return sorted(albums, key=lambda a: collation_key(a.title))


def sort_field(album: Album, sort_mode: SortMode) -> str:
    """Get the field the album is sorted and sectioned by."""
    if sort_mode == SortMode.BY_ARTIST_THEN_TITLE:
        return album.artist_name
    return album.title


def section_key(album: Album, sort_mode: SortMode) -> str:
    """Derive the single-character section key for an album.

    The first character of the trimmed sort field, upper-cased. Anything
    that is not a letter, including an empty field, goes under ``#``.
    """
    trimmed = sort_field(album, sort_mode).strip()
    if not trimmed or not trimmed[0].isalpha():
        return NON_ALPHA_SECTION
    # "ß".upper() is "SS"; keep keys to a single character
    return trimmed[0].upper()[0]


def ordered_section_keys(keys: Iterable[str]) -> list[str]:
    """Order section keys for display.

    ``#`` comes first, then letters in the same collation order used for
    sorting, so an accented key such as ``É`` sits next to ``E``.
    """
    return sorted(set(keys), key=lambda k: (k != NON_ALPHA_SECTION, collation_key(k)))


def group_into_sections(
    albums: Iterable[Album], sort_mode: SortMode
) -> dict[str, list[Album]]:
    """Bucket already sorted albums by section key.

    Order inside a bucket follows the input order. The returned mapping
    iterates its keys in ``ordered_section_keys`` order.
    """
    buckets: dict[str, list[Album]] = {}
    for album in albums:
        buckets.setdefault(section_key(album, sort_mode), []).append(album)
    return {key: buckets[key] for key in ordered_section_keys(buckets)}


def present(
    albums: Iterable[Album],
    hidden_ids: Collection[str],
    search_text: str,
    sort_mode: SortMode,
) -> dict[str, list[Album]]:
    """Build the sectioned album list.

    Args:
        albums: Raw library albums
        hidden_ids: Ids of albums the user has hidden
        search_text: Text typed in the search field
        sort_mode: Selected ordering

    Returns
    -------
        Mapping of section key to ordered albums; empty when nothing is visible
    """
    visible = filter_visible(albums, hidden_ids)
    matching = filter_by_search(visible, search_text)
    return group_into_sections(sort_albums(matching, sort_mode), sort_mode)


def count_albums(sections: dict[str, list[Album]]) -> int:
    """Count the albums across all sections."""
    return sum(len(albums) for albums in sections.values())
