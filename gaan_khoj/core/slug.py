"""URL slugs for song detail links.

A slug is derived from the title, artist and lyricist alone, so the same
credits always produce the same link and no identifier has to be stored.
Two songs with identical credits share a slug; the first one in catalog
order wins on lookup.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Optional
from urllib.parse import quote

from .text import COLLECTED, UNKNOWN_LYRICIST, clean_display, strip_invisible

TITLE_FALLBACK = "untitled"
ARTIST_FALLBACK = "unknown-artist"
LYRICIST_FALLBACK = "unknown-lyricist"

SONG_ROUTE = "/song/"
SEARCH_ROUTE = "/search"
BROWSE_ROUTE = "/browse/"

_SEPARATOR_RE = re.compile(r"[\s\-]+")

# Generic lyricist credits that say nothing about the song.
_GENERIC_LYRICISTS = frozenset({COLLECTED, UNKNOWN_LYRICIST})


def _keep(char: str) -> bool:
    # Letters, combining marks (Bengali vowel signs, hasanta) and digits.
    return unicodedata.category(char)[0] in "LMN" or char.isspace() or char == "-"


def slug_part(text: Optional[str], fallback: str) -> str:
    """Sanitise a single slug segment, substituting ``fallback`` when empty."""

    if not text:
        return fallback
    lowered = strip_invisible(str(text)).lower()
    kept = "".join(char for char in lowered if _keep(char))
    collapsed = _SEPARATOR_RE.sub("-", kept).strip("-")
    return collapsed or fallback


def _lyricist_supplied(lyricist: Optional[str]) -> bool:
    cleaned = clean_display(lyricist)
    return cleaned is not None and cleaned not in _GENERIC_LYRICISTS


def make_slug(title: Optional[str], artist: Optional[str], lyricist: Optional[str] = None) -> str:
    """Build ``{title}-by-{artist}[-lyricist-{lyricist}]``."""

    base = f"{slug_part(title, TITLE_FALLBACK)}-by-{slug_part(artist, ARTIST_FALLBACK)}"
    if _lyricist_supplied(lyricist):
        return f"{base}-lyricist-{slug_part(lyricist, LYRICIST_FALLBACK)}"
    return base


def song_route(slug: str) -> str:
    return f"{SONG_ROUTE}{quote(slug, safe='')}"


def search_route(query: str) -> str:
    return f"{SEARCH_ROUTE}?q={quote(query.strip(), safe='')}"


def browse_route(field: str, value: str) -> str:
    return f"{BROWSE_ROUTE}{field}?v={quote(value.strip(), safe='')}"


__all__ = [
    "ARTIST_FALLBACK",
    "BROWSE_ROUTE",
    "LYRICIST_FALLBACK",
    "SEARCH_ROUTE",
    "SONG_ROUTE",
    "TITLE_FALLBACK",
    "browse_route",
    "make_slug",
    "search_route",
    "slug_part",
    "song_route",
]
