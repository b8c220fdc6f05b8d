"""Read-only song catalog and its curated views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from gaan_khoj.core.models import Song
from gaan_khoj.core.pagination import page_bounds, total_pages_for
from gaan_khoj.core.text import canonical_label, collation_key, split_credits
from gaan_khoj.utils.observability import get_logger

from .songs import PRIORITY_HITS, SONGS, TAGORE

BROWSE_FIELDS = ("artist", "genre", "lyricist", "composer")
# Genres are single labels; credit fields may name several people.
_SPLIT_FIELDS = frozenset({"artist", "lyricist", "composer"})

POPULAR_LIMIT = 4
RECENT_LIMIT = 6


@dataclass(frozen=True)
class SongPage:
    """One page of the full song listing."""

    songs: Tuple[Song, ...]
    page: int
    per_page: int
    total_count: int
    total_pages: int


class SongRepository(Protocol):
    """Queries the search and suggestion services need from a catalog."""

    def all_songs(self) -> List[Song]:
        ...

    def total_count(self) -> int:
        ...

    def get_by_slug(self, slug: str) -> Optional[Song]:
        ...

    def distinct_artists(self) -> List[str]:
        ...

    def distinct_genres(self) -> List[str]:
        ...

    def distinct_lyricists(self) -> List[str]:
        ...

    def distinct_composers(self) -> List[str]:
        ...

    def popular(self) -> List[Song]:
        ...

    def recent(self) -> List[Song]:
        ...

    def songs_by(self, field: str, value: str) -> List[Song]:
        ...

    def page(self, page_number: int, per_page: int) -> SongPage:
        ...


class CurationPolicy(Protocol):
    """Chooses the featured ("popular") songs out of the catalog."""

    def rank(self, songs: Sequence[Song]) -> List[Song]:
        ...


def field_labels(song: Song, field: str) -> List[str]:
    """Canonical labels ``song`` carries for a browse ``field``."""

    if field not in BROWSE_FIELDS:
        raise ValueError(f"Unsupported browse field: {field!r}")
    raw = getattr(song, field)
    if field in _SPLIT_FIELDS:
        return split_credits(raw)
    label = canonical_label(raw)
    return [label] if label else []


def is_by_artist(song: Song, artist: str) -> bool:
    return artist in split_credits(song.artist)


class PriorityHitsCuration:
    """Hand-picked home page selection.

    Two songs by other artists come first, then the priority artist's hits in
    the order given, then one more song by another artist.  This is an
    editorial placeholder rather than a popularity ranking; swap in another
    :class:`CurationPolicy` when play counts exist.
    """

    def __init__(
        self,
        priority_artist: str,
        hit_titles: Iterable[str],
        *,
        limit: int = POPULAR_LIMIT,
        lead_count: int = 2,
        trail_count: int = 1,
    ) -> None:
        self.priority_artist = priority_artist
        self.hit_titles = tuple(hit_titles)
        self.limit = limit
        self.lead_count = lead_count
        self.trail_count = trail_count

    def rank(self, songs: Sequence[Song]) -> List[Song]:
        others = [song for song in songs if not is_by_artist(song, self.priority_artist)]
        by_title: Dict[str, Song] = {}
        for song in songs:
            if is_by_artist(song, self.priority_artist):
                by_title.setdefault(song.title, song)
        hits = [by_title[title] for title in self.hit_titles if title in by_title]

        trail_end = self.lead_count + self.trail_count
        selection = others[: self.lead_count] + hits + others[self.lead_count : trail_end]
        return selection[: self.limit]


class InMemoryCatalog:
    """:class:`SongRepository` over a fixed tuple of songs."""

    def __init__(
        self,
        songs: Iterable[Song] = SONGS,
        *,
        priority_artist: str = TAGORE,
        curation: Optional[CurationPolicy] = None,
        recent_limit: int = RECENT_LIMIT,
    ) -> None:
        self._songs: Tuple[Song, ...] = tuple(song for song in songs if not song.is_placeholder)
        self.priority_artist = priority_artist
        self.curation: CurationPolicy = curation or PriorityHitsCuration(
            priority_artist, PRIORITY_HITS
        )
        self.recent_limit = recent_limit
        self._logger = get_logger(__name__).bind(component="in_memory_catalog")
        self._logger.info(
            "Song catalog loaded",
            context={"song_count": len(self._songs), "priority_artist": priority_artist},
        )

    # Listings ----------------------------------------------------------------
    def all_songs(self) -> List[Song]:
        return list(self._songs)

    def total_count(self) -> int:
        return len(self._songs)

    def get_by_slug(self, slug: str) -> Optional[Song]:
        if not isinstance(slug, str) or not slug.strip():
            return None
        wanted = slug.strip().lower()
        for song in self._songs:
            if song.slug == wanted:
                return song
        return None

    def page(self, page_number: int, per_page: int) -> SongPage:
        total = len(self._songs)
        start, end = page_bounds(page_number, per_page)
        songs = self._songs[start:end] if page_number >= 1 else ()
        return SongPage(
            songs=tuple(songs),
            page=page_number,
            per_page=per_page,
            total_count=total,
            total_pages=total_pages_for(total, per_page),
        )

    def songs_by(self, field: str, value: str) -> List[Song]:
        wanted = canonical_label(value)
        if wanted is None:
            return []
        return [song for song in self._songs if wanted in field_labels(song, field)]

    # Distinct values -----------------------------------------------------------
    def _distinct(self, field: str) -> List[str]:
        seen: Dict[str, None] = {}
        for song in self._songs:
            for label in field_labels(song, field):
                seen.setdefault(label, None)
        return sorted(seen, key=collation_key)

    def distinct_artists(self) -> List[str]:
        artists = self._distinct("artist")
        if self.priority_artist in artists:
            artists.remove(self.priority_artist)
            artists.insert(0, self.priority_artist)
        return artists

    def distinct_genres(self) -> List[str]:
        return self._distinct("genre")

    def distinct_lyricists(self) -> List[str]:
        return self._distinct("lyricist")

    def distinct_composers(self) -> List[str]:
        return self._distinct("composer")

    # Curated views ---------------------------------------------------------------
    def popular(self) -> List[Song]:
        return list(self.curation.rank(self._songs))

    def recent(self) -> List[Song]:
        featured = {song.title for song in self.popular()}
        remaining = [song for song in self._songs if song.title not in featured]
        priority = [song for song in remaining if is_by_artist(song, self.priority_artist)]
        others = [song for song in remaining if not is_by_artist(song, self.priority_artist)]
        return (priority + others)[: self.recent_limit]


__all__ = [
    "BROWSE_FIELDS",
    "CurationPolicy",
    "InMemoryCatalog",
    "PriorityHitsCuration",
    "SongPage",
    "SongRepository",
    "field_labels",
    "is_by_artist",
]
