"""Shared dataclasses for songs and suggestion results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .slug import make_slug, search_route, song_route
from .text import clean_display, normalize_text

LYRICS_UNAVAILABLE = "গানের কথা পাওয়া যায়নি"
PLACEHOLDER_GENRE = "Placeholder"


@dataclass(frozen=True)
class Song:
    """A single catalog record."""

    title: str
    artist: str
    lyrics: str = LYRICS_UNAVAILABLE
    lyricist: Optional[str] = None
    composer: Optional[str] = None
    album: Optional[str] = None
    genre: Optional[str] = None
    release_year: Optional[int] = None

    def __post_init__(self) -> None:
        if self.release_year is not None and self.release_year <= 0:
            raise ValueError(f"release_year must be positive, got {self.release_year!r}")

    @property
    def slug(self) -> str:
        return make_slug(self.title, self.artist, self.lyricist)

    @property
    def is_placeholder(self) -> bool:
        return self.genre == PLACEHOLDER_GENRE

    @property
    def has_lyrics(self) -> bool:
        text = clean_display(self.lyrics)
        if text is None or text == LYRICS_UNAVAILABLE:
            return False
        return normalize_text(text) != normalize_text(self.title)


@dataclass(frozen=True)
class SuggestionGuess:
    """A freeform (title, artist) pair proposed by the language model."""

    title: str = ""
    artist: str = ""


@dataclass(frozen=True)
class SearchFallback:
    """Stand-in for a guess that could not be tied to a catalog song."""

    title: str
    artist: str
    query: str
    slug: str

    @classmethod
    def from_guess(cls, guess: SuggestionGuess) -> "SearchFallback":
        title = guess.title if isinstance(guess.title, str) else ""
        artist = guess.artist if isinstance(guess.artist, str) else ""
        query = f"{title} {artist}".strip()
        return cls(title=title, artist=artist, query=query, slug=search_route(query))


@dataclass(frozen=True)
class ResolvedSuggestion:
    """Outcome of reconciling one guess: a real song or a search fallback."""

    guess: SuggestionGuess
    song: Optional[Song] = None
    fallback: Optional[SearchFallback] = None
    link: str = field(default="", init=False)

    def __post_init__(self) -> None:
        if (self.song is None) == (self.fallback is None):
            raise ValueError("exactly one of song or fallback must be set")
        if self.song is not None:
            link = song_route(self.song.slug)
        else:
            link = self.fallback.slug  # type: ignore[union-attr]
        object.__setattr__(self, "link", link)

    @classmethod
    def matched(cls, guess: SuggestionGuess, song: Song) -> "ResolvedSuggestion":
        return cls(guess=guess, song=song)

    @classmethod
    def unresolved(cls, guess: SuggestionGuess) -> "ResolvedSuggestion":
        return cls(guess=guess, fallback=SearchFallback.from_guess(guess))

    @property
    def is_match(self) -> bool:
        return self.song is not None

    @property
    def is_fallback(self) -> bool:
        return self.fallback is not None

    @property
    def title(self) -> str:
        if self.song is not None:
            return self.song.title
        return self.fallback.title  # type: ignore[union-attr]

    @property
    def artist(self) -> str:
        if self.song is not None:
            return self.song.artist
        return self.fallback.artist  # type: ignore[union-attr]


__all__ = [
    "LYRICS_UNAVAILABLE",
    "PLACEHOLDER_GENRE",
    "ResolvedSuggestion",
    "SearchFallback",
    "Song",
    "SuggestionGuess",
]
