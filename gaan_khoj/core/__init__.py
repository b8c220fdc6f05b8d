"""Core song data types and pure helpers for Gaan Khoj."""

from .models import (
    LYRICS_UNAVAILABLE,
    PLACEHOLDER_GENRE,
    ResolvedSuggestion,
    SearchFallback,
    Song,
    SuggestionGuess,
)
from .pagination import ELLIPSIS, page_bounds, pagination_range, total_pages_for
from .slug import make_slug, search_route, slug_part, song_route
from .text import (
    canonical_label,
    clean_display,
    collation_key,
    normalize_text,
    split_credits,
    to_bengali_numerals,
)

__all__ = [
    "ELLIPSIS",
    "LYRICS_UNAVAILABLE",
    "PLACEHOLDER_GENRE",
    "ResolvedSuggestion",
    "SearchFallback",
    "Song",
    "SuggestionGuess",
    "canonical_label",
    "clean_display",
    "collation_key",
    "make_slug",
    "normalize_text",
    "page_bounds",
    "pagination_range",
    "search_route",
    "slug_part",
    "song_route",
    "split_credits",
    "to_bengali_numerals",
    "total_pages_for",
]
