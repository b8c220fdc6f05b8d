"""Substring search over the song catalog."""

from __future__ import annotations

import time
from typing import Callable, List, Optional

from gaan_khoj.core.models import Song
from gaan_khoj.core.text import normalize_text

from ..data.catalog import SongRepository
from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    start_span,
)


def _searchable_fields(song: Song) -> List[str]:
    return [normalize_text(value) for value in (song.title, song.artist, song.genre, song.album)]


def _token_haystack(song: Song) -> str:
    parts = (song.title, song.artist, song.lyricist, song.composer, song.genre)
    return " ".join(normalize_text(part) for part in parts if part)


class SearchService:
    """Match a free-text query against title, artist, genre and album.

    Matching is a case-folded substring test; results keep catalog order.
    There is no relevance ranking, so callers that want one sort the result
    themselves.
    """

    def __init__(
        self,
        repository: SongRepository,
        *,
        latency: float = 0.0,
        match_all_tokens: bool = False,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.repository = repository
        self.latency = max(0.0, float(latency))
        self.match_all_tokens = match_all_tokens
        self._sleep = sleep

        self._logger = get_logger(__name__).bind(
            component="search_service",
            repository=type(repository).__name__,
        )
        self._metric_requests = create_counter(
            "gaan_search_requests_total",
            "Song search requests received.",
        )
        self._metric_empty_queries = create_counter(
            "gaan_search_empty_queries_total",
            "Song searches skipped because the query was blank.",
        )
        self._metric_duration = create_histogram(
            "gaan_search_request_seconds",
            "Latency of song searches.",
        )

    def set_repository(self, repository: SongRepository) -> None:
        self.repository = repository

    def search(self, query: Optional[str]) -> List[Song]:
        needle = normalize_text(query)
        if not needle:
            self._metric_empty_queries.inc()
            return []

        self._metric_requests.inc()
        with self._metric_duration.time(), start_span(
            "gaan.search", {"search.query_length": len(needle)}
        ) as span:
            if self.latency:
                self._sleep(self.latency)

            tokens = needle.split() if self.match_all_tokens else []
            matches = [
                song
                for song in self.repository.all_songs()
                if self._matches(song, needle, tokens)
            ]
            add_span_attributes(span, {"search.result_count": len(matches)})

        self._logger.debug(
            "Song search completed",
            context={"query": needle, "result_count": len(matches)},
        )
        return matches

    @staticmethod
    def _matches(song: Song, needle: str, tokens: List[str]) -> bool:
        if any(needle in field for field in _searchable_fields(song)):
            return True
        if len(tokens) > 1:
            haystack = _token_haystack(song)
            return all(token in haystack for token in tokens)
        return False


__all__ = ["SearchService"]
