"""Markdown rendering of songs, listings and suggestions."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from gaan_khoj.core.models import LYRICS_UNAVAILABLE, Song
from gaan_khoj.core.pagination import ELLIPSIS, pagination_range
from gaan_khoj.core.slug import browse_route, song_route
from gaan_khoj.core.text import (
    COLLECTED,
    UNKNOWN_ARTIST,
    UNKNOWN_LYRICIST,
    clean_display,
    to_bengali_numerals,
)

from .suggestion_service import SuggestionOutcome

UNTITLED = "শিরোনামহীন"
EMPTY_QUERY_MESSAGE = "গান, শিল্পী বা গীতিকার খুঁজতে অনুগ্রহ করে একটি অনুসন্ধান শব্দ লিখুন।"
NO_RESULTS_MESSAGE = "আপনার অনুসন্ধানের সাথে মিলে যাওয়া কোনো গান পাওয়া যায়নি।"
NO_SUGGESTIONS_MESSAGE = "আপনার সাম্প্রতিক অনুসন্ধানের উপর ভিত্তি করে কোন পরামর্শ উপলব্ধ নেই।"
NO_HISTORY_MESSAGE = "কোনো অনুসন্ধানের ইতিহাস পাওয়া যায়নি।"
SONG_NOT_FOUND_MESSAGE = "দুঃখিত, এই গানটি খুঁজে পাওয়া যায়নি।"
SUGGESTIONS_HEADING = "আপনার পছন্দের গান হতে পারে"

_GENERIC_LYRICISTS = frozenset({COLLECTED, UNKNOWN_LYRICIST})


def _md(text: str) -> str:
    return text.replace("[", "\\[").replace("]", "\\]")


def _display(value: Optional[str], default: str) -> str:
    return clean_display(value) or default


class SongResultFormatter:
    """Render catalog data for the Gradio markdown panels."""

    def song_line(self, song: Song) -> str:
        title = _md(_display(song.title, UNTITLED))
        parts = [f"[**{title}**]({song_route(song.slug)})", _md(_display(song.artist, UNKNOWN_ARTIST))]
        lyricist = clean_display(song.lyricist)
        if lyricist and lyricist not in _GENERIC_LYRICISTS:
            parts.append(f"গীতিকার: {_md(lyricist)}")
        return "- " + " — ".join(parts)

    def format_song_list(
        self,
        songs: Sequence[Song],
        *,
        heading: Optional[str] = None,
        empty_message: str = NO_RESULTS_MESSAGE,
    ) -> str:
        lines: List[str] = []
        if heading:
            lines.extend([f"### {heading}", ""])
        if not songs:
            lines.append(f"_{empty_message}_")
        else:
            lines.extend(self.song_line(song) for song in songs)
        return "\n".join(lines)

    def format_search_results(self, query: Optional[str], songs: Sequence[Song]) -> str:
        cleaned = clean_display(query)
        if cleaned is None:
            return EMPTY_QUERY_MESSAGE
        heading = f'অনুসন্ধান ফলাফল "{_md(cleaned)}" এর জন্য'
        if songs:
            heading += f" (মোট: {to_bengali_numerals(len(songs))} টি)"
            return self.format_song_list(songs, heading=heading)
        return "\n".join([f"### {heading}", "", "**কোন ফলাফল পাওয়া যায়নি**", "", NO_RESULTS_MESSAGE])

    def format_song_detail(self, song: Optional[Song]) -> str:
        if song is None:
            return f"_{SONG_NOT_FOUND_MESSAGE}_"

        title = _md(_display(song.title, UNTITLED))
        lines = [f"## {title}", "", f"**শিল্পী:** {_md(_display(song.artist, UNKNOWN_ARTIST))}"]
        for label, value in (
            ("গীতিকার", song.lyricist),
            ("সুরকার", song.composer),
            ("অ্যালবাম", song.album),
            ("ধরণ", song.genre),
        ):
            cleaned = clean_display(value)
            if cleaned:
                lines.append(f"**{label}:** {_md(cleaned)}")
        if song.release_year:
            lines.append(f"**প্রকাশের বছর:** {to_bengali_numerals(song.release_year)}")

        lines.extend(["", "### গানের কথা", ""])
        if song.has_lyrics:
            lines.extend(f"{line}  " for line in song.lyrics.strip().splitlines())
        else:
            lines.append(f"_{LYRICS_UNAVAILABLE}_")
        return "\n".join(lines)

    def format_labels(
        self, labels: Iterable[str], *, field: str, heading: Optional[str] = None
    ) -> str:
        """List browse labels, each linking to the songs filed under it."""

        lines: List[str] = []
        if heading:
            lines.extend([f"### {heading}", ""])
        entries = [f"- [{_md(label)}]({browse_route(field, label)})" for label in labels]
        lines.extend(entries or ["_কিছু পাওয়া যায়নি।_"])
        return "\n".join(lines)

    def format_pagination(self, current_page: int, total_pages: int) -> str:
        """Render page controls; nothing at all for a single page."""

        if total_pages <= 1:
            return ""
        items: List[str] = []
        for item in pagination_range(current_page, total_pages):
            if item is ELLIPSIS:
                items.append("…")
            elif item == current_page:
                items.append(f"**[{to_bengali_numerals(item)}]**")
            else:
                items.append(to_bengali_numerals(item))
        summary = f"পৃষ্ঠা {to_bengali_numerals(current_page)} এর {to_bengali_numerals(total_pages)}"
        return f"{' · '.join(items)}\n\n{summary}"

    def format_suggestions(self, outcome: Optional[SuggestionOutcome]) -> str:
        lines = [f"### {SUGGESTIONS_HEADING}", ""]
        if outcome is None or not outcome.history:
            lines.append(f"_{NO_HISTORY_MESSAGE}_")
            return "\n".join(lines)
        if outcome.failure is not None:
            lines.append(f"**ত্রুটি:** {outcome.failure.message}")
            return "\n".join(lines)
        if not outcome.suggestions:
            lines.append(f"_{NO_SUGGESTIONS_MESSAGE}_")
            return "\n".join(lines)

        for entry in outcome.suggestions:
            title = _md(_display(entry.title, "শিরোনাম পাওয়া যায়নি"))
            artist = _md(_display(entry.artist, "শিল্পী পাওয়া যায়নি"))
            if entry.is_match:
                lines.append(f"- 🎵 [**{title}**]({entry.link}) — {artist}")
            else:
                lines.append(f"- 🔍 [{title} — {artist}]({entry.link}) _(অনুসন্ধান করুন)_")
        return "\n".join(lines)


__all__ = [
    "EMPTY_QUERY_MESSAGE",
    "NO_HISTORY_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "NO_SUGGESTIONS_MESSAGE",
    "SONG_NOT_FOUND_MESSAGE",
    "SUGGESTIONS_HEADING",
    "SongResultFormatter",
]
