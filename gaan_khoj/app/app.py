"""Application wiring for the Gaan Khoj song site."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

if __package__ in {None, ""}:
    import sys
    from pathlib import Path

    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

import uvicorn

from gaan_khoj.config import Settings
from gaan_khoj.core.models import Song
from gaan_khoj.core.text import to_bengali_numerals
from gaan_khoj.utils.logging_config import configure_logging
from gaan_khoj.utils.observability import get_logger

from gaan_khoj.app.data.catalog import BROWSE_FIELDS, InMemoryCatalog, SongRepository
from gaan_khoj.app.services.history import InMemorySearchHistory, SearchHistoryStore
from gaan_khoj.app.services.llm_client import SuggestionGenerator, create_generator
from gaan_khoj.app.services.result_formatter import SongResultFormatter
from gaan_khoj.app.services.search_service import SearchService
from gaan_khoj.app.services.suggestion_service import SuggestionOutcome, SuggestionService
from gaan_khoj.app.ui.gradio import create_interface
from gaan_khoj.app.web import create_web_app

_UNSET = object()

BROWSE_HEADINGS = {
    "artist": "শিল্পী",
    "genre": "ধরণ",
    "lyricist": "গীতিকার",
    "composer": "সুরকার",
}


class GaanKhojApp:
    """High-level application facade bundling dependencies."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        repository: Optional[SongRepository] = None,
        search_service: Optional[SearchService] = None,
        suggestion_service: Optional[SuggestionService] = None,
        generator: Optional[SuggestionGenerator] = _UNSET,  # type: ignore[assignment]
        formatter: Optional[SongResultFormatter] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")
        self._logger.info(
            "Initialising application facade",
            context={"suggestions_enabled": self.settings.suggestions_enabled},
        )

        self.repository = repository or InMemoryCatalog(
            priority_artist=self.settings.priority_artist
        )
        self.search_service = search_service or SearchService(
            self.repository,
            latency=self.settings.search_latency,
            match_all_tokens=self.settings.search_all_tokens,
        )
        if search_service is not None and repository is not None:
            self.search_service.set_repository(self.repository)

        if suggestion_service is not None:
            self.suggestion_service = suggestion_service
            if generator is not _UNSET:
                self.suggestion_service.set_generator(generator)
        else:
            if generator is _UNSET:
                generator = create_generator(self.settings)
            self.suggestion_service = SuggestionService(
                self.search_service,
                generator,
                max_workers=self.settings.suggestion_workers,
            )
        self.formatter = formatter or SongResultFormatter()

        self._logger.info(
            "Application dependencies wired",
            context={
                "song_count": self.repository.total_count(),
                "has_generator": self.suggestion_service.enabled,
            },
        )

    # Public API ------------------------------------------------------------
    def search(self, query: Optional[str]) -> str:
        return self.formatter.format_search_results(query, self.search_service.search(query))

    def history_store(self, initial: Any = None) -> InMemorySearchHistory:
        """Wrap one browser session's stored history in a capped store."""

        return InMemorySearchHistory(initial, limit=self.settings.history_limit)

    def record_search(self, store: SearchHistoryStore, query: Optional[str]) -> List[str]:
        if query and query.strip():
            store.append(query)
        return store.read()

    def suggestion_panel(
        self, store: SearchHistoryStore, *, session: str = "default"
    ) -> Optional[Tuple[str, Dict[str, Any]]]:
        """Render suggestions for the stored history with that batch's telemetry.

        Returns ``None`` when the same session started a newer batch meanwhile.
        """

        outcome: Optional[SuggestionOutcome] = self.suggestion_service.suggest_latest(
            store.read(), session=session
        )
        if outcome is None:
            return None
        return self.formatter.format_suggestions(outcome), outcome.telemetry

    def suggest(self, store: SearchHistoryStore, *, session: str = "default") -> Optional[str]:
        panel = self.suggestion_panel(store, session=session)
        return None if panel is None else panel[0]

    def song(self, slug: Optional[str]) -> str:
        song: Optional[Song] = self.repository.get_by_slug(slug or "")
        return self.formatter.format_song_detail(song)

    def popular(self) -> str:
        return self.formatter.format_song_list(self.repository.popular(), heading="জনপ্রিয় গান")

    def recent(self) -> str:
        return self.formatter.format_song_list(self.repository.recent(), heading="সাম্প্রতিক গান")

    def labels(self, field: str) -> List[str]:
        if field not in BROWSE_FIELDS:
            raise ValueError(f"unknown browse field: {field!r}")
        lookup = {
            "artist": self.repository.distinct_artists,
            "genre": self.repository.distinct_genres,
            "lyricist": self.repository.distinct_lyricists,
            "composer": self.repository.distinct_composers,
        }
        return lookup[field]()

    def browse(self, field: str, value: Optional[str]) -> str:
        if not value:
            return self.formatter.format_labels(
                self.labels(field), field=field, heading=BROWSE_HEADINGS[field]
            )
        songs = self.repository.songs_by(field, value)
        return self.formatter.format_song_list(songs, heading=f"{BROWSE_HEADINGS[field]}: {value}")

    def page(self, page_number: int) -> Tuple[int, str, str]:
        """Return the clamped page number, its song list and the page controls."""

        per_page = self.settings.songs_per_page
        first = self.repository.page(1, per_page)
        total_pages = max(first.total_pages, 1)
        try:
            current = int(page_number)
        except (TypeError, ValueError):
            current = 1
        current = min(max(current, 1), total_pages)

        listing = first if current == 1 else self.repository.page(current, per_page)
        heading = f"সব গান (মোট: {to_bengali_numerals(listing.total_count)})"
        body = self.formatter.format_song_list(listing.songs, heading=heading)
        controls = self.formatter.format_pagination(current, listing.total_pages)
        return current, body, controls

    def create_gradio_interface(self):
        return create_interface(self)

    def create_web_app(self):
        return create_web_app(self)


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    app = GaanKhojApp(settings)
    uvicorn.run(
        app.create_web_app(),
        host=settings.server_name,
        port=settings.server_port,
    )


__all__ = ["BROWSE_HEADINGS", "GaanKhojApp", "main"]


if __name__ == "__main__":
    main()
