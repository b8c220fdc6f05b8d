"""Model-driven song suggestions reconciled against the catalog."""

from __future__ import annotations

import threading
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from gaan_khoj.core.models import ResolvedSuggestion, Song, SuggestionGuess
from gaan_khoj.core.text import normalize_text

from .llm_client import SuggestionFormatError, SuggestionGenerator, guess_from_entry
from .search_service import SearchService
from ...utils.observability import (
    add_span_attributes,
    create_counter,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry, TelemetryListener, TelemetryLogger


class FailureCategory(str, Enum):
    OFFLINE = "offline"
    NETWORK = "network"
    QUOTA_OR_AUTH = "quota_or_auth"
    MODEL_UNAVAILABLE = "model_unavailable"
    UNKNOWN = "unknown"


FAILURE_MESSAGES = {
    FailureCategory.OFFLINE: "আপনি অফলাইনে আছেন। ইন্টারনেট সংযোগ পরীক্ষা করে আবার চেষ্টা করুন।",
    FailureCategory.NETWORK: "নেটওয়ার্ক সমস্যার কারণে গানের পরামর্শ আনা যায়নি। কিছুক্ষণ পরে আবার চেষ্টা করুন।",
    FailureCategory.QUOTA_OR_AUTH: "পরামর্শ পরিষেবার ব্যবহারসীমা শেষ হয়েছে বা অনুমতি নেই। পরে আবার চেষ্টা করুন।",
    FailureCategory.MODEL_UNAVAILABLE: "গানের পরামর্শ দেওয়ার মডেলটি এই মুহূর্তে উপলব্ধ নয়।",
    FailureCategory.UNKNOWN: "এই মুহূর্তে গানের পরামর্শ আনা সম্ভব হচ্ছে না।",
}

_OFFLINE_HINTS = (
    "offline",
    "network is unreachable",
    "no internet",
    "name or service not known",
    "nodename nor servname",
    "temporary failure in name resolution",
    "getaddrinfo",
)
_QUOTA_HINTS = (
    "quota",
    "rate limit",
    "too many requests",
    "resource_exhausted",
    "api key",
    "unauthorized",
    "unauthenticated",
    "forbidden",
    "permission",
    "authentication",
)
_MODEL_HINTS = (
    "model not found",
    "not found, try pulling",
    "model is not available",
    "model unavailable",
    "overloaded",
    "service unavailable",
)
_NETWORK_HINTS = (
    "timeout",
    "timed out",
    "failed to connect",
    "connection",
    "econnreset",
    "econnrefused",
    "fetch failed",
    "network",
    "socket",
)


def _status_code(error: BaseException) -> Optional[int]:
    for attr in ("status_code", "status", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return None


def classify_failure(error: BaseException) -> FailureCategory:
    """Map a failed model call onto the categories shown to listeners."""

    if isinstance(error, SuggestionFormatError):
        return FailureCategory.UNKNOWN

    message = str(error).casefold()
    status = _status_code(error)

    if any(hint in message for hint in _OFFLINE_HINTS):
        return FailureCategory.OFFLINE
    if status in (401, 403, 429) or any(hint in message for hint in _QUOTA_HINTS):
        return FailureCategory.QUOTA_OR_AUTH
    if status in (404, 503) or any(hint in message for hint in _MODEL_HINTS):
        return FailureCategory.MODEL_UNAVAILABLE
    if isinstance(error, (ConnectionError, TimeoutError)) or any(
        hint in message for hint in _NETWORK_HINTS
    ):
        return FailureCategory.NETWORK
    return FailureCategory.UNKNOWN


@dataclass(frozen=True)
class SuggestionFailure:
    category: FailureCategory
    message: str
    detail: str = ""

    @classmethod
    def from_error(cls, error: BaseException) -> "SuggestionFailure":
        category = classify_failure(error)
        return cls(category=category, message=FAILURE_MESSAGES[category], detail=str(error))


@dataclass(frozen=True)
class SuggestionOutcome:
    """Result of one suggestion batch: resolved entries or a single failure."""

    suggestions: Tuple[ResolvedSuggestion, ...] = ()
    failure: Optional[SuggestionFailure] = None
    history: Tuple[str, ...] = ()
    telemetry: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def ok(self) -> bool:
        return self.failure is None


class SuggestionReconciler:
    """Tie freeform model guesses back to real catalog songs.

    Each guess is looked up with a title+artist search first, accepting only
    an exact (normalised) title and artist match, then with a title-only
    search accepting an exact title match.  Anything else, including an
    error while resolving, becomes a search fallback for that guess alone.
    """

    def __init__(self, search_service: SearchService, *, max_workers: int = 4) -> None:
        self.search_service = search_service
        self.max_workers = max(1, int(max_workers))
        self._logger = get_logger(__name__).bind(component="suggestion_reconciler")
        self._metric_resolved = create_counter(
            "gaan_suggestion_guesses_total",
            "Suggestion guesses reconciled, by outcome.",
            label_names=("outcome",),
        )

    def _search(self, query: str) -> List[Song]:
        return self.search_service.search(query)

    def resolve(self, guess: Any) -> ResolvedSuggestion:
        guess = guess_from_entry(guess)
        title = normalize_text(guess.title)
        artist = normalize_text(guess.artist)
        if not title or not artist:
            self._metric_resolved.labels(outcome="incomplete").inc()
            return ResolvedSuggestion.unresolved(guess)

        for song in self._search(f"{title} {artist}"):
            if normalize_text(song.title) == title and normalize_text(song.artist) == artist:
                self._metric_resolved.labels(outcome="exact").inc()
                return ResolvedSuggestion.matched(guess, song)

        # The model often credits the wrong artist; the title alone is enough.
        for song in self._search(title):
            if normalize_text(song.title) == title:
                self._metric_resolved.labels(outcome="title").inc()
                return ResolvedSuggestion.matched(guess, song)

        self._metric_resolved.labels(outcome="unmatched").inc()
        return ResolvedSuggestion.unresolved(guess)

    def reconcile(self, guesses: Iterable[Any]) -> List[ResolvedSuggestion]:
        pending = [guess_from_entry(guess) for guess in guesses]
        if not pending:
            return []

        workers = min(self.max_workers, len(pending))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gaan-reconcile") as pool:
            futures = [pool.submit(self.resolve, guess) for guess in pending]
            resolved: List[ResolvedSuggestion] = []
            for guess, future in zip(pending, futures):
                try:
                    resolved.append(future.result())
                except Exception as exc:
                    self._metric_resolved.labels(outcome="error").inc()
                    self._logger.warning(
                        "Suggestion lookup failed; using search link",
                        context={"title": guess.title, "artist": guess.artist, "error": str(exc)},
                    )
                    resolved.append(ResolvedSuggestion.unresolved(guess))
        return resolved


class SuggestionCoordinator:
    """Hands out batch tickets so only the newest batch's results are kept."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._generation = 0

    def start(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._generation


class SuggestionService:
    """Ask the model for songs based on search history and reconcile them."""

    def __init__(
        self,
        search_service: SearchService,
        generator: Optional[SuggestionGenerator],
        *,
        reconciler: Optional[SuggestionReconciler] = None,
        max_workers: int = 4,
        telemetry_listeners: Optional[Iterable[TelemetryListener]] = None,
        max_sessions: int = 512,
    ) -> None:
        self.search_service = search_service
        self.generator = generator
        self.reconciler = reconciler or SuggestionReconciler(
            search_service, max_workers=max_workers
        )
        if telemetry_listeners is None:
            telemetry_listeners = (TelemetryLogger(),)
        self.telemetry_listeners = tuple(telemetry_listeners)
        self._max_sessions = max(1, int(max_sessions))
        self._coordinators: OrderedDict[str, SuggestionCoordinator] = OrderedDict()
        self._coordinators_lock = threading.Lock()

        self._logger = get_logger(__name__).bind(
            component="suggestion_service",
            generator=type(generator).__name__ if generator is not None else None,
        )
        self._metric_batches = create_counter(
            "gaan_suggestion_batches_total",
            "Suggestion batches requested.",
        )
        self._metric_failures = create_counter(
            "gaan_suggestion_batch_failures_total",
            "Suggestion batches that failed, by category.",
            label_names=("category",),
        )
        self._metric_stale = create_counter(
            "gaan_suggestion_stale_batches_total",
            "Suggestion batches discarded because a newer one started.",
        )

    @property
    def enabled(self) -> bool:
        return self.generator is not None

    def set_generator(self, generator: Optional[SuggestionGenerator]) -> None:
        self.generator = generator

    @staticmethod
    def _clean_history(history: Optional[Sequence[str]]) -> List[str]:
        if not history:
            return []
        terms: List[str] = []
        for entry in history:
            if isinstance(entry, str) and entry.strip() and entry.strip() not in terms:
                terms.append(entry.strip())
        return terms

    def build_history_context(self, history: Sequence[str]) -> str:
        """Describe the history as ``"title by artist"`` for every song it finds."""

        terms = self._clean_history(history)
        described: List[str] = []
        for term in terms:
            for song in self.search_service.search(term):
                label = f"{song.title} by {song.artist}"
                if label not in described:
                    described.append(label)
        if described:
            return ", ".join(described)
        return ", ".join(terms)

    def suggest(self, history: Optional[Sequence[str]]) -> SuggestionOutcome:
        terms = self._clean_history(history)
        if not terms:
            return SuggestionOutcome()

        self._metric_batches.inc()
        if self.generator is None:
            category = FailureCategory.MODEL_UNAVAILABLE
            self._metric_failures.labels(category=category.value).inc()
            return SuggestionOutcome(
                failure=SuggestionFailure(category, FAILURE_MESSAGES[category]),
                history=tuple(terms),
            )

        telemetry = StructuredTelemetry("suggestions", listeners=self.telemetry_listeners)
        telemetry.annotate("history.size", len(terms))

        with start_span("gaan.suggest", {"suggest.history_size": len(terms)}) as span:
            try:
                context = self.build_history_context(terms)
                with telemetry.timer("suggestions.generate"):
                    guesses = self.generator.generate(context)
            except Exception as exc:
                failure = SuggestionFailure.from_error(exc)
                record_exception(span, exc)
                self._metric_failures.labels(category=failure.category.value).inc()
                telemetry.annotate("failure.category", failure.category.value)
                self._logger.error(
                    "Suggestion request failed",
                    context={"category": failure.category.value, "error": str(exc)},
                    exc_info=True,
                )
                return SuggestionOutcome(
                    failure=failure,
                    history=tuple(terms),
                    telemetry=telemetry.snapshot(),
                )

            with telemetry.timer("suggestions.reconcile", {"guess_count": len(guesses)}):
                resolved = self.reconciler.reconcile(guesses)

            matched = sum(1 for entry in resolved if entry.is_match)
            telemetry.increment("suggestions.matched", matched)
            telemetry.increment("suggestions.fallback", len(resolved) - matched)
            add_span_attributes(
                span,
                {"suggest.guess_count": len(resolved), "suggest.matched": matched},
            )

        self._logger.info(
            "Suggestions reconciled",
            context={"guess_count": len(resolved), "matched": matched},
        )
        return SuggestionOutcome(
            suggestions=tuple(resolved),
            history=tuple(terms),
            telemetry=telemetry.snapshot(),
        )

    def coordinator_for(self, session: str) -> SuggestionCoordinator:
        """Return the ticket counter for one browser session."""

        with self._coordinators_lock:
            coordinator = self._coordinators.get(session)
            if coordinator is None:
                coordinator = SuggestionCoordinator()
                self._coordinators[session] = coordinator
                while len(self._coordinators) > self._max_sessions:
                    self._coordinators.popitem(last=False)
            else:
                self._coordinators.move_to_end(session)
            return coordinator

    def suggest_latest(
        self,
        history: Optional[Sequence[str]],
        *,
        session: str = "default",
    ) -> Optional[SuggestionOutcome]:
        """Run a batch, returning ``None`` if the session started a newer one meanwhile."""

        coordinator = self.coordinator_for(session)
        ticket = coordinator.start()
        outcome = self.suggest(history)
        if not coordinator.is_current(ticket):
            self._metric_stale.inc()
            self._logger.info("Discarding superseded suggestion batch", context={"session": session, "ticket": ticket})
            return None
        return outcome


__all__ = [
    "FAILURE_MESSAGES",
    "FailureCategory",
    "SuggestionCoordinator",
    "SuggestionFailure",
    "SuggestionOutcome",
    "SuggestionReconciler",
    "SuggestionService",
    "classify_failure",
]
