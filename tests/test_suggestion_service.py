import logging
import threading

import ollama
import pytest

from gaan_khoj.app.services.llm_client import SuggestionFormatError
from gaan_khoj.app.services.suggestion_service import (
    FAILURE_MESSAGES,
    FailureCategory,
    SuggestionCoordinator,
    SuggestionService,
    classify_failure,
)
from gaan_khoj.core.models import SuggestionGuess


class StatusError(Exception):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@pytest.mark.parametrize(
    "error, expected",
    [
        (OSError("[Errno 101] Network is unreachable"), FailureCategory.OFFLINE),
        (Exception("getaddrinfo failed"), FailureCategory.OFFLINE),
        (Exception("429 Too Many Requests"), FailureCategory.QUOTA_OR_AUTH),
        (StatusError("denied", 401), FailureCategory.QUOTA_OR_AUTH),
        (Exception("Invalid API key supplied"), FailureCategory.QUOTA_OR_AUTH),
        (
            ollama.ResponseError("model 'qwen' not found, try pulling it first", 404),
            FailureCategory.MODEL_UNAVAILABLE,
        ),
        (StatusError("upstream", 503), FailureCategory.MODEL_UNAVAILABLE),
        (ConnectionError("Failed to connect to Ollama"), FailureCategory.NETWORK),
        (TimeoutError(), FailureCategory.NETWORK),
        (SuggestionFormatError("model response is not JSON"), FailureCategory.UNKNOWN),
        (ValueError("boom"), FailureCategory.UNKNOWN),
    ],
)
def test_classify_failure(error, expected):
    assert classify_failure(error) is expected


def test_empty_history_asks_nothing(small_search, fake_generator_factory):
    generator = fake_generator_factory()
    service = SuggestionService(small_search, generator)

    outcome = service.suggest(["  ", ""])

    assert outcome.ok
    assert outcome.suggestions == ()
    assert outcome.history == ()
    assert generator.calls == []


def test_missing_generator_reports_model_unavailable(small_search):
    service = SuggestionService(small_search, None)

    outcome = service.suggest(["alpha"])

    assert not service.enabled
    assert outcome.failure.category is FailureCategory.MODEL_UNAVAILABLE
    assert outcome.failure.message == FAILURE_MESSAGES[FailureCategory.MODEL_UNAVAILABLE]
    assert outcome.history == ("alpha",)


def test_successful_batch_is_reconciled_in_order(small_search, fake_generator_factory):
    generator = fake_generator_factory(
        [
            SuggestionGuess(title="Nonexistent", artist="Nobody"),
            SuggestionGuess(title="Gamma Ray", artist="Delta"),
        ]
    )
    service = SuggestionService(small_search, generator)

    outcome = service.suggest(["gamma", "gamma", "beta"])

    assert outcome.ok
    assert outcome.history == ("gamma", "beta")
    assert [entry.is_match for entry in outcome.suggestions] == [False, True]
    assert outcome.suggestions[1].link.startswith("/song/")

    snapshot = outcome.telemetry
    assert snapshot["name"] == "suggestions"
    assert snapshot["counters"]["suggestions.matched"] == 1.0
    assert snapshot["counters"]["suggestions.fallback"] == 1.0
    assert "suggestions.generate" in snapshot["timings"]


def test_generator_failure_is_a_single_terminal_outcome(
    small_search, fake_generator_factory, caplog
):
    generator = fake_generator_factory(error=ConnectionError("Failed to connect to Ollama"))
    service = SuggestionService(small_search, generator)
    caplog.set_level(logging.ERROR, logger="gaan_khoj.app.services.suggestion_service")

    outcome = service.suggest(["alpha"])

    assert outcome.suggestions == ()
    assert outcome.failure.category is FailureCategory.NETWORK
    assert "Failed to connect" in outcome.failure.detail
    assert len(generator.calls) == 1
    assert any("Suggestion request failed" in record.getMessage() for record in caplog.records)
    assert outcome.telemetry["metadata"]["failure.category"] == "network"


def test_history_context_describes_matching_songs(small_search):
    service = SuggestionService(small_search, None)

    assert service.build_history_context(["gamma"]) == "Gamma Ray by Delta"
    assert service.build_history_context(["alpha"]) == "Alpha by Beta, Alpha by Zeta"
    assert service.build_history_context(["unknown", "nothing"]) == "unknown, nothing"


def test_generator_receives_history_context(small_search, fake_generator_factory):
    generator = fake_generator_factory()
    SuggestionService(small_search, generator).suggest(["gamma"])
    assert generator.calls == ["Gamma Ray by Delta"]


def test_coordinator_only_honours_latest_ticket():
    coordinator = SuggestionCoordinator()
    first = coordinator.start()
    second = coordinator.start()

    assert not coordinator.is_current(first)
    assert coordinator.is_current(second)


def test_superseded_batch_is_discarded(small_search):
    class InterruptingGenerator:
        def __init__(self):
            self.service = None

        def generate(self, history_context):
            # A newer history arrives while this batch is in flight.
            self.service.coordinator_for("listener").start()
            return [SuggestionGuess(title="Alpha", artist="Beta")]

    generator = InterruptingGenerator()
    service = SuggestionService(small_search, generator)
    generator.service = service

    assert service.suggest_latest(["alpha"], session="listener") is None


def test_sessions_do_not_supersede_each_other(small_search, fake_generator_factory):
    generator = fake_generator_factory([SuggestionGuess(title="Alpha", artist="Beta")])
    service = SuggestionService(small_search, generator)

    service.coordinator_for("other").start()
    outcome = service.suggest_latest(["alpha"], session="listener")

    assert outcome is not None
    assert outcome.suggestions[0].is_match


def test_session_map_is_bounded(small_search):
    service = SuggestionService(small_search, None, max_sessions=2)
    first = service.coordinator_for("a")
    service.coordinator_for("b")
    service.coordinator_for("c")

    assert service.coordinator_for("a") is not first


def test_history_lookup_failure_is_a_categorized_outcome(
    small_search, fake_generator_factory, monkeypatch
):
    def broken_search(query):
        raise RuntimeError("catalog exploded")

    monkeypatch.setattr(small_search, "search", broken_search)
    generator = fake_generator_factory()
    service = SuggestionService(small_search, generator)

    outcome = service.suggest(["alpha"])

    assert outcome.failure.category is FailureCategory.UNKNOWN
    assert outcome.history == ("alpha",)
    assert generator.calls == []


def test_concurrent_batches_keep_their_own_telemetry(small_search):
    entered = threading.Event()
    release = threading.Event()

    class SlowFirstGenerator:
        def generate(self, history_context):
            if history_context == "Gamma Ray by Delta":
                entered.set()
                release.wait(5)
                return [SuggestionGuess(title="Gamma Ray", artist="Delta")]
            return [
                SuggestionGuess(title="Ghost", artist="Nobody"),
                SuggestionGuess(title="Phantom", artist="Nobody"),
            ]

    service = SuggestionService(small_search, SlowFirstGenerator())
    outcomes = {}

    def first_listener():
        outcomes["a"] = service.suggest_latest(["gamma"], session="a")

    worker = threading.Thread(target=first_listener)
    worker.start()
    assert entered.wait(5)
    outcomes["b"] = service.suggest_latest(["zzz"], session="b")
    release.set()
    worker.join(5)

    assert outcomes["a"].telemetry["counters"] == {
        "suggestions.matched": 1.0,
        "suggestions.fallback": 0.0,
    }
    assert outcomes["b"].telemetry["counters"] == {
        "suggestions.matched": 0.0,
        "suggestions.fallback": 2.0,
    }


def test_batch_events_are_mirrored_to_the_logger(small_search, fake_generator_factory, caplog):
    generator = fake_generator_factory([SuggestionGuess(title="Alpha", artist="Beta")])
    caplog.set_level(logging.DEBUG, logger="gaan_khoj.utils.telemetry")

    SuggestionService(small_search, generator).suggest(["alpha"])

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Telemetry trace_started: suggestions") for message in messages)
    assert any(message.startswith("Telemetry counter: suggestions.matched") for message in messages)


def test_custom_listeners_replace_the_logger(small_search, fake_generator_factory):
    events = []
    generator = fake_generator_factory([SuggestionGuess(title="Alpha", artist="Beta")])
    service = SuggestionService(
        small_search,
        generator,
        telemetry_listeners=[lambda event_type, payload: events.append(event_type)],
    )

    service.suggest(["alpha"])

    assert events[0] == "trace_started"
    assert events.count("timing") == 2
    assert "counter" in events
