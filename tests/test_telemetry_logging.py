import logging

from gaan_khoj.utils.observability import get_logger
from gaan_khoj.utils.telemetry import StructuredTelemetry, TelemetryLogger


def test_structured_telemetry_emits_logging_events(caplog):
    caplog.set_level(logging.INFO, logger="gaan_khoj.utils.telemetry")
    telemetry = StructuredTelemetry("suggestions", listeners=[TelemetryLogger(level=logging.INFO)])

    with telemetry.timer("suggestions.generate"):
        pass
    telemetry.increment("suggestions.matched", 2)
    telemetry.annotate("history.size", 3)

    messages = [record.message for record in caplog.records]
    assert any("Telemetry trace_started: suggestions" in message for message in messages)
    assert any("Telemetry timing: suggestions.generate" in message for message in messages)
    assert any("Telemetry counter: suggestions.matched" in message for message in messages)
    assert any("Telemetry metadata: history.size" in message for message in messages)


def test_logger_listener_is_quiet_above_its_level(caplog):
    caplog.set_level(logging.INFO, logger="gaan_khoj.utils.telemetry")
    telemetry = StructuredTelemetry("suggestions", listeners=[TelemetryLogger()])
    telemetry.increment("suggestions.matched")

    assert caplog.records == []


def test_snapshot_uses_injected_clock_and_is_a_copy():
    ticks = iter([0.0, 0.5, 1.0, 3.0])
    telemetry = StructuredTelemetry("suggestions", time_fn=lambda: next(ticks))

    with telemetry.timer("phase", {"guess_count": 2}) as payload:
        payload["matched"] = 1
    with telemetry.timer("phase"):
        pass
    telemetry.increment("suggestions.matched")

    snapshot = telemetry.snapshot()
    assert snapshot["name"] == "suggestions"
    assert snapshot["timings"]["phase"] == {"count": 2, "total": 2.5}
    assert snapshot["events"][0]["metadata"] == {"guess_count": 2, "matched": 1}
    assert snapshot["counters"] == {"suggestions.matched": 1.0}
    assert snapshot["metadata"] == {"trace_name": "suggestions"}

    snapshot["counters"]["suggestions.matched"] = 99
    assert telemetry.snapshot()["counters"] == {"suggestions.matched": 1.0}


def test_separate_batches_do_not_share_state():
    first = StructuredTelemetry("suggestions")
    second = StructuredTelemetry("suggestions")
    first.increment("suggestions.fallback", 2)

    assert second.snapshot()["counters"] == {}


def test_event_list_is_bounded():
    telemetry = StructuredTelemetry("suggestions", max_events=2)
    for name in ("a", "b", "c"):
        with telemetry.timer(name):
            pass

    assert [event["name"] for event in telemetry.snapshot()["events"]] == ["b", "c"]


def test_structured_logger_renders_bound_context(caplog):
    logger = get_logger("gaan_khoj.tests").bind(component="search")
    caplog.set_level(logging.INFO, logger="gaan_khoj.tests")

    logger.info("Song search completed", context={"query": "গান", "result_count": 2})

    [record] = caplog.records
    assert record.getMessage() == (
        'Song search completed | {"component": "search", "query": "গান", "result_count": 2}'
    )
