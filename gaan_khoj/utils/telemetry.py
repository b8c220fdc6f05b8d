"""Per-batch telemetry for the suggestion workflow.

A :class:`StructuredTelemetry` is built for one suggestion batch and thrown
away afterwards, so two listeners asking for suggestions at the same time
never see each other's numbers.  Listeners such as :class:`TelemetryLogger`
receive every event as ``(event_type, payload)``.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


class StructuredTelemetry:
    """Timings, counters and metadata collected for a single named batch."""

    def __init__(
        self,
        name: str,
        *,
        time_fn: Optional[Callable[[], float]] = None,
        max_events: int = 64,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self.name = name
        self._time_fn = time_fn or time.perf_counter
        self._max_events = max(1, int(max_events))
        self._listeners = tuple(listeners or ())
        self._lock = threading.Lock()
        self._timings: Dict[str, Dict[str, float]] = {}
        self._counters: Dict[str, float] = {}
        self._events: List[Dict[str, Any]] = []
        self._metadata: Dict[str, Any] = {"trace_name": name}
        self._emit("trace_started", {"name": name})

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        for listener in self._listeners:
            listener(event_type, dict(payload))

    def now(self) -> float:
        return float(self._time_fn())

    @contextmanager
    def timer(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Record how long the ``with`` block took under ``name``.

        The yielded dict can be filled in by the caller; its contents are
        stored as the event metadata once the block exits.
        """

        payload: Dict[str, Any] = dict(metadata) if metadata else {}
        start = self.now()
        try:
            yield payload
        finally:
            duration = max(0.0, self.now() - start)
            with self._lock:
                bucket = self._timings.setdefault(name, {"count": 0, "total": 0.0})
                bucket["count"] += 1
                bucket["total"] += duration
                event: Dict[str, Any] = {"name": name, "duration": duration}
                if payload:
                    event["metadata"] = dict(payload)
                self._events.append(event)
                del self._events[: -self._max_events]
            self._emit("timing", {"name": name, "duration": duration, "metadata": payload})

    def increment(self, name: str, amount: float = 1.0) -> None:
        with self._lock:
            value = self._counters.get(name, 0.0) + float(amount)
            self._counters[name] = value
        self._emit("counter", {"name": name, "delta": float(amount), "value": value})

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._metadata[key] = value
        self._emit("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return deepcopy(
                {
                    "name": self.name,
                    "timings": self._timings,
                    "counters": self._counters,
                    "events": self._events,
                    "metadata": self._metadata,
                }
            )


class TelemetryLogger:
    """Listener that mirrors telemetry events to the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._level = level

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})
        name = payload.get("name") or payload.get("key") or "event"
        self._logger.log(self._level, f"Telemetry {event_type}: {name}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryLogger", "TelemetryListener"]
