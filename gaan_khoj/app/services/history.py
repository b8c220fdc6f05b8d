"""Recent search history used to seed song suggestions."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

from ...utils.observability import get_logger

HISTORY_KEY = "searchHistory"
HISTORY_LIMIT = 5

_logger = get_logger(__name__).bind(component="search_history")


class SearchHistoryStore(Protocol):
    def read(self) -> List[str]:
        ...

    def append(self, item: str) -> None:
        ...


def sanitize_history(value: Any, limit: int = HISTORY_LIMIT) -> List[str]:
    """Coerce stored history into a list of distinct non-blank strings.

    Anything that is not a list counts as corrupt and yields ``[]``.
    """

    if not isinstance(value, list):
        return []
    history: List[str] = []
    for entry in value:
        if not isinstance(entry, str):
            continue
        cleaned = entry.strip()
        if cleaned and cleaned not in history:
            history.append(cleaned)
    return history[: max(limit, 0)]


def push_history(history: Iterable[str], item: str, limit: int = HISTORY_LIMIT) -> List[str]:
    """Return ``history`` with ``item`` moved to the front, deduplicated and capped."""

    cleaned = item.strip() if isinstance(item, str) else ""
    current = sanitize_history(list(history), limit)
    if not cleaned:
        return current
    return ([cleaned] + [entry for entry in current if entry != cleaned])[: max(limit, 0)]


class InMemorySearchHistory:
    """History held in process memory, e.g. one browser session's copy."""

    def __init__(self, initial: Any = None, *, limit: int = HISTORY_LIMIT) -> None:
        self.limit = limit
        self._lock = threading.Lock()
        self._items = sanitize_history(initial if initial is not None else [], limit)

    def read(self) -> List[str]:
        with self._lock:
            return list(self._items)

    def append(self, item: str) -> None:
        with self._lock:
            self._items = push_history(self._items, item, self.limit)


class JsonFileSearchHistory:
    """History persisted in a JSON document under :data:`HISTORY_KEY`."""

    def __init__(
        self,
        path: str | Path,
        *,
        key: str = HISTORY_KEY,
        limit: int = HISTORY_LIMIT,
    ) -> None:
        self.path = Path(path)
        self.key = key
        self.limit = limit
        self._lock = threading.Lock()

    def _load_document(self) -> dict:
        if not self.path.is_file():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                document = json.load(handle)
        except (OSError, ValueError) as exc:
            _logger.warning(
                "Search history unreadable; resetting",
                context={"path": str(self.path), "error": str(exc)},
            )
            return {}
        return document if isinstance(document, dict) else {}

    def _read_locked(self) -> List[str]:
        stored: Optional[Any] = self._load_document().get(self.key, [])
        if not isinstance(stored, list):
            _logger.warning(
                "Search history corrupt; resetting",
                context={"path": str(self.path), "type": type(stored).__name__},
            )
            return []
        return sanitize_history(stored, self.limit)

    def read(self) -> List[str]:
        with self._lock:
            return self._read_locked()

    def append(self, item: str) -> None:
        with self._lock:
            updated = push_history(self._read_locked(), item, self.limit)
            document = self._load_document()
            document[self.key] = updated
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(document, handle, ensure_ascii=False)


__all__ = [
    "HISTORY_KEY",
    "HISTORY_LIMIT",
    "InMemorySearchHistory",
    "JsonFileSearchHistory",
    "SearchHistoryStore",
    "push_history",
    "sanitize_history",
]
