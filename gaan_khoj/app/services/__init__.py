"""Search, suggestion and rendering services."""

from .history import InMemorySearchHistory, JsonFileSearchHistory, SearchHistoryStore
from .llm_client import OllamaSuggestionGenerator, SuggestionFormatError, SuggestionGenerator
from .result_formatter import SongResultFormatter
from .search_service import SearchService
from .suggestion_service import (
    FailureCategory,
    SuggestionCoordinator,
    SuggestionOutcome,
    SuggestionReconciler,
    SuggestionService,
    classify_failure,
)

__all__ = [
    "FailureCategory",
    "InMemorySearchHistory",
    "JsonFileSearchHistory",
    "OllamaSuggestionGenerator",
    "SearchHistoryStore",
    "SearchService",
    "SongResultFormatter",
    "SuggestionCoordinator",
    "SuggestionFormatError",
    "SuggestionGenerator",
    "SuggestionOutcome",
    "SuggestionReconciler",
    "SuggestionService",
    "classify_failure",
]
