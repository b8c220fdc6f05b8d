import sys
from pathlib import Path
from typing import Dict, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gaan_khoj.app.data.catalog import InMemoryCatalog
from gaan_khoj.app.services.search_service import SearchService
from gaan_khoj.config import Settings
from gaan_khoj.core.models import Song, SuggestionGuess


class FakeGenerator:
    """Generator stub returning canned guesses and recording its prompts."""

    def __init__(self, guesses=None, error: Exception = None) -> None:
        self.guesses = list(guesses or [])
        self.error = error
        self.calls: List[str] = []

    def generate(self, history_context: str) -> List[SuggestionGuess]:
        self.calls.append(history_context)
        if self.error is not None:
            raise self.error
        return list(self.guesses)


class FakeOllamaClient:
    """Stand-in for ``ollama.Client`` returning a fixed chat message."""

    def __init__(self, content: str) -> None:
        self.content = content
        self.requests: List[Dict] = []

    def chat(self, **kwargs):
        self.requests.append(kwargs)
        return {"message": {"role": "assistant", "content": self.content}}


SMALL_SONGS = (
    Song(title="Alpha", artist="Beta", genre="Rock", album="First Light"),
    Song(title="Gamma Ray", artist="Delta", lyricist="Epsilon", genre="Pop"),
    Song(title="Alpha", artist="Zeta", genre="Folk"),
    Song(title="আমার সোনার বাংলা", artist="রবীন্দ্রনাথ ঠাকুর", genre="রবীন্দ্রসঙ্গীত"),
    Song(title="Sample", artist="Nobody", genre="Placeholder"),
)


@pytest.fixture
def small_catalog():
    return InMemoryCatalog(SMALL_SONGS, priority_artist="রবীন্দ্রনাথ ঠাকুর")


@pytest.fixture
def small_search(small_catalog):
    return SearchService(small_catalog)


@pytest.fixture
def catalog():
    return InMemoryCatalog()


@pytest.fixture
def search_service(catalog):
    return SearchService(catalog)


@pytest.fixture
def settings():
    return Settings.from_env({})


@pytest.fixture
def fake_generator_factory():
    return FakeGenerator


@pytest.fixture
def fake_ollama_client_factory():
    return FakeOllamaClient
