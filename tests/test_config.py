import logging

import pytest

from gaan_khoj.config import DEFAULT_PRIORITY_ARTIST, Settings
from gaan_khoj.utils.logging_config import configure_logging


def test_defaults_without_environment():
    settings = Settings.from_env({})

    assert settings.server_name == "0.0.0.0"
    assert settings.server_port == 7860
    assert settings.songs_per_page == 48
    assert settings.history_limit == 5
    assert settings.priority_artist == DEFAULT_PRIORITY_ARTIST
    assert not settings.search_all_tokens
    assert not settings.suggestions_enabled


def test_values_are_read_from_environment():
    settings = Settings.from_env(
        {
            "GAAN_SERVER_PORT": "8080",
            "GAAN_SEARCH_LATENCY": "0.5",
            "GAAN_SEARCH_ALL_TOKENS": "yes",
            "GAAN_SUGGESTION_WORKERS": "8",
            "GAAN_PRIORITY_ARTIST": " কাজী নজরুল ইসলাম ",
            "OLLAMA_HOST": "http://localhost:11434",
            "OLLAMA_MODEL": "qwen2.5",
        }
    )

    assert settings.server_port == 8080
    assert settings.search_latency == 0.5
    assert settings.search_all_tokens
    assert settings.suggestion_workers == 8
    assert settings.priority_artist == "কাজী নজরুল ইসলাম"
    assert settings.suggestions_enabled


@pytest.mark.parametrize(
    "env",
    [
        {"GAAN_SERVER_PORT": "not-a-port"},
        {"GAAN_SEARCH_LATENCY": "-1"},
        {"GAAN_SONGS_PER_PAGE": "0", "GAAN_HISTORY_LIMIT": "-3"},
    ],
)
def test_bad_numbers_fall_back_to_safe_values(env):
    settings = Settings.from_env(env)

    assert settings.server_port == 7860
    assert settings.search_latency == 0.0
    assert settings.songs_per_page >= 1
    assert settings.history_limit >= 1


def test_configure_logging_reads_level_from_environment(monkeypatch):
    calls = []
    monkeypatch.setenv("GAAN_LOG_LEVEL", "debug")
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    logger = logging.getLogger("gaan_khoj")
    previous = logger.level

    try:
        configure_logging(force=True)
        assert calls[0]["level"] == logging.DEBUG
        assert calls[0]["force"] is True
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)
