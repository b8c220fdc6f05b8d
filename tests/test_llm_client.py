import json

import ollama
import pytest

from gaan_khoj.app.services.llm_client import (
    OllamaSuggestionGenerator,
    SuggestionFormatError,
    create_generator,
    parse_suggestions,
)
from gaan_khoj.config import Settings
from gaan_khoj.core.models import SuggestionGuess


def test_parse_plain_json():
    payload = json.dumps(
        {"suggestions": [{"title": "আমার সোনার বাংলা", "artist": "রবীন্দ্রনাথ ঠাকুর"}]},
        ensure_ascii=False,
    )
    assert parse_suggestions(payload) == [
        SuggestionGuess(title="আমার সোনার বাংলা", artist="রবীন্দ্রনাথ ঠাকুর")
    ]


def test_parse_fenced_json():
    text = 'Here you go:\n```json\n{"suggestions": [{"title": "A", "artist": "B"}]}\n```'
    assert parse_suggestions(text) == [SuggestionGuess(title="A", artist="B")]


def test_malformed_entries_become_empty_guesses():
    text = json.dumps(
        {"suggestions": [{"title": None, "artist": "B"}, "loose string", {"title": "A"}]}
    )
    assert parse_suggestions(text) == [
        SuggestionGuess(title="", artist="B"),
        SuggestionGuess(),
        SuggestionGuess(title="A", artist=""),
    ]


@pytest.mark.parametrize(
    "text",
    ["", "   ", "not json at all", '{"songs": []}', '["a", "b"]', '{"suggestions": "A"}'],
)
def test_unusable_payloads_raise_format_error(text):
    with pytest.raises(SuggestionFormatError):
        parse_suggestions(text)


def test_generator_sends_history_and_requests_json(fake_ollama_client_factory):
    client = fake_ollama_client_factory('{"suggestions": [{"title": "A", "artist": "B"}]}')
    generator = OllamaSuggestionGenerator(client, "qwen2.5", count=3)

    guesses = generator.generate("Alpha by Beta, Gamma Ray by Delta")

    assert guesses == [SuggestionGuess(title="A", artist="B")]
    [request] = client.requests
    assert request["model"] == "qwen2.5"
    assert request["format"] == "json"
    prompt = request["messages"][0]["content"]
    assert "Alpha by Beta, Gamma Ray by Delta" in prompt
    assert "suggest 3 songs" in prompt


def test_generator_propagates_bad_payloads(fake_ollama_client_factory):
    generator = OllamaSuggestionGenerator(fake_ollama_client_factory("sorry, I cannot"), "m")
    with pytest.raises(SuggestionFormatError):
        generator.generate("history")


def test_create_generator_requires_host_and_model():
    assert create_generator(Settings()) is None
    assert create_generator(Settings(ollama_host="http://localhost:11434")) is None


def test_create_generator_builds_ollama_client():
    settings = Settings(
        ollama_host="http://localhost:11434",
        ollama_model="qwen2.5",
        ollama_api_key="secret",
    )

    generator = create_generator(settings)

    assert isinstance(generator, OllamaSuggestionGenerator)
    assert isinstance(generator.client, ollama.Client)
    assert generator.model == "qwen2.5"
