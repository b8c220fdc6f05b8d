"""Language-model client that proposes songs from a listener's history.

The model only ever sees text and answers with a list of
``{"title": ..., "artist": ...}`` objects.  Nothing it returns is trusted:
entries with missing or non-string fields become empty guesses, which the
reconciler turns into search links.
"""

from __future__ import annotations

import json
from typing import Any, List, Optional, Protocol

import ollama

from gaan_khoj.config import Settings
from gaan_khoj.core.models import SuggestionGuess

from ...utils.observability import get_logger

SUGGESTION_COUNT = 3

PROMPT_TEMPLATE = """You recommend Bengali songs.
Based on the user's search history, suggest {count} songs that the user might enjoy.
Write song titles and artist names in Bengali script where they are Bengali songs.

Search History: {history}

Respond ONLY with valid JSON in this format, no other text:
{{
  "suggestions": [
    {{"title": "song title", "artist": "artist name"}}
  ]
}}"""


class SuggestionFormatError(ValueError):
    """The model answered with something that is not a suggestions payload."""


class SuggestionGenerator(Protocol):
    def generate(self, history_context: str) -> List[SuggestionGuess]:
        ...


def _extract_json(text: str) -> str:
    text = text.strip()
    if "```json" in text:
        start = text.find("```json") + 7
        end = text.find("```", start)
        return text[start:end if end != -1 else None].strip()
    if "```" in text:
        start = text.find("```") + 3
        end = text.find("```", start)
        return text[start:end if end != -1 else None].strip()
    return text


def guess_from_entry(entry: Any) -> SuggestionGuess:
    if isinstance(entry, SuggestionGuess):
        return entry
    if not isinstance(entry, dict):
        return SuggestionGuess()
    title = entry.get("title")
    artist = entry.get("artist")
    return SuggestionGuess(
        title=title if isinstance(title, str) else "",
        artist=artist if isinstance(artist, str) else "",
    )


def parse_suggestions(text: str) -> List[SuggestionGuess]:
    """Turn the model's reply into guesses, one per listed entry."""

    if not isinstance(text, str) or not text.strip():
        raise SuggestionFormatError("empty model response")
    try:
        payload = json.loads(_extract_json(text))
    except ValueError as exc:
        raise SuggestionFormatError(f"model response is not JSON: {exc}") from exc

    entries = payload.get("suggestions") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        raise SuggestionFormatError("model response has no suggestions list")
    return [guess_from_entry(entry) for entry in entries]


class OllamaSuggestionGenerator:
    """:class:`SuggestionGenerator` backed by an Ollama chat model."""

    def __init__(
        self,
        client: Any,
        model: str,
        *,
        count: int = SUGGESTION_COUNT,
        temperature: float = 0.7,
    ) -> None:
        self.client = client
        self.model = model
        self.count = count
        self.temperature = temperature
        self._logger = get_logger(__name__).bind(component="ollama_generator", model=model)

    def build_prompt(self, history_context: str) -> str:
        return PROMPT_TEMPLATE.format(count=self.count, history=history_context)

    def generate(self, history_context: str) -> List[SuggestionGuess]:
        response = self.client.chat(
            model=self.model,
            messages=[{"role": "user", "content": self.build_prompt(history_context)}],
            format="json",
            options={"temperature": self.temperature},
        )
        content = response["message"]["content"]
        guesses = parse_suggestions(content)
        self._logger.info(
            "Model suggestions received",
            context={"guess_count": len(guesses)},
        )
        return guesses


def create_generator(settings: Settings) -> Optional[OllamaSuggestionGenerator]:
    """Build the Ollama generator, or ``None`` when no model is configured."""

    if not settings.suggestions_enabled:
        return None
    headers = {"Content-Type": "application/json"}
    if settings.ollama_api_key:
        headers["Authorization"] = f"Bearer {settings.ollama_api_key}"
    client = ollama.Client(host=settings.ollama_host, headers=headers)
    return OllamaSuggestionGenerator(client, settings.ollama_model or "")


__all__ = [
    "OllamaSuggestionGenerator",
    "PROMPT_TEMPLATE",
    "SUGGESTION_COUNT",
    "SuggestionFormatError",
    "SuggestionGenerator",
    "create_generator",
    "guess_from_entry",
    "parse_suggestions",
]
