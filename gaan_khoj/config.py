"""Runtime settings read from the environment (and an optional ``.env``)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PRIORITY_ARTIST = "রবীন্দ্রনাথ ঠাকুর"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    value = env.get(name, "")
    if not value:
        return default
    return str(value).strip().lower() in _TRUTHY


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    try:
        return int(env.get(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    try:
        value = float(env.get(name, default))
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


def _env_str(env: Mapping[str, str], name: str) -> Optional[str]:
    value = (env.get(name) or "").strip()
    return value or None


@dataclass(frozen=True)
class Settings:
    log_level: Optional[str] = None
    server_name: str = "0.0.0.0"
    server_port: int = 7860
    search_latency: float = 0.0
    search_all_tokens: bool = False
    suggestion_workers: int = 4
    history_limit: int = 5
    priority_artist: str = DEFAULT_PRIORITY_ARTIST
    songs_per_page: int = 48
    ollama_host: Optional[str] = None
    ollama_model: Optional[str] = None
    ollama_api_key: Optional[str] = None

    @property
    def suggestions_enabled(self) -> bool:
        return bool(self.ollama_host and self.ollama_model)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        *,
        dotenv: bool = True,
    ) -> "Settings":
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ

        return cls(
            log_level=_env_str(env, "GAAN_LOG_LEVEL"),
            server_name=_env_str(env, "GAAN_SERVER_NAME") or "0.0.0.0",
            server_port=_env_int(env, "GAAN_SERVER_PORT", 7860),
            search_latency=_env_float(env, "GAAN_SEARCH_LATENCY", 0.0),
            search_all_tokens=_env_flag(env, "GAAN_SEARCH_ALL_TOKENS"),
            suggestion_workers=max(1, _env_int(env, "GAAN_SUGGESTION_WORKERS", 4)),
            history_limit=max(1, _env_int(env, "GAAN_HISTORY_LIMIT", 5)),
            priority_artist=_env_str(env, "GAAN_PRIORITY_ARTIST") or DEFAULT_PRIORITY_ARTIST,
            songs_per_page=max(1, _env_int(env, "GAAN_SONGS_PER_PAGE", 48)),
            ollama_host=_env_str(env, "OLLAMA_HOST"),
            ollama_model=_env_str(env, "OLLAMA_MODEL"),
            ollama_api_key=_env_str(env, "OLLAMA_API_KEY"),
        )


__all__ = ["DEFAULT_PRIORITY_ARTIST", "Settings"]
