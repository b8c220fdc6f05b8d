"""HTTP routes around the Gradio front-end.

Song, search and browse links rendered in markdown point at ``/song/<slug>``,
``/search?q=<query>`` and ``/browse/<field>?v=<label>``.  Those paths
redirect into the mounted Blocks UI, whose load handler opens the matching
tab.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote, urlencode

import gradio as gr
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import RedirectResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from gaan_khoj import __version__
from gaan_khoj.app.data.catalog import BROWSE_FIELDS
from gaan_khoj.utils.observability import get_logger

if TYPE_CHECKING:
    from gaan_khoj.app.app import GaanKhojApp

UI_PATH = "/ui"

_logger = get_logger(__name__).bind(component="web_routes")


def ui_url(**params: str) -> str:
    if not params:
        return f"{UI_PATH}/"
    return f"{UI_PATH}/?{urlencode(params, quote_via=quote)}"


def create_web_app(app: "GaanKhojApp") -> FastAPI:
    """Build the FastAPI application with the Gradio UI mounted at ``/ui``."""

    web = FastAPI(
        title="Gaan Khoj",
        description="বাংলা গানের খোঁজ",
        version=__version__,
    )

    @web.get("/")
    async def root():
        return RedirectResponse(url=ui_url())

    @web.get("/health")
    async def health():
        return {
            "status": "healthy",
            "song_count": app.repository.total_count(),
            "suggestions_enabled": app.suggestion_service.enabled,
        }

    @web.get("/song/{slug}")
    async def song(slug: str):
        _logger.debug("Song link followed", context={"slug": slug})
        return RedirectResponse(url=ui_url(song=slug))

    @web.get("/search")
    async def search(q: str = Query("", description="Search text")):
        _logger.debug("Search link followed", context={"query": q})
        query = q.strip()
        return RedirectResponse(url=ui_url(q=query) if query else ui_url())

    @web.get("/browse/{field}")
    async def browse(field: str, v: str = Query("", description="Label to list songs for")):
        if field not in BROWSE_FIELDS:
            raise HTTPException(status_code=404, detail=f"Unknown browse field: {field}")
        _logger.debug("Browse link followed", context={"field": field, "value": v})
        value = v.strip()
        return RedirectResponse(url=ui_url(browse=field, v=value) if value else ui_url(browse=field))

    @web.get("/metrics")
    def metrics():
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    return gr.mount_gradio_app(web, app.create_gradio_interface(), path=UI_PATH)


__all__ = ["UI_PATH", "create_web_app", "ui_url"]
