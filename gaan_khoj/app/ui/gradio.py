"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import gradio as gr

from ..data.catalog import BROWSE_FIELDS
from ..services.history import HISTORY_KEY
from ..services.result_formatter import EMPTY_QUERY_MESSAGE, SUGGESTIONS_HEADING

if TYPE_CHECKING:
    from ..app import GaanKhojApp

TAB_HOME = "home"
TAB_SEARCH = "search"
TAB_SONGS = "songs"
TAB_BROWSE = "browse"
TAB_SONG = "song"

_BROWSE_TABS = {
    "artist": ("শিল্পী", "শিল্পী নির্বাচন করুন"),
    "genre": ("ধরণ", "ধরণ নির্বাচন করুন"),
    "lyricist": ("গীতিকার", "গীতিকার নির্বাচন করুন"),
    "composer": ("সুরকার", "সুরকার নির্বাচন করুন"),
}


def _browse_tab_id(field: str) -> str:
    return f"{TAB_BROWSE}-{field}"


def _session_key(request: Optional[gr.Request]) -> str:
    session = getattr(request, "session_hash", None) if request is not None else None
    return session or "default"


def _format_activity(snapshot: Dict[str, Any]) -> str:
    """Return a one-paragraph summary of the last suggestion batch."""

    if not snapshot or not snapshot.get("name"):
        return ""

    timings = snapshot.get("timings") or {}
    counters = snapshot.get("counters") or {}
    metadata = snapshot.get("metadata") or {}

    chunks: List[str] = []
    for name in ("suggestions.generate", "suggestions.reconcile"):
        bucket = timings.get(name)
        if bucket:
            chunks.append(f"`{name}` {float(bucket.get('total', 0.0)):.2f}s")
    matched = counters.get("suggestions.matched")
    fallback = counters.get("suggestions.fallback")
    if matched is not None or fallback is not None:
        chunks.append(f"মিলেছে: {int(matched or 0)}, অনুসন্ধান লিংক: {int(fallback or 0)}")
    if metadata.get("failure.category"):
        chunks.append(f"ত্রুটি: `{metadata['failure.category']}`")
    return " · ".join(chunks)


def create_interface(app: "GaanKhojApp") -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    browse_pickers: Dict[str, gr.Dropdown] = {}
    browse_listings: Dict[str, gr.Markdown] = {}

    def refresh_suggestions(history: Any, request: gr.Request):
        panel = app.suggestion_panel(app.history_store(history), session=_session_key(request))
        if panel is None:
            # A newer batch for this session owns the panel.
            return gr.update(), gr.update()
        rendered, snapshot = panel
        return rendered, _format_activity(snapshot)

    def run_search(query: str, history: Any):
        store = app.history_store(history)
        return app.search(query), app.record_search(store, query)

    def open_links(history: Any, request: gr.Request):
        params = getattr(request, "query_params", None) or {}
        slug = (params.get("song") or "").strip()
        query = (params.get("q") or "").strip()
        field = (params.get("browse") or "").strip()
        store = app.history_store(history)

        updates: Dict[Any, Any] = {history_state: store.read()}
        if slug:
            updates.update(
                {
                    tabs: gr.Tabs(selected=TAB_SONG),
                    slug_input: slug,
                    detail_md: app.song(slug),
                }
            )
        elif query:
            updates.update(
                {
                    tabs: gr.Tabs(selected=TAB_SEARCH),
                    query_input: query,
                    results_md: app.search(query),
                    history_state: app.record_search(store, query),
                }
            )
        elif field in browse_pickers:
            value = (params.get("v") or "").strip()
            updates.update(
                {
                    tabs: gr.Tabs(selected=TAB_BROWSE),
                    browse_tabs: gr.Tabs(selected=_browse_tab_id(field)),
                    browse_listings[field]: app.browse(field, value),
                }
            )
            # The dropdown only accepts one of its own choices.
            if value in app.labels(field):
                updates[browse_pickers[field]] = value
        return updates

    def show_page(page_number: Any):
        current, body, controls = app.page(page_number)
        return current, body, controls

    def step_page(page_number: Any, delta: int):
        try:
            target = int(page_number) + delta
        except (TypeError, ValueError):
            target = 1
        return show_page(target)

    interface_css = """
    .gk-container {max-width: 1100px; margin: 0 auto; gap: 20px;}
    .gk-hero {text-align: center; padding-bottom: 12px;}
    .gk-hero h2 {font-size: 2rem; margin-bottom: 0.25rem;}
    .gk-panel {border: 1px solid rgba(15, 23, 42, 0.08); border-radius: 16px; background: #ffffff; padding: 20px;}
    .gk-status {color: #4b5563; font-size: 0.9rem;}
    .gk-pagination {text-align: center;}
    """

    with gr.Blocks(title="গান খোঁজ", theme=gr.themes.Soft(), css=interface_css) as interface:
        history_state = gr.BrowserState([], storage_key=HISTORY_KEY)

        with gr.Column(elem_classes=["gk-container"]):
            gr.Markdown(
                "<h2>🎵 গান খোঁজ</h2>\n<p>বাংলা গান, শিল্পী, গীতিকার ও সুরকার খুঁজুন।</p>",
                elem_classes=["gk-hero"],
            )

            with gr.Tabs(selected=TAB_HOME) as tabs:
                with gr.Tab("হোম", id=TAB_HOME):
                    with gr.Group(elem_classes=["gk-panel"]):
                        suggestions_md = gr.Markdown(f"### {SUGGESTIONS_HEADING}\n\n_লোড হচ্ছে…_")
                        status_md = gr.Markdown("", elem_classes=["gk-status"])
                        refresh_btn = gr.Button("🔄 নতুন পরামর্শ", size="sm")
                    with gr.Row():
                        gr.Markdown(app.popular(), elem_classes=["gk-panel"])
                        gr.Markdown(app.recent(), elem_classes=["gk-panel"])

                with gr.Tab("অনুসন্ধান", id=TAB_SEARCH):
                    with gr.Group(elem_classes=["gk-panel"]):
                        query_input = gr.Textbox(
                            label="গান, শিল্পী বা গীতিকার",
                            placeholder="যেমন: আমার সোনার বাংলা",
                            lines=1,
                        )
                        search_btn = gr.Button("🔍 খুঁজুন", variant="primary")
                    results_md = gr.Markdown(EMPTY_QUERY_MESSAGE)

                with gr.Tab("সব গান", id=TAB_SONGS):
                    first_page, first_body, first_controls = app.page(1)
                    songs_md = gr.Markdown(first_body)
                    pagination_md = gr.Markdown(first_controls, elem_classes=["gk-pagination"])
                    with gr.Row():
                        prev_btn = gr.Button("← আগের পাতা")
                        page_input = gr.Number(value=first_page, precision=0, label="পৃষ্ঠা", minimum=1)
                        next_btn = gr.Button("পরের পাতা →")

                with gr.Tab("ব্রাউজ", id=TAB_BROWSE):
                    with gr.Tabs() as browse_tabs:
                        for field in BROWSE_FIELDS:
                            tab_label, prompt = _BROWSE_TABS[field]
                            with gr.Tab(tab_label, id=_browse_tab_id(field)):
                                picker = gr.Dropdown(
                                    choices=app.labels(field),
                                    label=prompt,
                                    value=None,
                                )
                                listing_md = gr.Markdown(app.browse(field, None))
                                browse_pickers[field] = picker
                                browse_listings[field] = listing_md
                                picker.change(
                                    fn=lambda value, _field=field: app.browse(_field, value),
                                    inputs=[picker],
                                    outputs=[listing_md],
                                )

                with gr.Tab("গানের বিবরণ", id=TAB_SONG):
                    with gr.Row():
                        slug_input = gr.Textbox(label="গানের স্লাগ", lines=1, scale=4)
                        open_btn = gr.Button("খুলুন", scale=1)
                    detail_md = gr.Markdown("")

        search_outputs = [results_md, history_state]
        for trigger in (search_btn.click, query_input.submit):
            trigger(
                fn=run_search,
                inputs=[query_input, history_state],
                outputs=search_outputs,
            ).then(
                fn=refresh_suggestions,
                inputs=[history_state],
                outputs=[suggestions_md, status_md],
            )

        refresh_btn.click(
            fn=refresh_suggestions,
            inputs=[history_state],
            outputs=[suggestions_md, status_md],
        )

        page_outputs = [page_input, songs_md, pagination_md]
        page_input.submit(fn=show_page, inputs=[page_input], outputs=page_outputs)
        prev_btn.click(fn=lambda page: step_page(page, -1), inputs=[page_input], outputs=page_outputs)
        next_btn.click(fn=lambda page: step_page(page, 1), inputs=[page_input], outputs=page_outputs)

        for trigger in (open_btn.click, slug_input.submit):
            trigger(fn=app.song, inputs=[slug_input], outputs=[detail_md])

        interface.load(
            fn=open_links,
            inputs=[history_state],
            outputs=[
                tabs,
                browse_tabs,
                query_input,
                results_md,
                slug_input,
                detail_md,
                history_state,
                *browse_pickers.values(),
                *browse_listings.values(),
            ],
        ).then(
            fn=refresh_suggestions,
            inputs=[history_state],
            outputs=[suggestions_md, status_md],
        )

    return interface


__all__ = ["create_interface"]
