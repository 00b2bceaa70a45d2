"""Jinja2 rendering of search results as a standalone HTML page."""

from __future__ import annotations

from datetime import datetime
from importlib import resources

from jinja2 import Environment, StrictUndefined, Template
from markupsafe import Markup

from book_vault.search.engine import MatchResult, highlight_record

COLUMNS: tuple[tuple[str, str], ...] = (
    ("title", "Title"),
    ("author", "Author"),
    ("pages", "Pages"),
    ("tag", "Category"),
    ("date_added", "Added"),
)


def _make_env() -> Environment:
    """Create the Jinja2 environment. Autoescape is on for every variable."""
    return Environment(
        autoescape=True,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


_env = _make_env()


def _load_template() -> Template:
    source = resources.files("book_vault").joinpath("results.html.j2").read_text(encoding="utf-8")
    return _env.from_string(source)


def render_results_html(
    result: MatchResult,
    *,
    query: str = "",
    generated_at: datetime | None = None,
) -> str:
    """Render *result* as an HTML document with highlighted cells.

    Cell markup comes from the highlighter, which escapes every piece of
    record text itself; it is passed to the template as ``Markup`` so it is
    not escaped a second time.
    """
    rows = []
    for record in result.visible_records:
        cells = highlight_record(record, result.matcher)
        rows.append(
            {
                "id": record.id,
                "cells": [Markup(cells[name]) for name, _ in COLUMNS],
            }
        )

    return _load_template().render(
        query=query,
        status=result.status_message,
        headers=[header for _, header in COLUMNS],
        rows=rows,
        generated_at=(generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M"),
    )
