"""Helpers shared by the record commands."""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from typing import Any

import click
from rich.markup import escape

from book_vault.cli import EXIT_USAGE_ERROR
from book_vault.models import Record
from book_vault.search.engine import parse_sort_spec, sort_records
from book_vault.utils.output import (
    create_table,
    error,
    highlight_text,
    pager_print,
    render_to_string,
)
from book_vault.validators import validate_fields

# Table columns: Record cell name -> table configuration
COLUMN_DEFS: dict[str, dict[str, Any]] = {
    "title": {"header": "Title", "style": "book.title", "justify": "left"},
    "author": {"header": "Author", "style": "book.author", "justify": "left"},
    "pages": {"header": "Pages", "style": None, "justify": "right"},
    "tag": {"header": "Category", "style": "book.tag", "justify": "left"},
    "date_added": {"header": "Added", "style": None, "justify": "left"},
}


def sort_option(func):
    return click.option(
        "--sort",
        "-s",
        "sort_spec",
        default=None,
        help="Sort as FIELD-DIRECTION, e.g. pages-desc, title-asc, dateAdded-desc",
    )(func)


def tag_option(func):
    return click.option(
        "--tag",
        "-t",
        "tag_filter",
        default=None,
        help="Only show books in this exact category",
    )(func)


def apply_sort(records: Sequence[Record], sort_spec: str | None) -> list[Record]:
    """Sort *records* by a ``field-direction`` spec, exiting on a bad spec."""
    if sort_spec is None:
        return list(records)
    try:
        field, direction = parse_sort_spec(sort_spec)
    except ValueError as e:
        error(str(e))
        raise SystemExit(EXIT_USAGE_ERROR)
    return sort_records(records, field, direction)


def print_records_table(
    records: Sequence[Record],
    matcher: re.Pattern[str] | None = None,
    *,
    show_ids: bool = True,
) -> None:
    """Print records as a Rich table with search matches highlighted."""
    table = create_table(show_header=True, header_style="bold")
    if show_ids:
        table.add_column("ID", style="dim", no_wrap=True)
    for cdef in COLUMN_DEFS.values():
        kwargs: dict[str, Any] = {"justify": cdef["justify"]}
        if cdef["style"]:
            kwargs["style"] = cdef["style"]
        table.add_column(cdef["header"], **kwargs)

    for record in records:
        cells = record.cells()
        row = [highlight_text(cells[name], matcher) for name in COLUMN_DEFS]
        if show_ids:
            row.insert(0, record.id)
        table.add_row(*row)

    pager_print(render_to_string(table), header_lines=3)


def print_records_json(records: Sequence[Record]) -> None:
    click.echo(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))


def collect_fields(
    *,
    title: str | None,
    author: str | None,
    pages: str | None,
    tag: str | None,
    date_added: str | None,
) -> dict[str, Any]:
    """Validate form values and convert them to record fields.

    Only values that were given are returned. Every invalid field is
    reported before exiting.
    """
    raw = {
        "title": title,
        "author": author,
        "pages": pages,
        "tag": tag,
        "date_added": date_added,
    }
    given = {k: v for k, v in raw.items() if v is not None}

    problems = validate_fields(given)
    # An empty value is neutral for live feedback but not acceptable on save
    for name, value in given.items():
        if value == "":
            error(f"{name.replace('_', ' ').capitalize()} must not be empty")
            raise SystemExit(EXIT_USAGE_ERROR)
    if problems:
        for p in problems:
            error(f"Invalid {p.field.replace('_', ' ')} {escape(repr(p.value))}: {p.message}")
        raise SystemExit(EXIT_USAGE_ERROR)

    if "pages" in given:
        # Whole pages only; "123.45" is a valid entry but stores 123
        given["pages"] = int(given["pages"].split(".", 1)[0])
    return given
