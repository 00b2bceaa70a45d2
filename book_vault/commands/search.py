"""Search books by text or regular expression."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import click
from rich.markup import escape

from book_vault.cli import EXIT_USAGE_ERROR, Context, pass_context
from book_vault.commands._common import (
    apply_sort,
    print_records_json,
    print_records_table,
    sort_option,
    tag_option,
)
from book_vault.report import render_results_html
from book_vault.search.compiler import QueryMode
from book_vault.search.engine import search
from book_vault.utils.output import console, error, info, success, warning


@click.command("search")
@click.argument("query", nargs=-1)
@tag_option
@sort_option
@click.option(
    "--mode",
    "-m",
    type=click.Choice([m.value for m in QueryMode]),
    default=None,
    help="Query interpretation: auto (default from config), literal or advanced",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json", "html"]),
    default="table",
    help="Output format (default: table)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the html report to this file instead of stdout",
)
@pass_context
def cli(
    ctx: Context,
    query: tuple[str, ...],
    tag_filter: str | None,
    sort_spec: str | None,
    mode: str | None,
    output_format: str,
    output: Path | None,
) -> None:
    """Search titles, authors and categories.

    QUERY is matched case-insensitively anywhere in the text. Multiple
    arguments are joined with spaces. A query containing * ? [ or ( is
    treated as a regular expression; use --mode literal to search for such
    characters as plain text.

    \b
    Examples:
      book-vault search gatsby
      book-vault search "^the (great|hobbit)"
      book-vault search --mode literal "Book (Revised)"
      book-vault search tolkien --tag Fantasy
      book-vault search orwell --format html -o results.html
    """
    config = ctx.config
    query_string = " ".join(query)
    effective_mode = mode or (config.search_mode if config else QueryMode.AUTO.value)

    store = ctx.get_store()
    result = search(query_string, tag_filter, store.list(), mode=effective_mode)

    if not result.valid:
        error(f"{result.status_message}: {escape(query_string)}")
        raise SystemExit(EXIT_USAGE_ERROR)

    records = apply_sort(result.visible_records, sort_spec)

    if output_format == "json":
        print_records_json(records)
        return

    if output_format == "html":
        sorted_result = replace(result, visible_records=tuple(records))
        page = render_results_html(sorted_result, query=query_string)
        if output is None:
            click.echo(page, nl=False)
        else:
            output.write_text(page, encoding="utf-8")
            if not ctx.quiet:
                success(f"Wrote {len(records)} results to {output}")
        return

    if output is not None:
        warning("--output only applies to --format html")

    if not ctx.quiet:
        info(escape(result.status_message))
    if records:
        print_records_table(records, result.matcher)
    elif not ctx.quiet:
        console.print("[status]No books to show.[/status]")
