"""List the books in the vault."""

from __future__ import annotations

import click

from book_vault.cli import Context, pass_context
from book_vault.commands._common import (
    apply_sort,
    print_records_json,
    print_records_table,
    sort_option,
    tag_option,
)
from book_vault.search.engine import search
from book_vault.utils.output import info


@click.command("list")
@tag_option
@sort_option
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@pass_context
def cli(ctx: Context, tag_filter: str | None, sort_spec: str | None, output_format: str) -> None:
    """List books, optionally filtered by category and sorted.

    \b
    Examples:
      book-vault list
      book-vault list --tag Fantasy
      book-vault list --sort pages-desc --format json
    """
    store = ctx.get_store()
    result = search("", tag_filter, store.list())
    records = apply_sort(result.visible_records, sort_spec)

    if output_format == "json":
        print_records_json(records)
        return

    if not ctx.quiet:
        info(result.status_message)
    if records:
        print_records_table(records)
