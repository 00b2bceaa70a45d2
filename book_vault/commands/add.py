"""Add a book to the vault."""

from __future__ import annotations

from datetime import date

import click
from rich.markup import escape

from book_vault.cli import EXIT_STORE_ERROR, Context, pass_context
from book_vault.commands._common import collect_fields
from book_vault.exceptions import BookVaultError
from book_vault.utils.output import error, success


@click.command("add")
@click.option("--title", required=True, help="Book title")
@click.option("--author", required=True, help="Author name")
@click.option("--pages", required=True, help="Page count, e.g. 320")
@click.option("--tag", required=True, help="Category, e.g. 'Science Fiction' or Self-Help")
@click.option(
    "--date-added",
    default=None,
    help="Date added as YYYY-MM-DD (default: today)",
)
@pass_context
def cli(
    ctx: Context,
    title: str,
    author: str,
    pages: str,
    tag: str,
    date_added: str | None,
) -> None:
    """Add a new book.

    Every field is checked before anything is saved: titles and authors
    must not start or end with spaces, pages must be a plain number,
    categories are letters joined by single spaces or hyphens.

    \b
    Examples:
      book-vault add --title "Dune" --author "Frank Herbert" \\
          --pages 688 --tag Science-Fiction
    """
    fields = collect_fields(
        title=title,
        author=author,
        pages=pages,
        tag=tag,
        date_added=date_added if date_added is not None else date.today().isoformat(),
    )

    store = ctx.get_store()
    try:
        record = store.add(fields)
    except BookVaultError as e:
        error(str(e))
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f'Book "{escape(record.title)}" saved successfully!')
        click.echo(record.id)
