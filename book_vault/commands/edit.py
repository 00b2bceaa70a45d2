"""Edit an existing book."""

from __future__ import annotations

import click
from rich.markup import escape

from book_vault.cli import EXIT_STORE_ERROR, EXIT_USAGE_ERROR, Context, pass_context
from book_vault.commands._common import collect_fields
from book_vault.exceptions import BookVaultError, RecordNotFoundError
from book_vault.utils.output import error, success


@click.command("edit")
@click.argument("record_id")
@click.option("--title", default=None, help="New title")
@click.option("--author", default=None, help="New author")
@click.option("--pages", default=None, help="New page count")
@click.option("--tag", default=None, help="New category")
@click.option("--date-added", default=None, help="New date added (YYYY-MM-DD)")
@pass_context
def cli(
    ctx: Context,
    record_id: str,
    title: str | None,
    author: str | None,
    pages: str | None,
    tag: str | None,
    date_added: str | None,
) -> None:
    """Change fields of the book RECORD_ID.

    Only the given fields change; the id and creation time are kept and
    the update time is bumped.

    \b
    Examples:
      book-vault edit book_0004 --pages 704
      book-vault edit book_0001 --tag Classic --date-added 2024-12-03
    """
    fields = collect_fields(
        title=title,
        author=author,
        pages=pages,
        tag=tag,
        date_added=date_added,
    )
    if not fields:
        error(
            "Nothing to change",
            hint="Pass at least one of --title, --author, --pages, --tag, --date-added",
        )
        raise SystemExit(EXIT_USAGE_ERROR)

    store = ctx.get_store()
    try:
        record = store.edit(record_id, fields)
    except RecordNotFoundError as e:
        error(str(e))
        raise SystemExit(EXIT_USAGE_ERROR)
    except BookVaultError as e:
        error(str(e))
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f'Book "{escape(record.title)}" updated.')
