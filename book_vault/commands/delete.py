"""Delete a book from the vault."""

from __future__ import annotations

import click
from rich.markup import escape

from book_vault.cli import EXIT_STORE_ERROR, EXIT_USAGE_ERROR, Context, pass_context
from book_vault.exceptions import BookVaultError, RecordNotFoundError
from book_vault.utils.output import error, info, success


@click.command("delete")
@click.argument("record_id")
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation")
@pass_context
def cli(ctx: Context, record_id: str, yes: bool) -> None:
    """Delete the book RECORD_ID.

    \b
    Examples:
      book-vault delete book_0002
      book-vault delete book_0002 --yes
    """
    store = ctx.get_store()
    try:
        record = store.get(record_id)
    except RecordNotFoundError as e:
        error(str(e))
        raise SystemExit(EXIT_USAGE_ERROR)

    if not yes and not click.confirm(f'Delete "{record.title}"?', default=False):
        info("Nothing deleted.")
        return

    try:
        store.delete(record_id)
    except BookVaultError as e:
        error(str(e))
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f'Book "{escape(record.title)}" deleted.')
