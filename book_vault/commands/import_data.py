"""Import books from a JSON export."""

from __future__ import annotations

from pathlib import Path

import click

from book_vault.cli import EXIT_STORE_ERROR, Context, pass_context
from book_vault.exceptions import BookVaultError, ImportDataError, ImportFormatError
from book_vault.transfer import import_into
from book_vault.utils.output import error, success, verbose


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation")
@pass_context
def cli(ctx: Context, file: Path, yes: bool) -> None:
    """Replace the vault with the books in FILE.

    FILE must be a JSON array in which every book has id, title, author,
    pages, tag and dateAdded. If any entry is malformed nothing is
    imported and the current vault is left untouched.

    \b
    Examples:
      book-vault import book-vault-2024-12-09.json
    """
    store = ctx.get_store()
    if len(store) and not yes:
        click.confirm(f"Replace the current {len(store)} books?", default=False, abort=True)

    try:
        text = file.read_text(encoding="utf-8")
        count = import_into(store, text)
    except ImportDataError as e:
        error(str(e))
        if isinstance(e, ImportFormatError):
            where = f" (entry #{e.index})" if e.index is not None else ""
            verbose(f"Rejected: {e.reason}{where}")
        raise SystemExit(EXIT_STORE_ERROR)
    except (OSError, UnicodeDecodeError) as e:
        error(f"Error reading file: {e}")
        raise SystemExit(EXIT_STORE_ERROR)
    except BookVaultError as e:
        error(str(e))
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f"Data imported successfully! ({count} books)")
