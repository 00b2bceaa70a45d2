"""Load the sample books."""

from __future__ import annotations

from pathlib import Path

import click

from book_vault.cli import EXIT_STORE_ERROR, Context, pass_context
from book_vault.exceptions import BookVaultError
from book_vault.transfer import load_seed
from book_vault.utils.output import error, success


@click.command("seed")
@click.option(
    "--file",
    "-F",
    "seed_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Seed file to load instead of the bundled sample data",
)
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation")
@pass_context
def cli(ctx: Context, seed_file: Path | None, yes: bool) -> None:
    """Replace the vault with sample data.

    \b
    Examples:
      book-vault seed
      book-vault seed --file my-seed.json
    """
    store = ctx.get_store()
    if len(store) and not yes:
        click.confirm(f"Replace the current {len(store)} books?", default=False, abort=True)

    try:
        count = load_seed(store, seed_file)
    except BookVaultError as e:
        error(f"Error loading sample data: {e}")
        raise SystemExit(EXIT_STORE_ERROR)
    except OSError as e:
        error(f"Error loading sample data: {e}")
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f"Sample data loaded successfully! ({count} books)")
