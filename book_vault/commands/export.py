"""Export the vault as JSON."""

from __future__ import annotations

from pathlib import Path

import click

from book_vault.cli import EXIT_STORE_ERROR, Context, pass_context
from book_vault.transfer import export_filename, export_records
from book_vault.utils.output import error, success


@click.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True, path_type=Path),
    default=None,
    help="Output file, '-' for stdout (default: ./book-vault-YYYY-MM-DD.json)",
)
@pass_context
def cli(ctx: Context, output: Path | None) -> None:
    """Export every book as a pretty-printed JSON array.

    \b
    Examples:
      book-vault export
      book-vault export -o backup.json
      book-vault export -o - | jq '.[].title'
    """
    store = ctx.get_store()
    payload = export_records(store.list())

    if output is not None and str(output) == "-":
        click.echo(payload)
        return

    target = output if output is not None else Path(export_filename())
    try:
        target.write_text(payload + "\n", encoding="utf-8")
    except OSError as e:
        error(f"Failed to write export: {e}")
        raise SystemExit(EXIT_STORE_ERROR)

    if not ctx.quiet:
        success(f"Exported {len(store)} books to {target}")
