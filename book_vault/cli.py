"""Command-line interface for book-vault."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from book_vault import __version__
from book_vault.config import Config, load_config
from book_vault.exceptions import BookVaultError
from book_vault.store import RecordStore
from book_vault.utils.output import (
    error,
    set_color,
    set_pager,
    set_verbosity,
    verbose,
    warning,
)

EXIT_SUCCESS = 0
EXIT_USAGE_ERROR = 1
EXIT_STORE_ERROR = 2

logger = logging.getLogger(__name__)


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False
        self.pager: bool | None = None  # None = auto
        self._store: RecordStore | None = None

    def get_store(self) -> RecordStore:
        """Open the record store once per invocation.

        Loads the bundled sample data on first run when
        ``store.seed_on_first_run`` is enabled.
        """
        if self._store is not None:
            return self._store

        if self.config is None:
            error("Configuration not loaded")
            raise SystemExit(EXIT_USAGE_ERROR)

        store = RecordStore(self.config.store_path)
        first_run = not self.config.store_path.exists()
        try:
            store.load()
            if first_run and self.config.seed_on_first_run:
                from book_vault.transfer import load_seed

                count = load_seed(store)
                verbose(f"Seeded new store with {count} sample records")
        except BookVaultError as e:
            error(str(e))
            raise SystemExit(EXIT_STORE_ERROR)

        self._store = store
        return store


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/book-vault/config.toml)",
)
@click.option(
    "--store",
    "-S",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to the records JSON file (overrides config)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.option(
    "--pager/--no-pager",
    default=None,
    help="Force pager on/off (default: auto-detect)",
)
@click.version_option(version=__version__, prog_name="book-vault")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    store: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
    pager: bool | None,
) -> None:
    """book-vault: a personal book catalog with search and statistics.

    Add, edit and delete books, search them with plain text or regular
    expressions, filter by category, and import/export the collection
    as JSON.

    Configuration is loaded from ~/.config/book-vault/config.toml by default.
    Use --config to specify an alternative configuration file.

    Examples:

        # Load the sample books and search them
        book-vault seed
        book-vault search gatsby

        # Show help for a specific command
        book-vault search --help
    """
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet
    app_ctx.pager = pager

    set_verbosity(verbose=verbose, debug=debug)
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    set_pager(pager)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    try:
        loaded_config, warnings = load_config(config)
        app_ctx.config = loaded_config

        if store is not None:
            loaded_config.store_path = store.expanduser().resolve()

        if not disable_color and not loaded_config.colored_output:
            set_color(False)

        # The missing-config notice is noise for every command; show it in verbose mode
        if not quiet:
            for warn in warnings:
                if warn.startswith("No config file found"):
                    if app_ctx.verbose:
                        warning(warn)
                else:
                    warning(warn)

    except Exception as e:
        error(str(e))
        ctx.exit(1)


@cli.command("help")
@click.argument("command", required=False, nargs=-1)
@click.pass_context
def help_cmd(ctx: click.Context, command: tuple[str, ...]) -> None:
    """Show help for a command."""
    group = cli
    for name in command:
        cmd = group.get_command(ctx, name)
        if cmd is None:
            error(f"Unknown command: {name}")
            ctx.exit(1)
            return
        if isinstance(cmd, click.Group):
            group = cmd
        else:
            click.echo(cmd.get_help(ctx))
            return
    click.echo(group.get_help(ctx))


def register_commands() -> None:
    """Register all commands from the commands package."""
    from book_vault.commands import discover_commands

    for command in discover_commands():
        cli.add_command(command)


# Register commands on import
register_commands()
