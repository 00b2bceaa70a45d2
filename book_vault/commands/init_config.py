"""Initialize configuration file for book-vault."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import click

from book_vault.cli import Context, pass_context
from book_vault.config import Config, get_default_config_path, save_config
from book_vault.exceptions import ConfigValidationError
from book_vault.search.compiler import QueryMode
from book_vault.stats import PAGES_PER_UNIT
from book_vault.utils.fileops import secure_mkdir
from book_vault.utils.output import error, info, success


def _load_example_config() -> str:
    """Load the example configuration from package data."""
    return resources.files("book_vault").joinpath("config.example.toml").read_text()


def _build_config(
    store_path: Path | None, search_mode: str | None, page_unit: str | None
) -> Config:
    config = Config()
    if store_path is not None:
        config.store_path = store_path
    if search_mode is not None:
        config.search_mode = search_mode
    if page_unit is not None:
        config.page_unit = page_unit
    config.validate()
    return config


@click.command("init-config")
@click.option(
    "--force",
    "-f",
    is_flag=True,
    default=False,
    help="Overwrite existing config file",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path for config file (default: ~/.config/book-vault/config.toml)",
)
@click.option(
    "--store-path",
    type=click.Path(path_type=Path),
    default=None,
    help="Record store file to write into the config",
)
@click.option(
    "--search-mode",
    type=click.Choice([m.value for m in QueryMode]),
    default=None,
    help="Default search mode to write into the config",
)
@click.option(
    "--page-unit",
    type=click.Choice(list(PAGES_PER_UNIT)),
    default=None,
    help="Dashboard page unit to write into the config",
)
@pass_context
def cli(
    ctx: Context,
    force: bool,
    output: Path | None,
    store_path: Path | None,
    search_mode: str | None,
    page_unit: str | None,
) -> None:
    """Create a new configuration file with default settings.

    Creates a configuration file at the default location
    (~/.config/book-vault/config.toml) or at a custom path
    specified with --output.

    Without settings options the commented example file is written. With
    --store-path, --search-mode or --page-unit, a plain file holding every
    setting (defaults plus the given values) is written instead.

    Examples:

    \b
      # Create config at default location
      book-vault init-config

    \b
      # Create config at custom location
      book-vault init-config --output ./my-config.toml

    \b
      # Create config with chosen settings
      book-vault init-config --store-path ~/books.json --search-mode literal

    \b
      # Overwrite existing config
      book-vault init-config --force
    """
    config_path = output if output is not None else get_default_config_path()
    config_path = config_path.expanduser().resolve()

    if config_path.exists() and not force:
        error(
            f"Config file already exists: {config_path}",
            hint="Use --force to overwrite",
        )
        raise SystemExit(1)

    config: Config | None = None
    if store_path is not None or search_mode is not None or page_unit is not None:
        try:
            config = _build_config(store_path, search_mode, page_unit)
        except ConfigValidationError as e:
            error(str(e))
            raise SystemExit(1)

    secure_mkdir(config_path.parent)

    try:
        if config is None:
            config_path.write_text(_load_example_config())
        else:
            save_config(config, config_path)
        config_path.chmod(0o600)
    except OSError as e:
        error(f"Failed to write config file: {e}")
        raise SystemExit(1)

    success(f"Created config file: {config_path}")
    info("Edit this file to customize your settings.")
