"""Configuration management for book-vault."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from book_vault.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from book_vault.search.compiler import QueryMode
from book_vault.stats import (
    DEFAULT_MONTHLY_PAGES_TARGET,
    DEFAULT_YEARLY_BOOKS_TARGET,
    PAGES_PER_UNIT,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "book-vault" / "config.toml"


def get_default_store_path() -> Path:
    """Get the default record store path."""
    return Path.home() / ".local" / "share" / "book-vault" / "records.json"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        store_path: JSON file holding the record collection.
        colored_output: Whether to use colored terminal output.
        page_unit: Unit for page totals on the dashboard (pages, chapters, hours).
        search_mode: Default query interpretation (auto, literal, advanced).
        monthly_pages_target: Pages-per-month reading goal.
        yearly_books_target: Books-per-year reading goal.
        seed_on_first_run: Load the bundled sample data when no store exists.
        config_path: Path where config was loaded from (None if defaults).
    """

    store_path: Path = field(default_factory=get_default_store_path)
    colored_output: bool = True
    page_unit: str = "pages"
    search_mode: str = QueryMode.AUTO.value
    monthly_pages_target: int = DEFAULT_MONTHLY_PAGES_TARGET
    yearly_books_target: int = DEFAULT_YEARLY_BOOKS_TARGET
    seed_on_first_run: bool = False
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a critical validation fails.
        """
        warnings: list[str] = []

        self.store_path = self.store_path.expanduser().resolve()

        if self.store_path.exists() and self.store_path.is_dir():
            raise ConfigValidationError("paths.store", str(self.store_path), "is a directory")

        if self.page_unit not in PAGES_PER_UNIT:
            raise ConfigValidationError(
                "display.page_unit",
                self.page_unit,
                f"must be one of {', '.join(PAGES_PER_UNIT)}",
            )

        if self.search_mode not in {m.value for m in QueryMode}:
            raise ConfigValidationError(
                "search.default_mode",
                self.search_mode,
                f"must be one of {', '.join(m.value for m in QueryMode)}",
            )

        if self.monthly_pages_target <= 0:
            warnings.append(
                f"goals.monthly_pages_target={self.monthly_pages_target} is not positive"
            )
        if self.yearly_books_target <= 0:
            warnings.append(f"goals.yearly_books_target={self.yearly_books_target} is not positive")

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        # Use defaults
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: book-vault init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    # Load from file
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _get_typed(section: dict[str, Any], key: str, name: str, kind: type, reason: str) -> Any:
    value = section[key]
    # bool is an int subclass; an int option must not accept true/false
    if kind is int and isinstance(value, bool):
        raise ConfigValidationError(name, value, reason)
    if not isinstance(value, kind):
        raise ConfigValidationError(name, value, reason)
    return value


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [paths] section
    paths = data.get("paths", {})
    if "store" in paths:
        value = _get_typed(paths, "store", "paths.store", str, "must be a string path")
        config.store_path = Path(value)

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        config.colored_output = _get_typed(
            display, "colored_output", "display.colored_output", bool, "must be a boolean"
        )
    if "page_unit" in display:
        config.page_unit = _get_typed(
            display, "page_unit", "display.page_unit", str, "must be a string"
        )

    # Parse [search] section
    search = data.get("search", {})
    if "default_mode" in search:
        config.search_mode = _get_typed(
            search, "default_mode", "search.default_mode", str, "must be a string"
        )

    # Parse [goals] section
    goals = data.get("goals", {})
    if "monthly_pages_target" in goals:
        config.monthly_pages_target = _get_typed(
            goals, "monthly_pages_target", "goals.monthly_pages_target", int, "must be an integer"
        )
    if "yearly_books_target" in goals:
        config.yearly_books_target = _get_typed(
            goals, "yearly_books_target", "goals.yearly_books_target", int, "must be an integer"
        )

    # Parse [store] section
    store = data.get("store", {})
    if "seed_on_first_run" in store:
        config.seed_on_first_run = _get_typed(
            store, "seed_on_first_run", "store.seed_on_first_run", bool, "must be a boolean"
        )

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    # Ensure directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Build TOML structure
    data: dict[str, Any] = {
        "paths": {
            "store": str(config.store_path),
        },
        "display": {
            "colored_output": config.colored_output,
            "page_unit": config.page_unit,
        },
        "search": {
            "default_mode": config.search_mode,
        },
        "goals": {
            "monthly_pages_target": config.monthly_pages_target,
            "yearly_books_target": config.yearly_books_target,
        },
    }

    if config.seed_on_first_run:
        data["store"] = {"seed_on_first_run": True}

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
