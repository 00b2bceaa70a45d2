"""Check field values the way the entry form does."""

from __future__ import annotations

import click

from book_vault.cli import EXIT_USAGE_ERROR
from book_vault.utils.output import console, error, success, warning
from book_vault.validators import (
    FIELD_RULES,
    FeedbackStatus,
    check_field,
    validate_duplicate_words,
)


@click.group("validate")
def cli() -> None:
    """Check values before adding or editing a book."""


@cli.command("field")
@click.argument("field", type=click.Choice(list(FIELD_RULES)))
@click.argument("value")
def field_cmd(field: str, value: str) -> None:
    """Check VALUE against the rules for FIELD.

    Exits with status 1 when the value is invalid.

    \b
    Examples:
      book-vault validate field date_added 2024-02-30
      book-vault validate field tag "Science Fiction"
    """
    feedback = check_field(field, value)
    if feedback.status is FeedbackStatus.EMPTY:
        console.print("[status]No value entered.[/status]")
    elif feedback.status is FeedbackStatus.VALID:
        success(feedback.message)
    else:
        error(feedback.message)
        raise SystemExit(EXIT_USAGE_ERROR)


@cli.command("duplicates")
@click.argument("text")
def duplicates_cmd(text: str) -> None:
    """Warn when TEXT contains an immediately repeated word ("the the").

    Exits with status 1 when a repeat is found.
    """
    if validate_duplicate_words(text):
        warning("Repeated word found")
        raise SystemExit(EXIT_USAGE_ERROR)
    success("No repeated words")
