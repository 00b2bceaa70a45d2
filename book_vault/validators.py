"""Field validators for book records.

Each validator is a pure ``str -> bool`` predicate encoding one field's
syntactic contract. The checks are purely syntactic: dates are not checked
against a calendar and imported records are not run through them.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Pre-compiled patterns
# ---------------------------------------------------------------------------

# Whole-value patterns are applied with fullmatch() so a trailing newline
# is never accepted the way "$" would accept it.
_DESCRIPTION = re.compile(r"\S(?:.*\S)?")
_NUMERIC = re.compile(r"(0|[1-9][0-9]*)(\.[0-9]{1,2})?")
_DATE = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])")
_CATEGORY = re.compile(r"[A-Za-z]+(?:[ -][A-Za-z]+)*")
_DUPLICATE_WORDS = re.compile(r"\b(\w+)\s+\1\b", re.ASCII)
_ISBN = re.compile(
    r"\b(?:ISBN[-\s]?)?(?:97[89][-\s]?)?[0-9]{1,5}[-\s]?[0-9]{1,7}[-\s]?[0-9]{1,7}[-\s]?[0-9X]\b",
    re.IGNORECASE | re.ASCII,
)
_EMAIL = re.compile(r"(?=.*@)(?=.*\.)([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")
_STRONG_PASSWORD = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}"
)


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_description(value: object) -> bool:
    """Non-empty text without leading or trailing whitespace."""
    return _DESCRIPTION.fullmatch(_as_text(value)) is not None


def validate_numeric(value: object) -> bool:
    """Non-negative number: no leading zeros, at most two decimal places."""
    return _NUMERIC.fullmatch(_as_text(value)) is not None


def validate_date(value: object) -> bool:
    """``YYYY-MM-DD`` with month 01-12 and day 01-31 (Feb 30 passes)."""
    return _DATE.fullmatch(_as_text(value)) is not None


def validate_category(value: object) -> bool:
    """Letter runs joined by a single space or hyphen, e.g. ``Self-Help``."""
    return _CATEGORY.fullmatch(_as_text(value)) is not None


def validate_duplicate_words(value: object) -> bool:
    """Return True if the text contains an immediately repeated word.

    Case-sensitive and adjacent-only: ``"the the"`` is found,
    ``"the book the"`` and ``"The the"`` are not.
    """
    return _DUPLICATE_WORDS.search(_as_text(value)) is not None


def validate_isbn(value: object) -> bool:
    """Return True if an ISBN-10 or ISBN-13 appears anywhere in the text."""
    return _ISBN.search(_as_text(value)) is not None


def validate_email(value: object) -> bool:
    return _EMAIL.fullmatch(_as_text(value)) is not None


def validate_strong_password(value: object) -> bool:
    """At least 8 characters with lower, upper, digit and one of ``@$!%*?&``."""
    return _STRONG_PASSWORD.fullmatch(_as_text(value)) is not None


# ---------------------------------------------------------------------------
# Form feedback
# ---------------------------------------------------------------------------


class FeedbackStatus(enum.Enum):
    """Outcome of checking a single form field."""

    EMPTY = "empty"
    VALID = "valid"
    INVALID = "invalid"


VALID_MESSAGE = "✓ Valid"


@dataclass(frozen=True)
class FieldRule:
    validator: Callable[[object], bool]
    message: str


# Form field name -> rule. Title and author share the description contract.
FIELD_RULES: dict[str, FieldRule] = {
    "title": FieldRule(validate_description, "No leading/trailing spaces allowed"),
    "author": FieldRule(validate_description, "No leading/trailing spaces allowed"),
    "pages": FieldRule(validate_numeric, "Must be a positive number"),
    "tag": FieldRule(validate_category, "Letters, spaces, and hyphens only"),
    "date_added": FieldRule(validate_date, "Use YYYY-MM-DD format"),
}


@dataclass(frozen=True)
class FieldFeedback:
    """Feedback for one form field, as shown next to the input."""

    field: str
    value: str
    status: FeedbackStatus
    message: str

    @property
    def is_invalid(self) -> bool:
        return self.status is FeedbackStatus.INVALID


def check_field(field: str, value: object) -> FieldFeedback:
    """Check one form field and describe the result.

    An empty value is neither valid nor invalid: it produces no message,
    so a blank optional input stays neutral.

    Args:
        field: Form field name, one of ``FIELD_RULES``.
        value: Current input value.

    Returns:
        FieldFeedback with status and user-facing message.

    Raises:
        KeyError: If the field has no rule.
    """
    rule = FIELD_RULES[field]
    text = _as_text(value)
    if not text:
        return FieldFeedback(field, text, FeedbackStatus.EMPTY, "")
    if rule.validator(text):
        return FieldFeedback(field, text, FeedbackStatus.VALID, VALID_MESSAGE)
    return FieldFeedback(field, text, FeedbackStatus.INVALID, rule.message)


def validate_fields(values: Mapping[str, object]) -> list[FieldFeedback]:
    """Check every known field present in *values*.

    Returns:
        Feedback entries for the invalid fields only, in ``FIELD_RULES`` order.
    """
    problems: list[FieldFeedback] = []
    for field in FIELD_RULES:
        if field not in values:
            continue
        feedback = check_field(field, values[field])
        if feedback.is_invalid:
            problems.append(feedback)
    return problems
