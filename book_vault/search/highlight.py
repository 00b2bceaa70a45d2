"""Markup-safe highlighting of search matches."""

from __future__ import annotations

import html
import re
from collections.abc import Iterator

MARK_OPEN = '<mark class="search-highlight" aria-label="Search match">'
MARK_CLOSE = "</mark>"

# Ampersand first so entities inserted by later steps are not re-escaped.
_ESCAPES: tuple[tuple[str, str], ...] = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)

_MARK_RE = re.compile(re.escape(MARK_OPEN) + r"(.*?)" + re.escape(MARK_CLOSE), re.DOTALL)


def escape_html(value: object) -> str:
    """Escape text for embedding in HTML. None becomes an empty string."""
    text = "" if value is None else str(value)
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


def iter_match_spans(text: str, matcher: re.Pattern[str] | None) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` of every non-empty, non-overlapping match."""
    if matcher is None or not text:
        return
    for m in matcher.finditer(text):
        if m.end() > m.start():
            yield m.start(), m.end()


def count_matches(text: str, matcher: re.Pattern[str] | None) -> int:
    return sum(1 for _ in iter_match_spans(text, matcher))


def highlight(text: str | None, matcher: re.Pattern[str] | None) -> str:
    """Render *text* as HTML with every match wrapped in a highlight mark.

    Matching runs over the raw text and each segment is escaped on output.
    The escaped HTML is never rescanned, so a query such as ``amp`` or
    ``lt`` only marks those letters where the cell text itself contains
    them, and a match can never cut through an entity such as ``&amp;``.

    Args:
        text: Raw cell text.
        matcher: Compiled query, or None for no highlighting.

    Returns:
        Escaped markup. With no matcher this is exactly ``escape_html(text)``.
    """
    raw = text or ""
    if matcher is None or not raw:
        return escape_html(raw)

    parts: list[str] = []
    pos = 0
    for start, end in iter_match_spans(raw, matcher):
        parts.append(escape_html(raw[pos:start]))
        parts.append(MARK_OPEN + escape_html(raw[start:end]) + MARK_CLOSE)
        pos = end
    parts.append(escape_html(raw[pos:]))
    return "".join(parts)


def strip_highlights(markup: str) -> str:
    """Undo :func:`highlight`: drop every mark and return the plain text."""
    return html.unescape(_MARK_RE.sub(r"\1", markup))
