"""Compile user search text into a safe, case-insensitive matcher."""

from __future__ import annotations

import enum
import logging
import re

logger = logging.getLogger(__name__)

# Characters that make a query look like a power-user pattern.
ADVANCED_TRIGGERS: frozenset[str] = frozenset("*?[(")

MATCH_FLAGS = re.IGNORECASE


class QueryMode(str, enum.Enum):
    """How a search query is interpreted."""

    AUTO = "auto"
    LITERAL = "literal"
    ADVANCED = "advanced"


def detect_mode(query: str) -> QueryMode:
    """Pick literal or advanced interpretation for a raw query.

    A query is treated as a pattern when it contains any of ``* ? [ (``.
    """
    if any(ch in ADVANCED_TRIGGERS for ch in query):
        return QueryMode.ADVANCED
    return QueryMode.LITERAL


def compile_literal(query: str) -> re.Pattern[str] | None:
    """Compile *query* so it only ever matches itself."""
    if not query or not query.strip():
        return None
    return re.compile(re.escape(query), MATCH_FLAGS)


def compile_query(
    query: str,
    mode: QueryMode | str = QueryMode.LITERAL,
    *,
    fallback: bool = True,
) -> re.Pattern[str] | None:
    """Compile a search query.

    Compiled patterns hold no scan position, so one matcher can be reused
    across any number of fields and calls.

    Args:
        query: Raw user query.
        mode: ``literal`` escapes every metacharacter; ``advanced`` compiles
            the query as a regular expression; ``auto`` picks with
            :func:`detect_mode`.
        fallback: When an advanced pattern does not compile, retry it as a
            literal instead of giving up.

    Returns:
        A case-insensitive pattern, or None for a blank query or an
        uncompilable advanced pattern without fallback.
    """
    if not query or not query.strip():
        return None

    mode = QueryMode(mode)
    if mode is QueryMode.AUTO:
        mode = detect_mode(query)

    if mode is QueryMode.LITERAL:
        return compile_literal(query)

    try:
        return re.compile(query, MATCH_FLAGS)
    except re.error as e:
        if not fallback:
            logger.warning("Invalid search pattern %r: %s", query, e)
            return None
        logger.warning("Advanced pattern %r failed (%s), falling back to literal search", query, e)
        return compile_literal(query)


def matches_empty(matcher: re.Pattern[str]) -> bool:
    """Return True if the matcher accepts the empty string.

    Such a pattern (``()``, ``a*``, ``x?``) would match at every position,
    so the search engine treats it as no text filter at all.
    """
    return matcher.fullmatch("") is not None
