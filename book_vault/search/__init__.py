"""Query compilation, highlighting and record search."""

from book_vault.search.compiler import QueryMode, compile_query, detect_mode
from book_vault.search.engine import (
    STATUS_ALL,
    STATUS_INVALID,
    MatchResult,
    SearchSession,
    highlight_record,
    parse_sort_spec,
    search,
    sort_records,
)
from book_vault.search.highlight import (
    MARK_CLOSE,
    MARK_OPEN,
    escape_html,
    highlight,
    strip_highlights,
)

__all__ = [
    "MARK_CLOSE",
    "MARK_OPEN",
    "STATUS_ALL",
    "STATUS_INVALID",
    "MatchResult",
    "QueryMode",
    "SearchSession",
    "compile_query",
    "detect_mode",
    "escape_html",
    "highlight",
    "highlight_record",
    "parse_sort_spec",
    "search",
    "sort_records",
    "strip_highlights",
]
