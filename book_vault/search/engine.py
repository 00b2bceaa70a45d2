"""Search and category filtering over a snapshot of records."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from book_vault.models import Record
from book_vault.search.compiler import QueryMode, compile_query, matches_empty
from book_vault.search.highlight import count_matches, highlight

if TYPE_CHECKING:
    from book_vault.store import RecordStore, StoreEvent

logger = logging.getLogger(__name__)

STATUS_ALL = "Showing all records"
STATUS_INVALID = "Invalid search pattern"

# Fields the matcher is tested against to decide visibility.
SEARCH_FIELDS: tuple[str, ...] = ("title", "author", "tag")

# Sortable fields, keyed by the names used in sort specs ("pages-desc").
SORT_FIELDS: tuple[str, ...] = ("title", "author", "pages", "tag", "dateAdded")


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one search/filter pass.

    Attributes:
        visible_records: Records to display, in input order.
        status_message: User-facing summary line.
        match_count: Total matches across every displayed cell of the visible
            rows, or None when no text query is active.
        matcher: Compiled query used for highlighting, or None.
        valid: False when the query did not compile.
    """

    visible_records: tuple[Record, ...]
    status_message: str
    match_count: int | None = None
    matcher: re.Pattern[str] | None = None
    valid: bool = True


def _matches_record(record: Record, matcher: re.Pattern[str]) -> bool:
    cells = record.cells()
    return any(matcher.search(cells[f]) for f in SEARCH_FIELDS)


def _resolve_matcher(query: str, mode: QueryMode | str) -> tuple[re.Pattern[str] | None, bool]:
    """Compile *query* for the engine.

    Returns:
        Tuple of (matcher, valid). ``valid`` is False only when a non-blank
        query produced no matcher.
    """
    matcher = compile_query(query, QueryMode(mode))
    if matcher is None:
        return None, not query.strip()
    if matches_empty(matcher):
        logger.debug("Pattern %r matches the empty string, ignoring it", query)
        return None, True
    return matcher, True


def search(
    query: str | None,
    category_filter: str | None,
    records: Iterable[Record],
    *,
    mode: QueryMode | str = QueryMode.AUTO,
) -> MatchResult:
    """Filter *records* by a text query and an optional exact category.

    Args:
        query: Raw search text. Blank means no text filter.
        category_filter: Exact tag to keep, or None/"" for every tag.
        records: Snapshot of records to search. Never modified.
        mode: Query interpretation, see :class:`QueryMode`.

    Returns:
        MatchResult with the visible records and status message. An invalid
        pattern returns the input records unchanged with ``valid=False``.
    """
    snapshot = tuple(records)
    query = (query or "").strip()
    category = category_filter or ""

    if not query and not category:
        return MatchResult(visible_records=snapshot, status_message=STATUS_ALL)

    matcher, valid = _resolve_matcher(query, mode)
    if not valid:
        return MatchResult(visible_records=snapshot, status_message=STATUS_INVALID, valid=False)

    visible = snapshot
    if matcher is not None:
        visible = tuple(r for r in visible if _matches_record(r, matcher))
    if category:
        visible = tuple(r for r in visible if r.tag == category)

    if matcher is not None:
        match_count = sum(
            count_matches(cell, matcher) for r in visible for cell in r.cells().values()
        )
        status = f'Found {match_count} matches for "{query}"'
        return MatchResult(
            visible_records=visible,
            status_message=status,
            match_count=match_count,
            matcher=matcher,
        )

    if category:
        status = f"Showing {len(visible)} of {len(snapshot)} books"
    else:
        # Query reduced to an empty effective pattern.
        status = STATUS_ALL
    return MatchResult(visible_records=visible, status_message=status)


def highlight_record(record: Record, matcher: re.Pattern[str] | None) -> dict[str, str]:
    """Return highlighted markup for every displayed cell of *record*."""
    return {name: highlight(text, matcher) for name, text in record.cells().items()}


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def _pages_key(record: Record) -> int:
    try:
        return int(record.pages)
    except (TypeError, ValueError):
        return 0


def _date_key(record: Record) -> date:
    try:
        return date.fromisoformat(record.date_added)
    except (TypeError, ValueError):
        return date.min


def _sort_key(field: str):
    if field == "pages":
        return _pages_key
    if field == "dateAdded":
        return _date_key
    attr = {"title": "title", "author": "author", "tag": "tag"}[field]
    return lambda r: str(getattr(r, attr) or "").lower()


def parse_sort_spec(spec: str) -> tuple[str, str]:
    """Parse a sort selector like ``pages-desc`` into ``(field, direction)``.

    A bare field name sorts ascending.

    Raises:
        ValueError: If the field or direction is unknown.
    """
    field, _, direction = spec.partition("-")
    direction = direction or "asc"
    if field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {field} (available: {', '.join(SORT_FIELDS)})")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unknown sort direction: {direction} (use asc or desc)")
    return field, direction


def sort_records(records: Sequence[Record], field: str, direction: str = "asc") -> list[Record]:
    """Return *records* sorted by *field*; text compares case-insensitively.

    Equal keys keep their input order in both directions.
    """
    if field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {field}")
    return sorted(records, key=_sort_key(field), reverse=direction == "desc")


# ---------------------------------------------------------------------------
# Stateful session
# ---------------------------------------------------------------------------


class SearchSession:
    """Keeps the active query and the last result for an interactive front end.

    The session recomputes from scratch on every update and whenever the
    store reports a change. An invalid pattern keeps the previously visible
    records instead of blanking the list.
    """

    def __init__(self, store: RecordStore, *, mode: QueryMode | str = QueryMode.AUTO) -> None:
        self.store = store
        self.query = ""
        self.category = ""
        self.mode = QueryMode(mode)
        self.result = search("", None, store.list())
        store.subscribe(self._on_store_change)

    def update(
        self,
        query: str | None = None,
        category: str | None = None,
        mode: QueryMode | str | None = None,
    ) -> MatchResult:
        """Apply new input values (None keeps the current one) and re-run."""
        if query is not None:
            self.query = query
        if category is not None:
            self.category = category
        if mode is not None:
            self.mode = QueryMode(mode)
        return self.refresh()

    def clear(self) -> MatchResult:
        """Drop the text query, keeping the category filter."""
        return self.update(query="")

    def refresh(self) -> MatchResult:
        result = search(self.query, self.category, self.store.list(), mode=self.mode)
        if not result.valid:
            result = MatchResult(
                visible_records=self.result.visible_records,
                status_message=result.status_message,
                valid=False,
            )
        self.result = result
        return result

    def close(self) -> None:
        self.store.unsubscribe(self._on_store_change)

    def _on_store_change(self, event: StoreEvent) -> None:
        logger.debug("Store changed (%s %s), refreshing search", event.action, event.record_id)
        self.refresh()
