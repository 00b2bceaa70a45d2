"""Aggregate statistics for the dashboard."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from book_vault.models import Record

NO_TAG = "—"
UNTAGGED = "Untagged"

DEFAULT_MONTHLY_PAGES_TARGET = 2000
DEFAULT_YEARLY_BOOKS_TARGET = 24

# Reading-time conversions, in pages per unit.
PAGES_PER_UNIT: dict[str, int] = {
    "pages": 1,
    "chapters": 20,
    "hours": 50,
}

CHART_MAX_HEIGHT = 80
CHART_MIN_HEIGHT = 10


@dataclass(frozen=True)
class CategorySummary:
    tag: str
    count: int
    pages: int


@dataclass(frozen=True)
class GoalProgress:
    """Progress toward one reading goal."""

    current: int
    target: int

    @property
    def percent(self) -> float:
        """Progress percentage, capped at 100."""
        if self.target <= 0:
            return 100.0
        return min(self.current / self.target * 100, 100.0)

    @property
    def achieved(self) -> bool:
        return self.current >= self.target


@dataclass(frozen=True)
class Stats:
    """Dashboard figures for a record collection."""

    total_records: int
    total_pages: int
    average_pages: int
    top_tag: str
    category_breakdown: list[CategorySummary] = field(default_factory=list)
    last_7_days: list[int] = field(default_factory=list)
    recent: list[Record] = field(default_factory=list)
    month_pages: int = 0
    monthly_goal: GoalProgress = GoalProgress(0, DEFAULT_MONTHLY_PAGES_TARGET)
    yearly_goal: GoalProgress = GoalProgress(0, DEFAULT_YEARLY_BOOKS_TARGET)

    @property
    def target_status(self) -> str:
        """Pages still missing for the monthly target, or the surplus."""
        remaining = self.monthly_goal.target - self.monthly_goal.current
        if remaining > 0:
            return f"{remaining} pages remaining to reach target"
        return f"Target exceeded by {abs(remaining)} pages!"


def _pages(record: Record) -> int:
    try:
        return int(record.pages or 0)
    except (TypeError, ValueError):
        return 0


def tag_counts(records: Sequence[Record]) -> dict[str, int]:
    """Count records per tag, in first-seen order. Blank tags count as Untagged."""
    counts: dict[str, int] = {}
    for r in records:
        tag = r.tag or UNTAGGED
        counts[tag] = counts.get(tag, 0) + 1
    return counts


def top_tag(records: Sequence[Record]) -> str:
    """Most frequent tag. On a tie the tag seen later wins."""
    best = NO_TAG
    best_count = 0
    for tag, count in tag_counts(records).items():
        if count >= best_count:
            best, best_count = tag, count
    return best


def category_breakdown(records: Sequence[Record], limit: int = 3) -> list[CategorySummary]:
    """Top *limit* tags by record count with their page totals."""
    counts = tag_counts(records)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]
    return [
        CategorySummary(
            tag=tag,
            count=count,
            pages=sum(_pages(r) for r in records if (r.tag or UNTAGGED) == tag),
        )
        for tag, count in ranked
    ]


def last_7_days(records: Sequence[Record], today: date) -> list[int]:
    """Records added on each of the 7 days ending *today*, oldest first."""
    days = [(today - timedelta(days=offset)).isoformat() for offset in range(6, -1, -1)]
    return [sum(1 for r in records if r.date_added == day) for day in days]


def recent_records(records: Sequence[Record], limit: int = 3) -> list[Record]:
    """Most recently added records, newest first."""
    return sorted(records, key=lambda r: r.date_added or "", reverse=True)[:limit]


def pages_in_month(records: Sequence[Record], today: date) -> int:
    prefix = today.strftime("%Y-%m-")
    return sum(_pages(r) for r in records if (r.date_added or "").startswith(prefix))


def chart_heights(values: Sequence[int]) -> list[float]:
    """Bar heights for the trend chart, scaled to the largest value."""
    peak = max([*values, 1])
    return [v / peak * CHART_MAX_HEIGHT + CHART_MIN_HEIGHT for v in values]


def convert_pages(pages: int, unit: str) -> float:
    """Convert a page count to chapters or reading hours.

    Raises:
        ValueError: If *unit* is unknown.
    """
    if unit not in PAGES_PER_UNIT:
        raise ValueError(f"Unknown unit: {unit} (available: {', '.join(PAGES_PER_UNIT)})")
    return pages / PAGES_PER_UNIT[unit]


def compute_stats(
    records: Sequence[Record],
    *,
    today: date | None = None,
    monthly_pages_target: int = DEFAULT_MONTHLY_PAGES_TARGET,
    yearly_books_target: int = DEFAULT_YEARLY_BOOKS_TARGET,
) -> Stats:
    """Compute every dashboard figure for *records*.

    Args:
        records: Snapshot of the collection.
        today: Reference day for the 7-day trend and the monthly goal.
        monthly_pages_target: Pages-per-month goal.
        yearly_books_target: Books-per-year goal.
    """
    today = today or date.today()
    total = len(records)
    total_pages = sum(_pages(r) for r in records)
    month_pages = pages_in_month(records, today)
    return Stats(
        total_records=total,
        total_pages=total_pages,
        average_pages=int(total_pages / total + 0.5) if total else 0,
        top_tag=top_tag(records),
        category_breakdown=category_breakdown(records),
        last_7_days=last_7_days(records, today),
        recent=recent_records(records),
        month_pages=month_pages,
        monthly_goal=GoalProgress(month_pages, monthly_pages_target),
        yearly_goal=GoalProgress(total, yearly_books_target),
    )
