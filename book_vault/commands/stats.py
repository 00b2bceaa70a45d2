"""Show collection statistics."""

from __future__ import annotations

from datetime import date, timedelta

import click
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from book_vault.cli import Context, pass_context
from book_vault.stats import (
    DEFAULT_MONTHLY_PAGES_TARGET,
    DEFAULT_YEARLY_BOOKS_TARGET,
    PAGES_PER_UNIT,
    Stats,
    chart_heights,
    compute_stats,
    convert_pages,
)
from book_vault.utils.output import console, create_table


def _format_amount(pages: int, unit: str) -> str:
    if unit == "pages":
        return f"{pages:,} pages"
    return f"{convert_pages(pages, unit):,.1f} {unit}"


def _summary_table(stats: Stats, unit: str) -> Table:
    table = create_table(title="Overview", show_header=True, header_style="bold")
    table.add_column("Total Books", justify="right")
    table.add_column("Total Reading", justify="right")
    table.add_column("Avg Pages", justify="right")
    table.add_column("Top Category")
    table.add_row(
        f"{stats.total_records:,}",
        _format_amount(stats.total_pages, unit),
        f"{stats.average_pages:,}",
        escape(stats.top_tag),
    )
    return table


def _category_table(stats: Stats, unit: str) -> Table:
    table = create_table(title="Top Categories", show_header=True, header_style="bold")
    table.add_column("Category", style="book.tag")
    table.add_column("Books", justify="right")
    table.add_column("Reading", justify="right")
    for cat in stats.category_breakdown:
        books = f"{cat.count} book{'s' if cat.count > 1 else ''}"
        table.add_row(escape(cat.tag), books, _format_amount(cat.pages, unit))
    return table


def _trend_table(stats: Stats, today: date) -> Table:
    """Last-7-days chart drawn as horizontal bars."""
    table = create_table(title="Added in the last 7 days", show_header=False, box=None)
    table.add_column("Day")
    table.add_column("Bar")
    table.add_column("Count", justify="right")
    heights = chart_heights(stats.last_7_days)
    for offset, (count, height) in enumerate(zip(stats.last_7_days, heights)):
        day = today - timedelta(days=6 - offset)
        # Heights range 10..90; one block per 5 units
        bar = "█" * int(height // 5) if count else "·"
        table.add_row(day.strftime("%a %m-%d"), f"[chart.bar]{bar}[/chart.bar]", str(count))
    return table


def _goals_table(stats: Stats) -> Table:
    table = create_table(title="Goals", show_header=False, box=None)
    table.add_column("Goal")
    table.add_column("Progress", width=30)
    table.add_column("Status")
    monthly = stats.monthly_goal
    yearly = stats.yearly_goal
    table.add_row(
        "Monthly pages",
        ProgressBar(total=100, completed=monthly.percent, width=30),
        f"{monthly.current:,} / {monthly.target:,} pages ({round(monthly.percent)}%)",
    )
    table.add_row(
        "Yearly books",
        ProgressBar(total=100, completed=yearly.percent, width=30),
        f"{yearly.current}/{yearly.target} books ({round(yearly.percent)}%)",
    )
    return table


@click.command("stats")
@click.option(
    "--unit",
    "-u",
    type=click.Choice(list(PAGES_PER_UNIT)),
    default=None,
    help="Show reading amounts in pages, chapters (20 pages) or hours (50 pages)",
)
@pass_context
def cli(ctx: Context, unit: str | None) -> None:
    """Show the statistics dashboard.

    \b
    Examples:
      book-vault stats
      book-vault stats --unit hours
    """
    store = ctx.get_store()
    config = ctx.config
    unit = unit or (config.page_unit if config else "pages")
    today = date.today()

    stats = compute_stats(
        store.list(),
        today=today,
        monthly_pages_target=(
            config.monthly_pages_target if config else DEFAULT_MONTHLY_PAGES_TARGET
        ),
        yearly_books_target=config.yearly_books_target if config else DEFAULT_YEARLY_BOOKS_TARGET,
    )

    console.print(_summary_table(stats, unit))
    if stats.category_breakdown:
        console.print(_category_table(stats, unit))
    console.print(_trend_table(stats, today))
    console.print(_goals_table(stats))
    console.print(f"[status]{stats.target_status}[/status]")

    if stats.recent:
        lines = [
            f"[book.title]{escape(r.title)}[/book.title]  {r.pages} pages • {r.date_added}"
            for r in stats.recent
        ]
        console.print(Panel("\n".join(lines), title="Recently added", expand=False))
