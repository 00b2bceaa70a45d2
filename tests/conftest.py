"""Shared pytest fixtures."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from book_vault.models import Record
from book_vault.store import RecordStore

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    path = Path(tempfile.mkdtemp())
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def sample_config(temp_dir: Path) -> Path:
    """Create a sample config file pointing at a store inside temp_dir."""
    config_path = temp_dir / "config.toml"
    config_path.write_text(f"""[paths]
store = "{temp_dir / 'records.json'}"

[display]
colored_output = false
page_unit = "hours"

[search]
default_mode = "literal"

[goals]
monthly_pages_target = 1500
yearly_books_target = 12
""")
    return config_path


@pytest.fixture
def sample_records() -> list[Record]:
    """Five books covering every sortable field."""
    return [
        Record(
            id="book_0001",
            title="The Great Gatsby",
            author="F. Scott Fitzgerald",
            pages=180,
            tag="Classic",
            date_added="2024-12-01",
            created_at="2024-12-01T10:00:00Z",
            updated_at="2024-12-01T10:00:00Z",
        ),
        Record(
            id="book_0002",
            title="1984",
            author="George Orwell",
            pages=328,
            tag="Dystopian",
            date_added="2024-12-02",
            created_at="2024-12-02T10:00:00Z",
            updated_at="2024-12-02T10:00:00Z",
        ),
        Record(
            id="book_0003",
            title="The Hobbit",
            author="J.R.R. Tolkien",
            pages=310,
            tag="Fantasy",
            date_added="2024-12-05",
            created_at="2024-12-05T10:00:00Z",
            updated_at="2024-12-05T10:00:00Z",
        ),
        Record(
            id="book_0004",
            title="Dune",
            author="Frank Herbert",
            pages=688,
            tag="Science-Fiction",
            date_added="2024-12-06",
        ),
        Record(
            id="book_0005",
            title="Pride and Prejudice",
            author="Jane Austen",
            pages=279,
            tag="Romance",
            date_added="2024-12-09",
        ),
    ]


@pytest.fixture
def store_path(temp_dir: Path) -> Path:
    return temp_dir / "records.json"


@pytest.fixture
def store(store_path: Path, sample_records: list[Record]) -> RecordStore:
    """A store persisted under temp_dir holding sample_records."""
    s = RecordStore(store_path)
    s.replace_all(sample_records)
    return s
