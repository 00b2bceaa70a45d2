"""Import, export and sample-data loading."""

from __future__ import annotations

import json
import logging
from datetime import date
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING

from book_vault.exceptions import ImportFormatError, ImportParseError
from book_vault.models import Record, has_required_fields

if TYPE_CHECKING:
    from collections.abc import Iterable

    from book_vault.store import RecordStore

logger = logging.getLogger(__name__)


def export_filename(today: date | None = None) -> str:
    """Default download name, ``book-vault-YYYY-MM-DD.json``."""
    today = today or date.today()
    return f"book-vault-{today.isoformat()}.json"


def export_records(records: Iterable[Record]) -> str:
    """Serialize records as a pretty-printed JSON array."""
    return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)


def parse_records(text: str) -> list[Record]:
    """Parse and structurally check import data.

    Only the presence of the required keys is checked; field contents are
    not run through the validators.

    Raises:
        ImportParseError: If *text* is not valid JSON.
        ImportFormatError: If the data is not an array of complete records.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportParseError(str(e)) from e

    if not isinstance(data, list):
        raise ImportFormatError("expected a JSON array")

    for index, item in enumerate(data):
        if not has_required_fields(item):
            raise ImportFormatError("missing required fields", index=index)

    records = [Record.from_dict(item) for item in data]
    ids = [r.id for r in records]
    if len(set(ids)) != len(ids):
        raise ImportFormatError("duplicate record ids")
    return records


def import_into(store: RecordStore, text: str) -> int:
    """Replace the store contents with the records in *text*.

    All-or-nothing: nothing is written unless every record passes.

    Returns:
        Number of records imported.
    """
    records = parse_records(text)
    store.replace_all(records)
    logger.info("Imported %d records", len(records))
    return len(records)


def load_seed_text(path: Path | None = None) -> str:
    """Read sample data from *path*, or the bundled ``seed.json``."""
    if path is not None:
        return path.read_text(encoding="utf-8")
    return resources.files("book_vault").joinpath("seed.json").read_text(encoding="utf-8")


def load_seed(store: RecordStore, path: Path | None = None) -> int:
    """Load sample data into the store, validated like an import."""
    return import_into(store, load_seed_text(path))
