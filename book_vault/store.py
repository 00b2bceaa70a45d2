"""JSON-file backed record store."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from book_vault.exceptions import RecordNotFoundError, StoreError, ValidationError
from book_vault.models import EDITABLE_FIELDS, Record, has_required_fields
from book_vault.utils.fileops import atomic_write_text

logger = logging.getLogger(__name__)

# Keys a caller may pass to add()/edit() but which the store always owns.
_STORE_OWNED: frozenset[str] = frozenset({"id", "created_at", "updated_at"})


def now_timestamp() -> str:
    """Current UTC time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


@dataclass(frozen=True)
class StoreEvent:
    """Change notification sent to store subscribers.

    Attributes:
        action: One of ``add``, ``edit``, ``delete``, ``replace``.
        record_id: Affected record, or None for ``replace``.
    """

    action: str
    record_id: str | None = None


StoreHandler = Callable[[StoreEvent], None]


class RecordStore:
    """Ordered record collection persisted as a JSON array.

    Constructed once per process and passed to whatever needs it. Every
    mutation is written to disk before subscribers are notified, and a
    failing subscriber never undoes or blocks the mutation.

    Single-writer: there is no locking, a concurrent writer to the same file
    is silently overwritten.
    """

    def __init__(self, path: Path, *, clock: Callable[[], str] = now_timestamp) -> None:
        self.path = path
        self._clock = clock
        self._records: list[Record] = []
        self._handlers: list[StoreHandler] = []

    # -- persistence ---------------------------------------------------------

    def load(self) -> RecordStore:
        """Read records from disk. A missing file is an empty store.

        Raises:
            StoreError: If the file is not a JSON array of complete records.
        """
        if not self.path.exists():
            logger.debug("No record store at %s, starting empty", self.path)
            self._records = []
            return self

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(self.path, str(e)) from e

        if not isinstance(data, list):
            raise StoreError(self.path, "expected a JSON array of records")
        for index, item in enumerate(data):
            if not has_required_fields(item):
                raise StoreError(self.path, f"record #{index} is missing required fields")

        self._records = [Record.from_dict(item) for item in data]
        logger.debug("Loaded %d records from %s", len(self._records), self.path)
        return self

    def save(self) -> None:
        self._write(self._records)

    def _write(self, records: Sequence[Record]) -> None:
        payload = json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)
        try:
            atomic_write_text(self.path, payload + "\n")
        except OSError as e:
            raise StoreError(self.path, str(e)) from e

    def _commit(self, records: list[Record]) -> None:
        """Write *records* to disk, then make them the in-memory state.

        A failed write leaves memory matching the file on disk.
        """
        self._write(records)
        self._records = records

    # -- reads ---------------------------------------------------------------

    def list(self) -> tuple[Record, ...]:
        """Snapshot of all records in insertion order."""
        return tuple(self._records)

    def get(self, record_id: str) -> Record:
        """Return one record.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        return self._records[self._index_of(record_id)]

    def __len__(self) -> int:
        return len(self._records)

    def tags(self) -> list[str]:
        """Distinct tags in first-seen order."""
        seen: dict[str, None] = {}
        for r in self._records:
            if r.tag:
                seen.setdefault(r.tag, None)
        return list(seen)

    # -- writes --------------------------------------------------------------

    def add(self, fields: Mapping[str, Any]) -> Record:
        """Create a record from *fields*; id and timestamps are assigned here.

        Args:
            fields: ``title``, ``author``, ``pages``, ``tag``, ``date_added``.
                Caller-supplied ids or timestamps are ignored.

        Returns:
            The stored record.

        Raises:
            ValidationError: If *fields* names an unknown field.
        """
        values = self._editable(fields)
        stamp = self._clock()
        record = Record(
            id=self._new_id(),
            title=values.get("title", ""),
            author=values.get("author", ""),
            pages=values.get("pages", 0),
            tag=values.get("tag", ""),
            date_added=values.get("date_added", stamp[:10]),
            created_at=stamp,
            updated_at=stamp,
        )
        self._commit([*self._records, record])
        logger.info("Added record %s", record.id)
        self._notify(StoreEvent("add", record.id))
        return record

    def edit(self, record_id: str, partial: Mapping[str, Any]) -> Record:
        """Merge *partial* into an existing record and bump ``updated_at``.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        index = self._index_of(record_id)
        current = self._records[index]
        stamp = self._clock()
        if current.created_at and stamp < current.created_at:
            stamp = current.created_at
        updated = replace(current, **self._editable(partial), updated_at=stamp)
        records = self._records.copy()
        records[index] = updated
        self._commit(records)
        logger.info("Edited record %s", record_id)
        self._notify(StoreEvent("edit", record_id))
        return updated

    def delete(self, record_id: str) -> None:
        """Remove a record.

        Raises:
            RecordNotFoundError: If no record has this id.
        """
        index = self._index_of(record_id)
        self._commit(self._records[:index] + self._records[index + 1 :])
        logger.info("Deleted record %s", record_id)
        self._notify(StoreEvent("delete", record_id))

    def replace_all(self, records: Iterable[Record]) -> None:
        """Swap the whole collection, e.g. after an import."""
        new_records = list(records)
        ids = [r.id for r in new_records]
        if len(set(ids)) != len(ids):
            raise StoreError(self.path, "record ids must be unique")
        self._commit(new_records)
        logger.info("Replaced store contents with %d records", len(new_records))
        self._notify(StoreEvent("replace"))

    # -- change subscription -------------------------------------------------

    def subscribe(self, handler: StoreHandler) -> None:
        """Call *handler* with a StoreEvent after every successful mutation."""
        self._handlers.append(handler)

    def unsubscribe(self, handler: StoreHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def _notify(self, event: StoreEvent) -> None:
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception("Store change handler failed for %s", event.action)

    # -- helpers -------------------------------------------------------------

    def _index_of(self, record_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        raise RecordNotFoundError(record_id)

    def _new_id(self) -> str:
        existing = {r.id for r in self._records}
        stamp = int(time.time() * 1000)
        candidate = f"book_{stamp}"
        while candidate in existing:
            stamp += 1
            candidate = f"book_{stamp}"
        return candidate

    @staticmethod
    def _editable(fields: Mapping[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for key, value in fields.items():
            if key in _STORE_OWNED:
                continue
            if key not in EDITABLE_FIELDS:
                raise ValidationError(key, value, "unknown record field")
            values[key] = value
        return values
