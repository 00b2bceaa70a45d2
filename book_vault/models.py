"""Record data model and its JSON form."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Keys every stored or imported record must carry (structural check only).
REQUIRED_FIELDS: tuple[str, ...] = ("id", "title", "author", "pages", "tag", "dateAdded")

# Record attribute -> JSON key. The JSON form keeps the camelCase keys of
# existing vault exports.
_ATTR_TO_KEY: dict[str, str] = {
    "id": "id",
    "title": "title",
    "author": "author",
    "pages": "pages",
    "tag": "tag",
    "date_added": "dateAdded",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}

# Fields a caller may change on edit. id and timestamps belong to the store.
EDITABLE_FIELDS: frozenset[str] = frozenset({"title", "author", "pages", "tag", "date_added"})


@dataclass(frozen=True)
class Record:
    """One catalog entry.

    Records are immutable: the store replaces a record on edit instead of
    mutating it, so a list handed out earlier stays a consistent snapshot.

    Attributes:
        id: Unique, immutable identifier assigned by the store.
        title: Book title.
        author: Author name.
        pages: Page count (>= 0).
        tag: Category label.
        date_added: ``YYYY-MM-DD`` date the book was added.
        created_at: ISO-8601 creation timestamp (None for seed data without one).
        updated_at: ISO-8601 timestamp of the last edit.
    """

    id: str
    title: str
    author: str
    pages: int
    tag: str
    date_added: str
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form. Absent timestamps are omitted."""
        data: dict[str, Any] = {}
        for attr, key in _ATTR_TO_KEY.items():
            value = getattr(self, attr)
            if value is None and attr in ("created_at", "updated_at"):
                continue
            data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Record:
        """Build a Record from its JSON form.

        Text fields are coerced to str, so a hand-edited file holding
        ``"title": 1984`` loads as the title ``"1984"``.

        Raises:
            KeyError: If a required field is missing.
        """
        return cls(
            id=str(data["id"]),
            title=_as_text(data["title"]),
            author=_as_text(data["author"]),
            pages=data["pages"],
            tag=_as_text(data["tag"]),
            date_added=_as_text(data["dateAdded"]),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def cells(self) -> dict[str, str]:
        """Displayed cell text, in column order."""
        return {
            "title": _as_text(self.title),
            "author": _as_text(self.author),
            "pages": _as_text(self.pages),
            "tag": _as_text(self.tag),
            "date_added": _as_text(self.date_added),
        }


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def has_required_fields(data: object) -> bool:
    """Return True if *data* is a mapping with every required key present."""
    return isinstance(data, dict) and all(key in data for key in REQUIRED_FIELDS)
