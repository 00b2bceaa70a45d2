"""Unit tests for the record model."""

from __future__ import annotations

import dataclasses

import pytest

from book_vault.models import Record, has_required_fields


def test_to_dict_uses_json_keys(sample_records: list[Record]) -> None:
    data = sample_records[0].to_dict()
    assert data == {
        "id": "book_0001",
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "pages": 180,
        "tag": "Classic",
        "dateAdded": "2024-12-01",
        "createdAt": "2024-12-01T10:00:00Z",
        "updatedAt": "2024-12-01T10:00:00Z",
    }


def test_to_dict_omits_missing_timestamps(sample_records: list[Record]) -> None:
    data = sample_records[3].to_dict()
    assert "createdAt" not in data
    assert "updatedAt" not in data


def test_from_dict_round_trip(sample_records: list[Record]) -> None:
    for record in sample_records:
        assert Record.from_dict(record.to_dict()) == record


def test_from_dict_missing_field() -> None:
    with pytest.raises(KeyError):
        Record.from_dict({"id": "x", "title": "T"})


def test_from_dict_coerces_text_fields() -> None:
    record = Record.from_dict(
        {"id": 7, "title": 1984, "author": None, "pages": 328, "tag": 3.5, "dateAdded": 20240101}
    )
    assert record.id == "7"
    assert record.title == "1984"
    assert record.author == ""
    assert record.tag == "3.5"
    assert record.date_added == "20240101"
    assert record.pages == 328


def test_cells_stringify_non_text_values() -> None:
    record = Record("b1", 1984, "A", 10, None, "2024-01-01")  # type: ignore[arg-type]
    assert record.cells()["title"] == "1984"
    assert record.cells()["tag"] == ""


def test_records_are_immutable(sample_records: list[Record]) -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        sample_records[0].title = "Changed"  # type: ignore[misc]


def test_cells_in_column_order(sample_records: list[Record]) -> None:
    assert sample_records[1].cells() == {
        "title": "1984",
        "author": "George Orwell",
        "pages": "328",
        "tag": "Dystopian",
        "date_added": "2024-12-02",
    }


@pytest.mark.parametrize(
    ("data", "expected"),
    [
        ({"id": 1, "title": "", "author": "", "pages": 0, "tag": "", "dateAdded": ""}, True),
        ({"id": 1, "title": "", "author": "", "pages": 0, "tag": ""}, False),
        (["id", "title"], False),
        (None, False),
    ],
)
def test_has_required_fields(data: object, expected: bool) -> None:
    assert has_required_fields(data) is expected
