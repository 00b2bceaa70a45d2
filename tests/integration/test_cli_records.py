"""Integration tests for the record commands through the top-level CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner, Result

from book_vault.cli import cli
from book_vault.search import MARK_OPEN


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, temp_dir: Path, store_path: Path):
    """Run the CLI against a store in temp_dir, ignoring any user config."""

    def _invoke(*args: str, input: str | None = None) -> Result:
        base = ["-c", str(temp_dir / "none.toml"), "-S", str(store_path), "--no-color"]
        return runner.invoke(cli, [*base, *args], input=input)

    return _invoke


@pytest.fixture
def seeded(invoke) -> None:
    result = invoke("seed")
    assert result.exit_code == 0, result.output


def _list_json(invoke, *args: str) -> list[dict]:
    result = invoke("list", "--format", "json", *args)
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestSeed:
    def test_seed_loads_sample_books(self, invoke, store_path: Path) -> None:
        result = invoke("seed")
        assert result.exit_code == 0
        assert "Sample data loaded successfully! (5 books)" in result.output
        assert len(json.loads(store_path.read_text())) == 5

    def test_seed_asks_before_replacing(self, invoke, seeded) -> None:
        invoke("delete", "book_0001", "--yes")
        result = invoke("seed", input="n\n")
        assert result.exit_code == 1
        assert len(_list_json(invoke)) == 4

    def test_seed_on_first_run_from_config(
        self, runner: CliRunner, temp_dir: Path, store_path: Path
    ) -> None:
        config_path = temp_dir / "config.toml"
        config_path.write_text(f'[paths]\nstore = "{store_path}"\n\n[store]\nseed_on_first_run = true\n')
        result = runner.invoke(cli, ["-c", str(config_path), "list", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert len(json.loads(result.output)) == 5


class TestAddEditDelete:
    def test_add(self, invoke, seeded) -> None:
        result = invoke(
            "add",
            "--title",
            "Neuromancer",
            "--author",
            "William Gibson",
            "--pages",
            "271",
            "--tag",
            "Science-Fiction",
            "--date-added",
            "2024-12-10",
        )
        assert result.exit_code == 0, result.output
        assert 'Book "Neuromancer" saved successfully!' in result.output

        records = _list_json(invoke)
        assert len(records) == 6
        added = records[-1]
        assert added["pages"] == 271
        assert added["id"].startswith("book_")
        assert added["createdAt"] == added["updatedAt"]

    def test_add_truncates_fractional_pages(self, invoke) -> None:
        result = invoke(
            "add", "--title", "Essay", "--author", "A", "--pages", "123.45", "--tag", "Misc"
        )
        assert result.exit_code == 0, result.output
        assert _list_json(invoke)[0]["pages"] == 123

    @pytest.mark.parametrize(
        ("option", "value", "message"),
        [
            ("--title", " Dune", "No leading/trailing spaces allowed"),
            ("--pages", "0688", "Must be a positive number"),
            ("--tag", "Sci-Fi 2", "Letters, spaces, and hyphens only"),
            ("--date-added", "2024-13-01", "Use YYYY-MM-DD format"),
        ],
    )
    def test_add_rejects_invalid_field(
        self, invoke, store_path: Path, option: str, value: str, message: str
    ) -> None:
        fields = {
            "--title": "Dune",
            "--author": "Frank Herbert",
            "--pages": "688",
            "--tag": "Science-Fiction",
            "--date-added": "2024-12-06",
        }
        fields[option] = value
        args = [item for pair in fields.items() for item in pair]
        result = invoke("add", *args)
        assert result.exit_code == 1
        assert message in result.output
        assert not store_path.exists()

    def test_add_rejects_empty_title(self, invoke, store_path: Path) -> None:
        result = invoke("add", "--title", "", "--author", "A", "--pages", "1", "--tag", "Misc")
        assert result.exit_code == 1
        assert not store_path.exists()

    def test_edit(self, invoke, seeded) -> None:
        result = invoke("edit", "book_0004", "--pages", "704")
        assert result.exit_code == 0, result.output

        dune = next(r for r in _list_json(invoke) if r["id"] == "book_0004")
        assert dune["pages"] == 704
        assert dune["title"] == "Dune"

    def test_edit_keeps_created_at(self, invoke, seeded) -> None:
        invoke("edit", "book_0001", "--tag", "Classics")
        gatsby = _list_json(invoke)[0]
        assert gatsby["createdAt"] == "2024-12-01T10:00:00Z"
        assert gatsby["updatedAt"] > gatsby["createdAt"]

    def test_edit_nothing_to_change(self, invoke, seeded) -> None:
        result = invoke("edit", "book_0004")
        assert result.exit_code == 1
        assert "Nothing to change" in result.output

    def test_edit_missing_record(self, invoke, seeded) -> None:
        result = invoke("edit", "book_9999", "--pages", "1")
        assert result.exit_code == 1
        assert "Record not found" in result.output

    def test_delete_with_yes(self, invoke, seeded) -> None:
        result = invoke("delete", "book_0002", "--yes")
        assert result.exit_code == 0
        assert [r["id"] for r in _list_json(invoke)] == [
            "book_0001",
            "book_0003",
            "book_0004",
            "book_0005",
        ]

    def test_delete_declined(self, invoke, seeded) -> None:
        result = invoke("delete", "book_0002", input="n\n")
        assert result.exit_code == 0
        assert "Nothing deleted." in result.output
        assert len(_list_json(invoke)) == 5

    def test_delete_missing_record(self, invoke, seeded) -> None:
        result = invoke("delete", "book_9999", "--yes")
        assert result.exit_code == 1


class TestListAndSearch:
    def test_list_status(self, invoke, seeded) -> None:
        result = invoke("list")
        assert result.exit_code == 0
        assert "Showing all records" in result.output
        assert "Gatsby" in result.output

    def test_list_by_tag(self, invoke, seeded) -> None:
        records = _list_json(invoke, "--tag", "Fantasy")
        assert [r["title"] for r in records] == ["The Hobbit"]

    def test_list_sorted(self, invoke, seeded) -> None:
        records = _list_json(invoke, "--sort", "pages-desc")
        assert [r["pages"] for r in records] == [688, 328, 310, 279, 180]

    def test_list_bad_sort(self, invoke, seeded) -> None:
        result = invoke("list", "--sort", "isbn-asc")
        assert result.exit_code == 1
        assert "Unknown sort field" in result.output

    def test_search_literal(self, invoke, seeded) -> None:
        result = invoke("search", "gatsby")
        assert result.exit_code == 0
        assert 'Found 1 matches for "gatsby"' in result.output
        assert "Gatsby" in result.output

    def test_search_joins_arguments(self, invoke, seeded) -> None:
        result = invoke("search", "great", "gatsby", "--format", "json")
        assert [r["id"] for r in json.loads(result.output)] == ["book_0001"]

    def test_search_regex(self, invoke, seeded) -> None:
        result = invoke("search", "^the (great|hob)", "--format", "json")
        assert result.exit_code == 0
        assert [r["id"] for r in json.loads(result.output)] == ["book_0001", "book_0003"]

    def test_search_unbalanced_paren_is_literal(self, invoke, seeded) -> None:
        result = invoke("search", "(", "--format", "json")
        assert result.exit_code == 0
        assert json.loads(result.output) == []

    def test_search_advanced_mode_falls_back_to_literal(self, invoke, seeded) -> None:
        result = invoke("search", "--mode", "advanced", "(", "--format", "json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []

    def test_search_uncompiled_query_exits(self, invoke, seeded, monkeypatch) -> None:
        monkeypatch.setattr("book_vault.search.engine.compile_query", lambda *a, **k: None)
        result = invoke("search", "gatsby")
        assert result.exit_code == 1
        assert "Invalid search pattern" in result.output

    def test_search_literal_mode(self, invoke, seeded) -> None:
        result = invoke("search", "--mode", "literal", "the (great|hob)", "--format", "json")
        assert json.loads(result.output) == []

    def test_search_no_results(self, invoke, seeded) -> None:
        result = invoke("search", "zzzz")
        assert result.exit_code == 0
        assert "Found 0 matches" in result.output
        assert "No books to show." in result.output

    def test_search_with_tag_and_sort(self, invoke, seeded) -> None:
        result = invoke("search", "the", "--tag", "Fantasy", "--format", "json")
        assert [r["title"] for r in json.loads(result.output)] == ["The Hobbit"]

    def test_search_html_report(self, invoke, seeded, temp_dir: Path) -> None:
        report = temp_dir / "results.html"
        result = invoke("search", "orwell", "--format", "html", "-o", str(report))
        assert result.exit_code == 0, result.output
        html = report.read_text()
        assert f"{MARK_OPEN}Orwell</mark>" in html
        assert html.count('<tr class="record"') == 1

    def test_search_html_to_stdout(self, invoke, seeded) -> None:
        result = invoke("search", "dune", "--format", "html")
        assert result.output.startswith("<!DOCTYPE html>")


class TestExportImport:
    def test_export_to_stdout(self, invoke, seeded) -> None:
        result = invoke("export", "-o", "-")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 5
        assert data[0]["dateAdded"] == "2024-12-01"

    def test_export_import_round_trip(self, invoke, seeded, temp_dir: Path) -> None:
        backup = temp_dir / "backup.json"
        assert invoke("export", "-o", str(backup)).exit_code == 0
        before = _list_json(invoke)

        invoke("delete", "book_0003", "--yes")
        result = invoke("import", str(backup), "--yes")
        assert result.exit_code == 0, result.output
        assert "Data imported successfully! (5 books)" in result.output
        assert _list_json(invoke) == before

    def test_import_malformed_keeps_store(self, invoke, seeded, temp_dir: Path) -> None:
        bad = temp_dir / "bad.json"
        bad.write_text('[{"id": "x", "title": "Missing everything"}]')
        result = invoke("import", str(bad), "--yes")
        assert result.exit_code == 2
        assert "Invalid data format" in result.output
        assert len(_list_json(invoke)) == 5

    def test_numeric_text_fields_are_usable_after_import(self, invoke, temp_dir: Path) -> None:
        data = temp_dir / "numeric.json"
        book = {"id": "b1", "title": 1984, "author": "X", "pages": 1, "tag": "T"}
        data.write_text(json.dumps([{**book, "dateAdded": "2024-01-01"}]))
        assert invoke("import", str(data), "--yes").exit_code == 0

        listed = invoke("list")
        assert listed.exit_code == 0, listed.output
        assert "1984" in listed.output

        found = invoke("search", "19", "--format", "json")
        assert found.exit_code == 0, found.output
        assert json.loads(found.output)[0]["title"] == "1984"

        page = invoke("search", "19", "--format", "html")
        assert page.exit_code == 0, page.output
        assert f"{MARK_OPEN}19</mark>84" in page.output

    def test_import_invalid_json(self, invoke, seeded, temp_dir: Path) -> None:
        bad = temp_dir / "bad.json"
        bad.write_text("not json at all")
        result = invoke("import", str(bad), "--yes")
        assert result.exit_code == 2
        assert "valid JSON file" in result.output

    def test_import_asks_before_replacing(self, invoke, seeded, temp_dir: Path) -> None:
        backup = temp_dir / "backup.json"
        backup.write_text("[]")
        result = invoke("import", str(backup), input="n\n")
        assert result.exit_code == 1
        assert len(_list_json(invoke)) == 5


class TestStatsAndValidate:
    def test_stats(self, invoke, seeded) -> None:
        result = invoke("stats")
        assert result.exit_code == 0, result.output
        assert "Overview" in result.output
        assert "Goals" in result.output

    def test_stats_empty_store(self, invoke) -> None:
        result = invoke("stats", "--unit", "hours")
        assert result.exit_code == 0, result.output

    def test_validate_field_valid(self, invoke) -> None:
        result = invoke("validate", "field", "pages", "320")
        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_validate_field_invalid(self, invoke) -> None:
        result = invoke("validate", "field", "date_added", "2024-13-01")
        assert result.exit_code == 1
        assert "Use YYYY-MM-DD format" in result.output

    def test_validate_duplicates(self, invoke) -> None:
        assert invoke("validate", "duplicates", "the the book").exit_code == 1
        assert invoke("validate", "duplicates", "the book").exit_code == 0


class TestGlobalOptions:
    def test_corrupt_store_exits_with_store_error(self, invoke, store_path: Path) -> None:
        store_path.write_text("{broken")
        result = invoke("list")
        assert result.exit_code == 2
        assert "Record store error" in result.output

    def test_invalid_config_exits(self, runner: CliRunner, temp_dir: Path) -> None:
        config_path = temp_dir / "config.toml"
        config_path.write_text('[search]\ndefault_mode = "fuzzy"\n')
        result = runner.invoke(cli, ["-c", str(config_path), "list"])
        assert result.exit_code == 1

    def test_config_search_mode_default(
        self, runner: CliRunner, sample_config: Path, seeded
    ) -> None:
        # sample_config sets default_mode = "literal"
        result = runner.invoke(
            cli, ["-c", str(sample_config), "search", "the (great|hob)", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        for name in ("add", "edit", "delete", "list", "search", "stats", "export", "import"):
            assert name in result.output
