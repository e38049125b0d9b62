"""Tests for registry queries."""

import shutil
import tempfile
from pathlib import Path

import pytest

from catobase.core.exceptions import PathNotFoundError, PatternError
from catobase.core.formatter import format_record
from catobase.core.query import QueryEngine
from catobase.core.registry import RegistryStore


class TestQueryEngine:
    """Test matching registry records by pattern and categories."""

    def setup_method(self):
        """Set up test environment."""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.registry_path = self.temp_dir / ".catodb"
        self.registry_path.write_text(
            "/path/to/file1|Books,Movies|2023-07-01T00:00:00Z\n"
            "/path/to/file2|Music,Games|2023-07-01T00:00:00Z\n"
        )
        self.registry = RegistryStore(self.registry_path)
        self.engine = QueryEngine(self.registry)

    def teardown_method(self):
        """Clean up test environment."""
        if self.temp_dir.exists():
            shutil.rmtree(self.temp_dir)

    def test_pattern_and_category(self):
        """Test a query that matches exactly one record."""
        assert self.engine.get("file1", ["Books"]) == ["/path/to/file1"]

    def test_no_required_categories(self):
        """Test that an empty category list matches on the pattern alone."""
        assert self.engine.get("file", []) == ["/path/to/file1", "/path/to/file2"]

    def test_missing_category(self):
        """Test that a record lacking a required category is excluded."""
        assert self.engine.get("file1", ["Games"]) == []

    def test_every_required_category_must_be_present(self):
        """Test the superset check with several categories in any order."""
        assert self.engine.get("", ["Movies", "Books"]) == ["/path/to/file1"]
        assert self.engine.get("", ["Books", "Music"]) == []

    def test_category_match_is_exact(self):
        """Test that membership is case sensitive and untrimmed."""
        assert self.engine.get("", ["books"]) == []
        assert self.engine.get("", [" Books"]) == []

    def test_pattern_matches_full_path(self):
        """Test that the pattern is searched in the whole path."""
        assert self.engine.get("^/path/to/", []) == ["/path/to/file1", "/path/to/file2"]
        assert self.engine.get("to/file2$", []) == ["/path/to/file2"]

    def test_malformed_lines_are_skipped(self):
        """Test that partial lines are ignored without error."""
        with open(self.registry_path, "a") as f:
            f.write("garbage\n\n/path/to/file3|Books\n")

        assert self.engine.get("file", []) == ["/path/to/file1", "/path/to/file2"]

    def test_duplicates_in_registry_order(self):
        """Test that repeated registrations are all returned."""
        self.registry.append(format_record("/path/to/file1", ["Books"]))

        assert self.engine.get("file1", ["Books"]) == ["/path/to/file1", "/path/to/file1"]

    def test_find_returns_records(self):
        """Test that find exposes categories and timestamps."""
        records = self.engine.find("file2", ["Music"])

        assert len(records) == 1
        assert records[0].categories == ("Music", "Games")
        assert records[0].timestamp == "2023-07-01T00:00:00Z"

    def test_round_trip_of_appended_records(self):
        """Test that appended records are found by their own path and categories."""
        self.registry.append(format_record("/data/report.pdf", ["Work", "Finance"]))

        assert self.engine.get("report", ["Finance", "Work"]) == ["/data/report.pdf"]

    def test_missing_registry(self):
        """Test that querying a missing registry raises PathNotFoundError."""
        engine = QueryEngine(RegistryStore(self.temp_dir / "missing.catodb"))

        with pytest.raises(PathNotFoundError):
            engine.get("file", [])

    def test_missing_registry_reported_before_bad_pattern(self):
        """Test the order of the two checks."""
        engine = QueryEngine(RegistryStore(self.temp_dir / "missing.catodb"))

        with pytest.raises(PathNotFoundError):
            engine.get("file(", [])

    def test_invalid_pattern(self):
        """Test that a malformed pattern raises PatternError."""
        with pytest.raises(PatternError):
            self.engine.get("file(", [])
