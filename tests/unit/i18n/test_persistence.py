"""Tests for g11n.i18n.persistence module."""

from unittest.mock import patch

import pytest

from g11n.i18n.persistence import FileLocalePersistence, InMemoryLocalePersistence

pytestmark = pytest.mark.unit


class TestInMemoryLocalePersistence:
    """Tests for InMemoryLocalePersistence."""

    def test_starts_empty(self):
        assert InMemoryLocalePersistence().get() is None

    def test_initial_value(self):
        assert InMemoryLocalePersistence("fr").get() == "fr"

    def test_set_and_clear(self):
        persistence = InMemoryLocalePersistence()
        assert persistence.set("es") is True
        assert persistence.get() == "es"
        assert persistence.clear() is True
        assert persistence.get() is None


class TestFileLocalePersistence:
    """Tests for FileLocalePersistence."""

    def test_missing_file_reads_none(self, tmp_path):
        assert FileLocalePersistence(tmp_path / "locale").get() is None

    def test_round_trip_creates_parent_directories(self, tmp_path):
        path = tmp_path / "state" / "locale"
        persistence = FileLocalePersistence(path)

        assert persistence.set("fr") is True
        assert path.read_text(encoding="utf-8") == "fr"
        assert FileLocalePersistence(path).get() == "fr"

    def test_blank_file_reads_none(self, tmp_path):
        path = tmp_path / "locale"
        path.write_text("  \n", encoding="utf-8")
        assert FileLocalePersistence(path).get() is None

    def test_clear_removes_file(self, tmp_path):
        path = tmp_path / "locale"
        persistence = FileLocalePersistence(path)
        persistence.set("es")

        assert persistence.clear() is True
        assert not path.exists()
        assert persistence.clear() is True

    def test_write_failure_returns_false(self, tmp_path):
        persistence = FileLocalePersistence(tmp_path / "locale")
        with patch("pathlib.Path.write_text", side_effect=PermissionError("denied")):
            assert persistence.set("fr") is False

    def test_read_failure_returns_none(self, tmp_path):
        path = tmp_path / "locale"
        path.write_text("fr", encoding="utf-8")
        with patch("pathlib.Path.read_text", side_effect=PermissionError("denied")):
            assert FileLocalePersistence(path).get() is None
