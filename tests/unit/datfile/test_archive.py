"""Tests for datfile/archive.py module."""

import zipfile
from pathlib import Path

import pytest

from dumpcheck.datfile.archive import (
    ArchiveCleanupError,
    DatabaseArchiveError,
    database_present,
    extract_database_archive,
)


def _make_zip(path: Path, members: dict[str, str]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return path


class TestExtractDatabaseArchive:
    """Tests for extract_database_archive()."""

    def test_extracts_members(self, tmp_path: Path) -> None:
        archive = _make_zip(
            tmp_path / "db.zip",
            {"Nintendo - Game Boy.dat": "<datafile/>", "sub/Sega.dat": "<datafile/>"},
        )
        destination = tmp_path / "db"
        count = extract_database_archive(archive, destination)
        assert count == 2
        assert (destination / "Nintendo - Game Boy.dat").is_file()
        assert (destination / "sub" / "Sega.dat").is_file()
        assert archive.exists()

    def test_delete_archive(self, tmp_path: Path) -> None:
        archive = _make_zip(tmp_path / "db.zip", {"a.dat": "<datafile/>"})
        extract_database_archive(archive, tmp_path / "db", delete_archive=True)
        assert not archive.exists()

    def test_cleanup_failure_keeps_extraction(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A delete failure after extraction still reports the extracted count."""
        archive = _make_zip(
            tmp_path / "db.zip", {"a.dat": "<datafile/>", "b.dat": "<datafile/>"}
        )

        def refuse_unlink(self, missing_ok=False):
            raise PermissionError("read-only medium")

        monkeypatch.setattr(Path, "unlink", refuse_unlink)
        with pytest.raises(ArchiveCleanupError, match="could not delete") as excinfo:
            extract_database_archive(archive, tmp_path / "db", delete_archive=True)

        assert excinfo.value.extracted == 2
        assert isinstance(excinfo.value, DatabaseArchiveError)
        assert (tmp_path / "db" / "a.dat").is_file()
        assert archive.exists()

    def test_missing_archive(self, tmp_path: Path) -> None:
        with pytest.raises(DatabaseArchiveError, match="not found"):
            extract_database_archive(tmp_path / "db.zip", tmp_path / "db")

    def test_not_a_zip(self, tmp_path: Path) -> None:
        archive = tmp_path / "db.zip"
        archive.write_text("not a zip")
        with pytest.raises(DatabaseArchiveError, match="Not a valid zip"):
            extract_database_archive(archive, tmp_path / "db")

    def test_refuses_path_traversal(self, tmp_path: Path) -> None:
        """Members escaping the destination should abort extraction."""
        archive = _make_zip(tmp_path / "db.zip", {"../evil.dat": "x"})
        destination = tmp_path / "db"
        with pytest.raises(DatabaseArchiveError, match="escapes"):
            extract_database_archive(archive, destination)
        assert not (tmp_path / "evil.dat").exists()
        assert not destination.exists()


class TestDatabasePresent:
    """Tests for database_present()."""

    def test_present(self, tmp_path: Path) -> None:
        assert database_present(tmp_path)

    def test_absent(self, tmp_path: Path) -> None:
        assert not database_present(tmp_path / "db")

    def test_file_is_not_a_database(self, tmp_path: Path) -> None:
        path = tmp_path / "db"
        path.write_text("")
        assert not database_present(path)
