"""Tests for scanner/orchestrator.py module."""

from pathlib import Path

import pytest

from dumpcheck.core.hashing import DEFAULT_CHUNK_SIZE, FileHashError
from dumpcheck.datfile.index import ReferenceIndex
from dumpcheck.domain.enums import MatchStatus, ScanType
from dumpcheck.domain.models import EMPTY_DIGEST, NO_MATCH, NOT_APPLICABLE
from dumpcheck.logging.context import get_scan_context
from dumpcheck.scanner import orchestrator as orchestrator_module
from dumpcheck.scanner.orchestrator import (
    ScanOrchestrator,
    TargetNotFoundError,
    format_progress_label,
)

ABC_MD5 = "902fbdd2b1df0c4f70b4a5d23525e932"


@pytest.fixture
def index() -> ReferenceIndex:
    """Index naming b"ABC" GameX."""
    idx = ReferenceIndex()
    idx.add(ABC_MD5, "GameX")
    return idx


class RecordingProgress:
    """Collects on_hash_progress calls and the log context seen at each."""

    def __init__(self) -> None:
        self.calls: list[tuple[int, int, str, str]] = []

    def on_hash_progress(
        self, position: int, total: int, label: str, display_path: str
    ) -> None:
        self.calls.append((position, total, label, display_path))


class TestFormatProgressLabel:
    """Tests for format_progress_label()."""

    def test_pads_to_width_of_total(self) -> None:
        assert format_progress_label(7, 100) == "  7/100"
        assert format_progress_label(100, 100) == "100/100"

    def test_single_digit_total(self) -> None:
        assert format_progress_label(1, 3) == "1/3"

    def test_labels_share_width(self) -> None:
        labels = {len(format_progress_label(i, 1234)) for i in range(1, 1235)}
        assert labels == {9}


class TestDiscoverFiles:
    """Tests for ScanOrchestrator.discover_files()."""

    def test_single_file(self, tmp_path: Path) -> None:
        path = tmp_path / "game.gb"
        path.write_bytes(b"x")
        assert ScanOrchestrator().discover_files(path) == [path]

    def test_directory_in_sorted_order(self, tmp_path: Path) -> None:
        for name in ("C.rom", "a.rom", "B.rom"):
            (tmp_path / name).write_bytes(b"x")
        names = [p.name for p in ScanOrchestrator().discover_files(tmp_path)]
        assert names == ["a.rom", "B.rom", "C.rom"]

    def test_missing_target(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing"
        with pytest.raises(TargetNotFoundError) as exc_info:
            ScanOrchestrator().discover_files(missing)
        assert str(exc_info.value) == f"File/folder not found: {missing}"


class TestScanOrchestrator:
    """Tests for ScanOrchestrator.scan()."""

    def test_rejects_non_positive_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            ScanOrchestrator(chunk_size=0)

    def test_folder_scan(self, rom_dir: Path, index: ReferenceIndex) -> None:
        """Empty, matching and unknown files should each resolve correctly."""
        files, result = ScanOrchestrator().scan(rom_dir, index)

        assert [Path(f.path).name for f in files] == ["f1.bin", "f2.bin", "f3.bin"]
        f1, f2, f3 = files

        assert f1.digest is EMPTY_DIGEST
        assert f1.match == NOT_APPLICABLE

        assert str(f2.digest) == ABC_MD5
        assert f2.match.status is MatchStatus.FOUND
        assert f2.match.name == "GameX"

        assert f3.match == NO_MATCH

        assert result.scan_type is ScanType.FOLDER
        assert result.files_found == 3
        assert result.files_matched == 1
        assert result.files_empty == 1
        assert result.files_unmatched == 1
        assert result.errors == []

    def test_single_file_scan(self, tmp_path: Path, index: ReferenceIndex) -> None:
        path = tmp_path / "game.gb"
        path.write_bytes(b"ABC")
        files, result = ScanOrchestrator().scan(path, index)
        assert result.scan_type is ScanType.FILE
        assert result.files_found == 1
        assert files[0].match.name == "GameX"

    def test_empty_directory(self, tmp_path: Path, index: ReferenceIndex) -> None:
        files, result = ScanOrchestrator().scan(tmp_path, index)
        assert files == []
        assert result.files_found == 0
        assert result.files_matched == 0

    def test_empty_index_matches_nothing(self, rom_dir: Path) -> None:
        files, result = ScanOrchestrator().scan(rom_dir, ReferenceIndex())
        assert result.files_matched == 0
        assert all(not f.match.is_found for f in files)

    def test_progress_labels_and_display_paths(
        self, rom_dir: Path, index: ReferenceIndex
    ) -> None:
        """Progress should receive padded labels and relative paths."""
        progress = RecordingProgress()
        ScanOrchestrator().scan(rom_dir, index, scan_progress=progress)
        assert progress.calls == [
            (1, 3, "1/3", "f1.bin"),
            (2, 3, "2/3", "f2.bin"),
            (3, 3, "3/3", "f3.bin"),
        ]

    def test_progress_label_padding_for_large_scan(
        self, tmp_path: Path, index: ReferenceIndex
    ) -> None:
        for i in range(10):
            (tmp_path / f"{i:02}.bin").write_bytes(b"x")
        progress = RecordingProgress()
        ScanOrchestrator().scan(tmp_path, index, scan_progress=progress)
        assert progress.calls[6][2] == " 7/10"
        assert progress.calls[9][2] == "10/10"

    def test_scan_context_cleared_after_scan(
        self, rom_dir: Path, index: ReferenceIndex
    ) -> None:
        ScanOrchestrator().scan(rom_dir, index)
        assert get_scan_context() == (None, None)

    def test_missing_target(self, tmp_path: Path, index: ReferenceIndex) -> None:
        with pytest.raises(TargetNotFoundError):
            ScanOrchestrator().scan(tmp_path / "missing", index)

    def test_same_tree_same_results(
        self, rom_dir: Path, index: ReferenceIndex
    ) -> None:
        """Two scans of an unchanged tree should agree file for file."""
        first, _ = ScanOrchestrator().scan(rom_dir, index)
        second, _ = ScanOrchestrator(chunk_size=1).scan(rom_dir, index)
        assert first == second


@pytest.fixture
def fail_hash_for(monkeypatch: pytest.MonkeyPatch):
    """Make hash_file raise FileHashError("boom") for one file name."""

    def install(name: str) -> None:
        real_hash_file = orchestrator_module.hash_file

        def hash_file(path, chunk_size=DEFAULT_CHUNK_SIZE):
            if Path(path).name == name:
                raise FileHashError("boom", path)
            return real_hash_file(path, chunk_size)

        monkeypatch.setattr(orchestrator_module, "hash_file", hash_file)

    return install


class TestUnreadableFiles:
    """Tests for per-file error handling."""

    def test_fails_fast_by_default(
        self, rom_dir: Path, index: ReferenceIndex, fail_hash_for
    ) -> None:
        fail_hash_for("f2.bin")
        with pytest.raises(FileHashError, match="boom") as excinfo:
            ScanOrchestrator().scan(rom_dir, index)
        assert excinfo.value.path == str(rom_dir / "f2.bin")

    def test_isolated_errors_are_recorded(
        self, rom_dir: Path, index: ReferenceIndex, fail_hash_for
    ) -> None:
        fail_hash_for("f2.bin")
        files, result = ScanOrchestrator(isolate_errors=True).scan(rom_dir, index)

        assert len(files) == 3
        assert files[1].error == "boom"
        assert files[1].digest is None
        assert files[1].match is NO_MATCH
        assert result.files_errored == 1
        assert result.errors == [(files[1].path, "boom")]
        assert result.files_matched == 0
        assert result.files_empty == 1
        assert result.files_unmatched == 1

    def test_failure_does_not_stop_later_files(
        self, temp_dir: Path, index: ReferenceIndex, fail_hash_for
    ) -> None:
        """Files after a failed one are still hashed and counted."""
        target = temp_dir / "abc"
        target.mkdir()
        (target / "a").write_bytes(b"A")
        (target / "b").write_bytes(b"B")
        (target / "c").write_bytes(b"ABC")
        fail_hash_for("b")

        files, result = ScanOrchestrator(isolate_errors=True).scan(target, index)

        assert [(Path(f.path).name, f.error) for f in files] == [
            ("a", None),
            ("b", "boom"),
            ("c", None),
        ]
        assert files[0].digest is not None
        assert files[2].match.name == "GameX"
        assert result.files_errored == 1
        assert result.files_unmatched == 1
        assert result.files_matched == 1
