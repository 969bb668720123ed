"""Scanner orchestrator that coordinates hashing with reference resolution."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from dumpcheck.core.file_utils import iter_sorted_files, relative_display
from dumpcheck.core.hashing import DEFAULT_CHUNK_SIZE, FileHashError, hash_file
from dumpcheck.domain.enums import ScanType
from dumpcheck.domain.models import NOT_APPLICABLE, ScannedFile
from dumpcheck.logging.context import scan_context

if TYPE_CHECKING:
    from dumpcheck.datfile.index import ReferenceIndex

logger = logging.getLogger(__name__)


class TargetNotFoundError(FileNotFoundError):
    """The scan target does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"File/folder not found: {path}")
        self.path = str(path)


class ScanProgressCallback(Protocol):
    """Protocol for scan progress callbacks."""

    def on_hash_progress(
        self, position: int, total: int, label: str, display_path: str
    ) -> None:
        """Called before each file is hashed.

        ``label`` is the padded "position/total" counter and
        ``display_path`` the path relative to the scanned directory.
        """
        ...


@dataclass
class ScanResult:
    """Summary of a scan operation."""

    target: str = ""
    scan_type: ScanType = ScanType.FOLDER
    files_found: int = 0
    files_matched: int = 0
    files_empty: int = 0
    files_errored: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    elapsed_seconds: float = 0.0

    @property
    def files_unmatched(self) -> int:
        """Hashed, non-empty files with no reference entry."""
        return (
            self.files_found
            - self.files_matched
            - self.files_empty
            - self.files_errored
        )


def format_progress_label(current: int, total: int) -> str:
    """Format a "current/total" counter aligned to the width of total.

    The current position is left-padded with spaces so every label of a run
    has the same width, e.g. "  7/100" and "100/100".
    """
    return f"{current:>{len(str(total))}}/{total}"


class ScanOrchestrator:
    """Coordinates file discovery, hashing and reference resolution.

    Files are processed one at a time in discovery order. By default the
    first hashing failure aborts the scan; with ``isolate_errors`` the
    failure is recorded on that file and the scan continues.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        isolate_errors: bool = False,
    ):
        """Initialize the scanner.

        Args:
            chunk_size: Read size used when hashing files.
            isolate_errors: Record per-file failures instead of aborting.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        self.isolate_errors = isolate_errors

    def discover_files(self, target: Path | str) -> list[Path]:
        """List the files a scan of target will process, in order.

        Args:
            target: File or directory to scan.

        Returns:
            A single-element list for a file, otherwise every regular file
            beneath the directory in case-insensitive path order.

        Raises:
            TargetNotFoundError: If target does not exist.
            DirectoryWalkError: If a directory cannot be listed.
        """
        target = Path(target)
        if target.is_file():
            return [target]
        if target.is_dir():
            return list(iter_sorted_files(target))
        raise TargetNotFoundError(target)

    def _process_file(
        self, path: Path, index: ReferenceIndex, result: ScanResult
    ) -> ScannedFile:
        scanned = ScannedFile(path=str(path))
        try:
            scanned.digest = hash_file(path, self.chunk_size)
        except FileHashError as e:
            if not self.isolate_errors:
                raise
            logger.warning("Could not hash %s: %s", path, e)
            scanned.error = str(e)
            result.errors.append((scanned.path, str(e)))
            result.files_errored += 1
            return scanned

        if scanned.digest.is_empty:
            scanned.match = NOT_APPLICABLE
            result.files_empty += 1
            logger.debug("Empty file, skipping lookup")
            return scanned

        name = index.lookup(scanned.digest)
        if name is not None and scanned.resolve(name):
            result.files_matched += 1
            logger.debug("Matched %s to %r", scanned.digest, name)
        return scanned

    def scan(
        self,
        target: Path | str,
        index: ReferenceIndex,
        scan_progress: ScanProgressCallback | None = None,
    ) -> tuple[list[ScannedFile], ScanResult]:
        """Hash every target file and resolve it against the index.

        Args:
            target: File or directory to scan.
            index: Reference index, fully built and not modified afterwards.
            scan_progress: Optional progress callback.

        Returns:
            Tuple of (scanned files in discovery order, scan summary).

        Raises:
            TargetNotFoundError: If target does not exist.
            DirectoryWalkError: If a directory cannot be listed.
            FileHashError: If a file cannot be read and errors are not isolated.
        """
        start_time = time.monotonic()
        target = Path(target)
        result = ScanResult(target=str(target))

        paths = self.discover_files(target)

        result.scan_type = ScanType.FILE if target.is_file() else ScanType.FOLDER
        result.files_found = len(paths)
        total = len(paths)
        logger.info("Scanning %d file(s) under %s", total, target)

        files: list[ScannedFile] = []
        for position, path in enumerate(paths, start=1):
            label = format_progress_label(position, total)
            if scan_progress is not None:
                display = (
                    str(path)
                    if result.scan_type is ScanType.FILE
                    else relative_display(path, target)
                )
                scan_progress.on_hash_progress(position, total, label, display)
            with scan_context(label, path):
                files.append(self._process_file(path, index, result))

        result.elapsed_seconds = time.monotonic() - start_time
        logger.info(
            "Scan complete: %d file(s), %d matched, %d empty, %d error(s) in %.1fs",
            result.files_found,
            result.files_matched,
            result.files_empty,
            result.files_errored,
            result.elapsed_seconds,
        )
        return files, result
