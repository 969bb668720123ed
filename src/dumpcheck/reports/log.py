"""Scan log rendering.

Renders scan results in the plain-text log layout, one record per file,
and as a JSON-ready dict for ``--json`` output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dumpcheck.domain.enums import MatchStatus, ScanType
from dumpcheck.domain.models import ScannedFile
from dumpcheck.scanner.orchestrator import ScanResult

logger = logging.getLogger(__name__)

PROGRAM_NAME = "dumpcheck"
RECORD_SEPARATOR = "=" * 32


class LogWriteError(OSError):
    """The scan log could not be written."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


def default_log_path(log_dir: Path, started_at_epoch: int) -> Path:
    """Return the log file path for a scan started at the given epoch second."""
    return log_dir / f"{started_at_epoch}.log"


def format_file_record(scanned: ScannedFile) -> str:
    """Format one file's result as log lines (without trailing separator)."""
    lines = [f"File: {scanned.path}"]
    if scanned.error is not None:
        lines.append(f"Error: {scanned.error}")
        return "\n".join(lines) + "\n"

    lines.append(f"Hash: {scanned.digest}")
    if scanned.match.status is MatchStatus.FOUND:
        lines.append(f'Find: "{scanned.match.name}"')
    elif scanned.match.status is MatchStatus.NO_MATCH:
        lines.append(f"Find: {scanned.match}")
    # NOT_APPLICABLE (empty file): no Find line
    return "\n".join(lines) + "\n"


def render_log(
    files: list[ScannedFile],
    result: ScanResult,
    version: str,
) -> str:
    """Render a complete scan log.

    Args:
        files: Scanned files in scan order.
        result: Scan summary.
        version: Program version written in the header.

    Returns:
        The log text.
    """
    started = int(result.started_at.timestamp())
    parts = [
        f"{PROGRAM_NAME} - version {version}\n",
        f"Started @: {started}\n",
    ]

    if result.scan_type is ScanType.FILE:
        parts.append("Scan type: File\n\n")
        parts.extend(format_file_record(f) for f in files)
        return "".join(parts)

    parts.append("Scan type: Folder\n\n")
    parts.append(f"TotalFile: {result.files_found}\n")
    parts.append(f"FoundFile: {result.files_matched}\n")
    if result.files_errored:
        parts.append(f"ErrorFile: {result.files_errored}\n")
    parts.append(f"{RECORD_SEPARATOR}\n")
    for scanned in files:
        parts.append(format_file_record(scanned))
        parts.append(f"{RECORD_SEPARATOR}\n")
    return "".join(parts)


def write_log(
    path: Path,
    files: list[ScannedFile],
    result: ScanResult,
    version: str,
) -> Path:
    """Write a scan log, creating the log directory if needed.

    Raises:
        LogWriteError: If the log cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_log(files, result, version), encoding="utf-8")
    except OSError as e:
        raise LogWriteError(f"Cannot write scan log {path}: {e}", path) from e
    logger.info("Wrote scan log %s", path)
    return path


def scanned_file_to_dict(scanned: ScannedFile) -> dict[str, Any]:
    """Serialize one scanned file."""
    data: dict[str, Any] = {
        "path": scanned.path,
        "hash": str(scanned.digest) if scanned.digest is not None else None,
        "status": scanned.match.status.value,
        "match": scanned.match.name,
    }
    if scanned.error is not None:
        data["error"] = scanned.error
    return data


def result_to_dict(files: list[ScannedFile], result: ScanResult) -> dict[str, Any]:
    """Serialize a scan for JSON output."""
    data: dict[str, Any] = {
        "target": result.target,
        "scan_type": result.scan_type.value,
        "started_at": result.started_at.isoformat(),
        "elapsed_seconds": round(result.elapsed_seconds, 2),
        "total_files": result.files_found,
        "found_files": result.files_matched,
        "empty_files": result.files_empty,
        "unmatched_files": result.files_unmatched,
        "files": [scanned_file_to_dict(f) for f in files],
    }
    if result.errors:
        data["errors"] = [{"path": p, "error": e} for p, e in result.errors]
    return data
