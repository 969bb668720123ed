"""Scan context for structured logging.

Provides context propagation using contextvars, enabling automatic
injection of the current scan position and file path into log records.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

# Context variables for the file currently being processed
_scan_position: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_position", default=None
)
_file_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_path", default=None
)


def set_scan_context(
    scan_position: str,
    file_path: Path | str | None = None,
) -> None:
    """Set the current scan context.

    Args:
        scan_position: Progress label of the file (e.g., " 7/100").
        file_path: Full path to file being processed, or None.
    """
    _scan_position.set(scan_position)
    _file_path.set(str(file_path) if file_path is not None else None)


def clear_scan_context() -> None:
    """Clear the current scan context."""
    _scan_position.set(None)
    _file_path.set(None)


@contextmanager
def scan_context(
    scan_position: str,
    file_path: Path | str | None = None,
) -> Generator[None, None, None]:
    """Context manager for per-file scan context.

    Sets scan context on entry, restores the previous context on exit.

    Args:
        scan_position: Progress label of the file (e.g., " 7/100").
        file_path: Full path to file being processed.

    Yields:
        None

    Example:
        with scan_context(" 7/100", "/roms/game.gb"):
            logger.info("Hashing file")  # Automatically includes context
    """
    old_position = _scan_position.get()
    old_file_path = _file_path.get()
    try:
        set_scan_context(scan_position, file_path)
        yield
    finally:
        _scan_position.set(old_position)
        _file_path.set(old_file_path)


def get_scan_context() -> tuple[str | None, str | None]:
    """Get current scan context.

    Returns:
        Tuple of (scan_position, file_path), either may be None.
    """
    return _scan_position.get(), _file_path.get()


class ScanContextFilter(logging.Filter):
    """Logging filter that injects scan context into log records.

    Adds scan_position and file_path attributes to LogRecord from
    contextvars. For text format, also adds a formatted scan_tag like
    [ 7/100].
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject scan context into log record.

        Args:
            record: The log record to process.

        Returns:
            Always True (does not filter, only enriches).
        """
        scan_position, file_path = get_scan_context()

        record.scan_position = scan_position
        record.file_path = file_path
        record.scan_tag = f"[{scan_position}] " if scan_position else ""

        return True
