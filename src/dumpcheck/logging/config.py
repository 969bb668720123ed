"""Root logger setup for dumpcheck.

Diagnostics go to stderr, to a rotating file, or both. The scan log and the
command output on stdout are written separately and never pass through
these handlers.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from dumpcheck.logging.context import ScanContextFilter
from dumpcheck.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from dumpcheck.config.models import LoggingConfig

# scan_tag is "[ 7/100] " while a file is hashed, empty otherwise
TEXT_FORMAT = "%(asctime)s - %(scan_tag)s%(name)s - %(levelname)s - %(message)s"
TEXT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def _build_formatter(format_name: str) -> logging.Formatter:
    if format_name.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATE_FORMAT)


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    """Open the rotating log file, or return None with a stderr warning."""
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {config.file}: {e}\n")
        return None


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to ``config``.

    Without a usable log file, records go to stderr even when
    ``include_stderr`` is off.
    """
    level = getattr(logging, config.level.upper())
    formatter = _build_formatter(config.format)
    scan_filter = ScanContextFilter()

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(scan_filter)
        root.addHandler(handler)
