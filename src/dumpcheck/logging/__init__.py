"""Structured logging module for dumpcheck.

Provides configurable logging with JSON format support and file rotation.
Includes scan context support so records name the file being processed.
"""

from dumpcheck.logging.config import configure_logging
from dumpcheck.logging.context import (
    ScanContextFilter,
    clear_scan_context,
    get_scan_context,
    scan_context,
    set_scan_context,
)
from dumpcheck.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "ScanContextFilter",
    "clear_scan_context",
    "configure_logging",
    "get_scan_context",
    "scan_context",
    "set_scan_context",
]
