"""JSON log formatting for dumpcheck.

One JSON object per line. While a scan is hashing a file, the record
carries a ``scan`` object naming the file and its position, so a JSON log
can be filtered per target file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has, plus those added by Formatter.format
_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Added by ScanContextFilter; reported under "scan" instead of "context"
_SCAN_ATTRS: frozenset[str] = frozenset({"scan_position", "file_path", "scan_tag"})


def scan_fields(record: logging.LogRecord) -> dict[str, str]:
    """Return the scan position and file of a record, omitting unset ones."""
    fields: dict[str, str] = {}
    position = getattr(record, "scan_position", None)
    if position:
        fields["position"] = position.strip()
    file_path = getattr(record, "file_path", None)
    if file_path:
        fields["file"] = file_path
    return fields


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys: ``timestamp`` (ISO-8601 UTC), ``level``, ``message``, ``logger``
    (omitted for root), ``scan`` (while a file is processed), ``context``
    (values passed with ``extra=``) and ``exception``.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
        }
        if record.name and record.name != "root":
            entry["logger"] = record.name

        scan = scan_fields(record)
        if scan:
            entry["scan"] = scan

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
            and key not in _SCAN_ATTRS
            and not key.startswith("_")
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
