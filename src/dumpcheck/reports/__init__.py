"""Scan result reporting."""

from dumpcheck.reports.log import (
    LogWriteError,
    default_log_path,
    format_file_record,
    render_log,
    result_to_dict,
    write_log,
)

__all__ = [
    "LogWriteError",
    "default_log_path",
    "format_file_record",
    "render_log",
    "result_to_dict",
    "write_log",
]
