"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Validation errors (config, input)
    20-29: Target/database errors
    40-49: Operation errors
    50-59: Parse errors
    60-69: Warning states
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for dumpcheck CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Validation errors (10-19)
    CONFIG_ERROR = 11

    # Target/database errors (20-29)
    TARGET_NOT_FOUND = 20
    DATABASE_NOT_FOUND = 21

    # Operation errors (40-49)
    OPERATION_FAILED = 40

    # Parse errors (50-59)
    PARSE_ERROR = 51

    # Warning states (60-69)
    WARNINGS = 60  # Completed, but some items failed (--keep-going)
