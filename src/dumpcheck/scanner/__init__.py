"""Scanner module for dumpcheck.

This module walks a file or directory, computes content hashes and resolves
each digest against the reference index.

Public API:
    - ScanOrchestrator: Main class for scanning targets
    - ScanResult: Summary of a scan operation
    - ScanProgressCallback: Protocol for progress callbacks
    - TargetNotFoundError: Raised when the scan target does not exist
    - format_progress_label: Width-aligned "current/total" counter
"""

from dumpcheck.scanner.orchestrator import (
    ScanOrchestrator,
    ScanProgressCallback,
    ScanResult,
    TargetNotFoundError,
    format_progress_label,
)

__all__ = [
    "ScanOrchestrator",
    "ScanProgressCallback",
    "ScanResult",
    "TargetNotFoundError",
    "format_progress_label",
]
