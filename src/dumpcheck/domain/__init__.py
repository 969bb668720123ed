"""Domain types for dumpcheck.

This package holds the value types shared by hashing, reference indexing,
scanning and reporting.
"""

from dumpcheck.domain.enums import MatchStatus, ScanType
from dumpcheck.domain.models import (
    EMPTY_CONTENT_MD5,
    EMPTY_DIGEST,
    EMPTY_FILE_LABEL,
    NO_MATCH,
    NO_MATCH_LABEL,
    NOT_APPLICABLE,
    NOT_APPLICABLE_LABEL,
    Digest,
    Match,
    ReferenceEntry,
    ScannedFile,
    is_md5_hex,
)

__all__ = [
    "EMPTY_CONTENT_MD5",
    "EMPTY_DIGEST",
    "EMPTY_FILE_LABEL",
    "NO_MATCH",
    "NO_MATCH_LABEL",
    "NOT_APPLICABLE",
    "NOT_APPLICABLE_LABEL",
    "Digest",
    "Match",
    "MatchStatus",
    "ReferenceEntry",
    "ScanType",
    "ScannedFile",
    "is_md5_hex",
]
