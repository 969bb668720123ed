"""Domain enums for dumpcheck."""

from enum import Enum


class MatchStatus(Enum):
    """Resolution state of a scanned file against the reference index."""

    FOUND = "found"  # Digest declared by a reference document
    NO_MATCH = "no_match"  # Not (yet) found in any reference document
    NOT_APPLICABLE = "not_applicable"  # Empty file, never looked up


class ScanType(Enum):
    """Kind of target handed to a scan."""

    FILE = "file"
    FOLDER = "folder"
