"""Reference database (.dat) handling for dumpcheck.

Public API:
    - load_reference_index: Build the digest -> name index from a directory
    - ReferenceIndex: The merged lookup table
    - parse_reference_document: Stream entries from one document
    - iter_reference_documents: Enumerate documents in deterministic order
    - extract_database_archive: Populate the database directory from a zip
"""

from dumpcheck.datfile.archive import (
    ArchiveCleanupError,
    DatabaseArchiveError,
    database_present,
    extract_database_archive,
)
from dumpcheck.datfile.index import (
    DEFAULT_EXTENSION,
    IndexProgressCallback,
    ReferenceIndex,
    iter_reference_documents,
    load_reference_index,
)
from dumpcheck.datfile.parser import (
    ReferenceLoadError,
    ReferenceParseError,
    parse_reference_document,
)

__all__ = [
    "ArchiveCleanupError",
    "DEFAULT_EXTENSION",
    "DatabaseArchiveError",
    "IndexProgressCallback",
    "ReferenceIndex",
    "ReferenceLoadError",
    "ReferenceParseError",
    "database_present",
    "extract_database_archive",
    "iter_reference_documents",
    "load_reference_index",
    "parse_reference_document",
]
