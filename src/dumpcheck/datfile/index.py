"""Reference index construction.

The index is built once, before any target file is resolved, by merging the
entries of every reference document found under the database directory.
Documents are visited in the same case-insensitive order as scan targets.
When two entries declare the same digest the later one wins, whether it comes
from a later document or later in the same document.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from dumpcheck.core.file_utils import DirectoryWalkError, iter_sorted_files
from dumpcheck.datfile.parser import (
    ReferenceLoadError,
    ReferenceParseError,
    parse_reference_document,
)
from dumpcheck.domain.models import Digest

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".dat"


class IndexProgressCallback(Protocol):
    """Protocol for index loading progress callbacks."""

    def on_document_loaded(
        self, position: int, total: int, path: Path, entries: int
    ) -> None:
        """Called after each reference document has been merged."""
        ...


@dataclass
class ReferenceIndex:
    """Lookup table from lowercase MD5 digest to canonical name."""

    entries: dict[str, str] = field(default_factory=dict)
    documents: list[str] = field(default_factory=list)
    entries_read: int = 0  # Including entries later overwritten
    errors: list[tuple[str, str]] = field(default_factory=list)

    def add(self, digest: str, name: str) -> None:
        """Record a digest, replacing any earlier name (last write wins)."""
        key = digest.lower()
        previous = self.entries.get(key)
        if previous is not None and previous != name:
            logger.debug(
                "Digest %s redeclared: %r replaces %r", key, name, previous
            )
        self.entries[key] = name
        self.entries_read += 1

    def lookup(self, digest: Digest | str) -> str | None:
        """Return the canonical name for a digest, or None.

        The empty-content digest is never looked up.
        """
        if isinstance(digest, Digest):
            if digest.is_empty:
                return None
            key = digest.hexdigest
        else:
            key = digest.lower()
        return self.entries.get(key)

    def as_mapping(self) -> Mapping[str, str]:
        """Read-only view of the digest -> name table."""
        return MappingProxyType(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, digest: object) -> bool:
        if isinstance(digest, (Digest, str)):
            return self.lookup(digest) is not None
        return False


def iter_reference_documents(
    directory: Path | str, extension: str = DEFAULT_EXTENSION
) -> Iterator[Path]:
    """Yield reference documents beneath a directory in deterministic order.

    Args:
        directory: Database directory to walk recursively.
        extension: Document extension, matched case-insensitively.

    Yields:
        Paths of matching documents.

    Raises:
        ReferenceLoadError: If the directory is missing or cannot be listed.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise ReferenceLoadError(
            f"Reference database directory not found: {directory}", directory
        )
    suffix = extension.lower()
    try:
        for path in iter_sorted_files(directory):
            if path.name.lower().endswith(suffix):
                yield path
    except DirectoryWalkError as e:
        raise ReferenceLoadError(str(e), e.path) from e


def load_reference_index(
    directory: Path | str,
    extension: str = DEFAULT_EXTENSION,
    *,
    isolate_errors: bool = False,
    progress: IndexProgressCallback | None = None,
) -> ReferenceIndex:
    """Parse every reference document under a directory into one index.

    Args:
        directory: Database directory containing reference documents.
        extension: Reference document extension.
        isolate_errors: If True, skip a document that cannot be read or
            parsed, log a warning and record it in ``index.errors``.
            If False (default), the first failure aborts the load.
        progress: Optional progress callback.

    Returns:
        The merged ReferenceIndex.

    Raises:
        ReferenceLoadError: If the directory or a document cannot be read.
        ReferenceParseError: If a document is malformed.
    """
    documents = list(iter_reference_documents(directory, extension))
    total = len(documents)
    index = ReferenceIndex()
    logger.info("Loading %d reference document(s) from %s", total, directory)

    for position, path in enumerate(documents, start=1):
        # Collect first so a broken document does not leave a partial merge
        try:
            entries = list(parse_reference_document(path))
        except (ReferenceLoadError, ReferenceParseError) as e:
            if not isolate_errors:
                raise
            logger.warning("Skipping reference document %s: %s", path, e)
            index.errors.append((str(path), str(e)))
            continue

        for entry in entries:
            index.add(entry.digest, entry.name)
        index.documents.append(str(path))
        logger.debug("Loaded %d entries from %s", len(entries), path)

        if progress is not None:
            progress.on_document_loaded(position, total, path, len(entries))

    logger.info(
        "Reference index ready: %d digests from %d document(s)",
        len(index),
        len(index.documents),
    )
    return index
