"""Reference database archive bootstrap.

No-Intro publishes its reference documents as a zip archive. The database
directory is populated by extracting that archive once; later runs find the
directory and skip extraction.
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

logger = logging.getLogger(__name__)


class DatabaseArchiveError(OSError):
    """The database archive is missing, unreadable or unsafe to extract."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


class ArchiveCleanupError(DatabaseArchiveError):
    """The archive was extracted but could not be deleted afterwards."""

    def __init__(self, message: str, path: Path | str, extracted: int) -> None:
        super().__init__(message, path)
        self.extracted = extracted


def extract_database_archive(
    archive: Path,
    destination: Path,
    *,
    delete_archive: bool = False,
) -> int:
    """Extract a zip archive of reference documents.

    Args:
        archive: Path to the zip archive.
        destination: Database directory to extract into (created if needed).
        delete_archive: Remove the archive after a successful extraction.

    Returns:
        Number of files extracted.

    Raises:
        DatabaseArchiveError: If the archive is missing, is not a valid zip,
            contains members escaping the destination, or cannot be written.
        ArchiveCleanupError: If delete_archive is set and the archive could
            not be removed after a successful extraction.
    """
    if not archive.is_file():
        raise DatabaseArchiveError(f"Database archive not found: {archive}", archive)

    destination = destination.expanduser()
    root = destination.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            members = zf.infolist()
            for member in members:
                target = (root / member.filename).resolve()
                if target != root and root not in target.parents:
                    raise DatabaseArchiveError(
                        f"Refusing to extract {member.filename!r}: "
                        "path escapes the database directory",
                        archive,
                    )
            destination.mkdir(parents=True, exist_ok=True)
            zf.extractall(destination)
    except zipfile.BadZipFile as e:
        raise DatabaseArchiveError(
            f"Not a valid zip archive: {archive}", archive
        ) from e
    except DatabaseArchiveError:
        raise
    except OSError as e:
        raise DatabaseArchiveError(
            f"Cannot extract {archive} into {destination}: {e}", archive
        ) from e

    extracted = sum(1 for member in members if not member.is_dir())
    logger.info("Extracted %d file(s) from %s into %s", extracted, archive, destination)

    if delete_archive:
        try:
            archive.unlink()
        except OSError as e:
            raise ArchiveCleanupError(
                f"Extracted, but could not delete {archive}: {e}", archive, extracted
            ) from e
        logger.info("Deleted database archive %s", archive)

    return extracted


def database_present(directory: Path) -> bool:
    """Return True if the database directory exists."""
    return directory.expanduser().is_dir()
