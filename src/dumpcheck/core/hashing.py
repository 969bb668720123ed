"""Streaming content hashing.

Files are hashed in fixed-size chunks read into a reusable buffer, so peak
memory stays bounded by the chunk size no matter how large the dump is.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO

from dumpcheck.domain.models import Digest

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024  # 64 KiB


class FileHashError(OSError):
    """A target file could not be opened or read for hashing."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


def hash_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Digest:
    """Compute the MD5 digest of a binary stream.

    Args:
        stream: Readable binary stream positioned at the start of the content.
        chunk_size: Number of bytes read per iteration.

    Returns:
        The content Digest, or EMPTY_DIGEST if the stream had no bytes.

    Raises:
        ValueError: If chunk_size is not positive.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    hasher = hashlib.md5()  # nosec B324 - matching reference databases, not security
    buffer = bytearray(chunk_size)
    view = memoryview(buffer)
    while True:
        read = stream.readinto(view)
        if not read:
            break
        hasher.update(view[:read])

    return Digest.from_hex(hasher.hexdigest())


def hash_file(path: Path | str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Digest:
    """Compute the MD5 digest of a file without loading it into memory.

    Args:
        path: Path to the file.
        chunk_size: Number of bytes read per iteration.

    Returns:
        The content Digest, or EMPTY_DIGEST for a zero-length file.

    Raises:
        FileHashError: If the file cannot be opened or read.
        ValueError: If chunk_size is not positive.
    """
    path = Path(path)
    try:
        with path.open("rb", buffering=0) as f:
            digest = hash_stream(f, chunk_size)
    except FileNotFoundError as e:
        raise FileHashError(f"Cannot hash file: file not found: {path}", path) from e
    except PermissionError as e:
        raise FileHashError(
            f"Cannot hash file: permission denied for {path}", path
        ) from e
    except IsADirectoryError as e:
        raise FileHashError(f"Cannot hash file: is a directory: {path}", path) from e
    except OSError as e:
        raise FileHashError(f"Cannot hash file {path}: {e}", path) from e

    logger.debug("Hashed %s: %s", path, digest)
    return digest
