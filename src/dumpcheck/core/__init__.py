"""Core utilities package.

Streaming hashing and deterministic directory traversal used by both the
reference index loader and the scanner.
"""

from dumpcheck.core.file_utils import (
    DirectoryWalkError,
    iter_sorted_files,
    path_sort_key,
    relative_display,
)
from dumpcheck.core.hashing import (
    DEFAULT_CHUNK_SIZE,
    FileHashError,
    hash_file,
    hash_stream,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "DirectoryWalkError",
    "FileHashError",
    "hash_file",
    "hash_stream",
    "iter_sorted_files",
    "path_sort_key",
    "relative_display",
]
