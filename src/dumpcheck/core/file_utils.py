"""Deterministic filesystem traversal.

Both the reference index loader and the scanner walk directories with
``iter_sorted_files()`` so that documents and target files are always
visited in the same case-insensitive order on every platform.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path


class DirectoryWalkError(OSError):
    """A directory could not be listed during traversal."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


def path_sort_key(path: Path | str) -> tuple[str, str]:
    """Sort key ordering paths case-insensitively by their full path.

    The original spelling breaks ties between names that differ only by case.
    """
    text = str(path)
    return text.lower(), text


def _sorted_entries(directory: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except FileNotFoundError as e:
        raise DirectoryWalkError(
            f"Cannot list directory: not found: {directory}", directory
        ) from e
    except PermissionError as e:
        raise DirectoryWalkError(
            f"Cannot list directory: permission denied for {directory}", directory
        ) from e
    except OSError as e:
        raise DirectoryWalkError(
            f"Cannot list directory {directory}: {e}", directory
        ) from e
    entries.sort(key=lambda entry: path_sort_key(entry.path))
    return entries


def iter_sorted_files(root: Path | str) -> Iterator[Path]:
    """Yield regular files beneath root in deterministic order.

    Entries of each directory are sorted by lowercased full path and visited
    depth-first, so a subdirectory's files appear at the subdirectory's
    sorted position. Symlinked directories are not descended into.

    Args:
        root: Directory to walk.

    Yields:
        Paths of regular files (symlinks to files included).

    Raises:
        DirectoryWalkError: If root or a subdirectory cannot be listed.
    """
    stack: list[Iterator[os.DirEntry]] = [iter(_sorted_entries(Path(root)))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        if entry.is_dir(follow_symlinks=False):
            stack.append(iter(_sorted_entries(Path(entry.path))))
        elif entry.is_file():
            yield Path(entry.path)


def relative_display(path: Path | str, root: Path | str) -> str:
    """Return path relative to root for display, or the path itself."""
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return str(path)
