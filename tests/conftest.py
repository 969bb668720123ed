"""Shared test fixtures for dumpcheck."""

import shutil
import tempfile
from pathlib import Path

import pytest

ABC_MD5 = "902fbdd2b1df0c4f70b4a5d23525e932"  # b"ABC"
ABC_LOWER_MD5 = "900150983cd24fb0d6963f7d28e17f72"  # b"abc"


def make_dat(games: list[tuple[str, list[str]]], header: str = "Test") -> str:
    """Build a Logiqx-style reference document.

    Args:
        games: (game name, [rom md5, ...]) pairs in document order.
        header: Name written in the header element.

    Returns:
        The XML text.
    """
    lines = [
        '<?xml version="1.0"?>',
        "<datafile>",
        f"  <header><name>{header}</name></header>",
    ]
    for name, digests in games:
        lines.append(f'  <game name="{name}">')
        lines.append(f"    <description>{name}</description>")
        for i, digest in enumerate(digests):
            lines.append(
                f'    <rom name="{name}.{i}" size="3" crc="00000000" md5="{digest}"/>'
            )
        lines.append("  </game>")
    lines.append("</datafile>")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_dat():
    """Return a helper writing a reference document to a path."""

    def _write(path: Path, games: list[tuple[str, list[str]]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(make_dat(games), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test isolation."""
    dir_path = tempfile.mkdtemp()
    yield Path(dir_path)
    shutil.rmtree(dir_path, ignore_errors=True)


@pytest.fixture
def db_dir(temp_dir: Path) -> Path:
    """Create a reference database with one document naming GameX."""
    directory = temp_dir / "db"
    directory.mkdir()
    (directory / "Nintendo - Game Boy.dat").write_text(
        make_dat([("GameX", [ABC_MD5]), ("GameY", [ABC_LOWER_MD5])])
    )
    return directory


@pytest.fixture
def rom_dir(temp_dir: Path) -> Path:
    """Create a target directory with an empty, a known and an unknown file."""
    directory = temp_dir / "roms"
    directory.mkdir()
    (directory / "f1.bin").write_bytes(b"")
    (directory / "f2.bin").write_bytes(b"ABC")
    (directory / "f3.bin").write_bytes(b"ZZZ")
    return directory
