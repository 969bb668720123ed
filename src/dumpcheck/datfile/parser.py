"""Reference document (.dat) parsing.

A reference document is a Logiqx-style XML file as published by No-Intro:

    <datafile>
      <header>...</header>
      <game name="Some Game (USA)">
        <description>Some Game (USA)</description>
        <rom name="Some Game (USA).gb" size="32768" crc="..." md5="..." sha1="..."/>
      </game>
    </datafile>

Attribution follows document order: a grouping element sets the current
canonical name, and every later ``rom`` element carrying an ``md5`` attribute
is attributed to it until the next grouping element starts.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET  # nosec B405 - local reference files only
from collections.abc import Iterator
from pathlib import Path

from dumpcheck.domain.models import ReferenceEntry, is_md5_hex

logger = logging.getLogger(__name__)

GROUPING_TAGS = frozenset({"game", "machine"})
ROM_TAG = "rom"
NAME_ATTRIBUTE = "name"
DIGEST_ATTRIBUTE = "md5"


class ReferenceLoadError(OSError):
    """A reference directory or document could not be read."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(message)
        self.path = str(path)


class ReferenceParseError(ValueError):
    """A reference document is not well-formed or lacks required attributes."""

    def __init__(
        self,
        message: str,
        path: Path | str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = str(path)
        self.line = line
        self.column = column
        location = f":{line}:{column}" if line is not None else ""
        super().__init__(f"{self.path}{location}: {message}")


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag name."""
    return tag.rsplit("}", 1)[-1]


def parse_reference_document(path: Path | str) -> Iterator[ReferenceEntry]:
    """Stream the digest entries declared by one reference document.

    Args:
        path: Path to the reference document.

    Yields:
        ReferenceEntry for every rom element with a valid md5 attribute,
        in document order.

    Raises:
        ReferenceLoadError: If the document cannot be opened or read.
        ReferenceParseError: If the document is not well-formed XML or a
            grouping element has no name.
    """
    path = Path(path)
    source = str(path)
    current_name: str | None = None

    try:
        with path.open("rb") as f:
            for event, elem in ET.iterparse(f, events=("start", "end")):  # nosec B314
                tag = _local_name(elem.tag)

                if event == "end":
                    # Rom attributes are read on start; drop finished groups
                    if tag in GROUPING_TAGS:
                        elem.clear()
                    continue

                if tag in GROUPING_TAGS:
                    name = elem.get(NAME_ATTRIBUTE)
                    if name is None:
                        raise ReferenceParseError(
                            f"<{tag}> element has no '{NAME_ATTRIBUTE}' attribute",
                            path,
                        )
                    current_name = name
                elif tag == ROM_TAG:
                    value = elem.get(DIGEST_ATTRIBUTE)
                    if value is None:
                        continue
                    digest = value.strip().lower()
                    if not is_md5_hex(digest):
                        logger.warning(
                            "Skipping invalid md5 %r in %s (game: %s)",
                            value,
                            path,
                            current_name,
                        )
                        continue
                    if current_name is None:
                        logger.warning(
                            "Skipping rom %s in %s: not inside a game element",
                            digest,
                            path,
                        )
                        continue
                    yield ReferenceEntry(digest=digest, name=current_name, source=source)
    except ET.ParseError as e:
        line, column = e.position
        raise ReferenceParseError(str(e), path, line, column) from e
    except FileNotFoundError as e:
        raise ReferenceLoadError(
            f"Cannot read reference document: not found: {path}", path
        ) from e
    except PermissionError as e:
        raise ReferenceLoadError(
            f"Cannot read reference document: permission denied for {path}", path
        ) from e
    except OSError as e:
        raise ReferenceLoadError(
            f"Cannot read reference document {path}: {e}", path
        ) from e
