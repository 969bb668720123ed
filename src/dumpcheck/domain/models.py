"""Domain models for dumpcheck.

These models are shared by the hasher, the reference index and the scanner.
Sentinel wording ("Empty file!", "No match found!") only exists here, in the
``__str__`` methods used at the serialization boundary.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field

from dumpcheck.domain.enums import MatchStatus

# MD5 of the empty byte sequence
EMPTY_CONTENT_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
MD5_HEX_LENGTH = 32

EMPTY_FILE_LABEL = "Empty file!"
NO_MATCH_LABEL = "No match found!"
NOT_APPLICABLE_LABEL = "n/a"

_HEX_DIGITS = frozenset(string.hexdigits.lower())


def is_md5_hex(value: str) -> bool:
    """Return True if value is a 32 character lowercase hex string."""
    return len(value) == MD5_HEX_LENGTH and all(c in _HEX_DIGITS for c in value)


@dataclass(frozen=True)
class Digest:
    """Content digest of a file.

    ``hexdigest`` is None for zero-length content (see ``EMPTY_DIGEST``).
    Use ``Digest.from_hex()`` to build one from an untrusted string.
    """

    hexdigest: str | None = None

    def __post_init__(self) -> None:
        """Validate the digest value."""
        if self.hexdigest is None:
            return
        if not is_md5_hex(self.hexdigest):
            raise ValueError(f"Not a lowercase MD5 hex digest: {self.hexdigest!r}")
        if self.hexdigest == EMPTY_CONTENT_MD5:
            raise ValueError("Empty-content digest must be EMPTY_DIGEST")

    @classmethod
    def from_hex(cls, value: str) -> Digest:
        """Build a Digest, mapping the empty-content MD5 to EMPTY_DIGEST.

        Args:
            value: Hex digest string in any case.

        Returns:
            The normalized Digest.

        Raises:
            ValueError: If value is not a 32 character hex string.
        """
        normalized = value.strip().lower()
        if normalized == EMPTY_CONTENT_MD5:
            return EMPTY_DIGEST
        return cls(hexdigest=normalized)

    @property
    def is_empty(self) -> bool:
        """True for the empty-content sentinel."""
        return self.hexdigest is None

    def __str__(self) -> str:
        return EMPTY_FILE_LABEL if self.hexdigest is None else self.hexdigest


EMPTY_DIGEST = Digest()


@dataclass(frozen=True)
class Match:
    """Resolution of a digest against the reference index."""

    status: MatchStatus
    name: str | None = None

    def __post_init__(self) -> None:
        """Validate that only FOUND carries a name."""
        if self.status is MatchStatus.FOUND and self.name is None:
            raise ValueError("A found match requires a name")
        if self.status is not MatchStatus.FOUND and self.name is not None:
            raise ValueError(f"{self.status.value} match cannot carry a name")

    @classmethod
    def found(cls, name: str) -> Match:
        """Create a FOUND match for the given canonical name."""
        return cls(status=MatchStatus.FOUND, name=name)

    @property
    def is_found(self) -> bool:
        """True if a canonical name was resolved."""
        return self.status is MatchStatus.FOUND

    def __str__(self) -> str:
        if self.status is MatchStatus.FOUND:
            return self.name or ""
        if self.status is MatchStatus.NOT_APPLICABLE:
            return NOT_APPLICABLE_LABEL
        return NO_MATCH_LABEL


NO_MATCH = Match(status=MatchStatus.NO_MATCH)
NOT_APPLICABLE = Match(status=MatchStatus.NOT_APPLICABLE)


@dataclass
class ScannedFile:
    """A target file under examination.

    ``digest`` is None only when hashing failed and the scan isolates
    per-file errors; ``error`` then holds the failure message.
    """

    path: str
    digest: Digest | None = None
    match: Match = field(default=NO_MATCH)
    error: str | None = None

    def resolve(self, name: str) -> bool:
        """Attach a canonical name, first match wins.

        Args:
            name: Canonical name from the reference index.

        Returns:
            True if the name was attached, False if the file already had a
            match or is not eligible for lookup.
        """
        if self.match.status is not MatchStatus.NO_MATCH:
            return False
        if self.digest is None or self.digest.is_empty:
            return False
        self.match = Match.found(name)
        return True

    @property
    def is_empty(self) -> bool:
        """True if the file had zero bytes."""
        return self.digest is not None and self.digest.is_empty


@dataclass(frozen=True)
class ReferenceEntry:
    """One digest -> canonical name pair declared by a reference document."""

    digest: str
    name: str
    source: str | None = None  # Path of the declaring document
