"""Configuration data models for dumpcheck."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from dumpcheck.core.hashing import DEFAULT_CHUNK_SIZE

# Default data directory layout
DEFAULT_DATA_DIR = Path.home() / ".dumpcheck"
DATABASE_DIR_NAME = "db"
DATABASE_ARCHIVE_NAME = "db.zip"
LOG_DIR_NAME = "logs"


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class DatabaseConfig:
    """Location of the reference database."""

    # Directory holding the extracted reference documents
    directory: Path = DEFAULT_DATA_DIR / DATABASE_DIR_NAME

    # Zip archive extracted into directory when it is missing
    archive: Path = DEFAULT_DATA_DIR / DATABASE_ARCHIVE_NAME

    # Reference document extension (case-insensitive)
    extension: str = ".dat"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.extension.startswith(".") or len(self.extension) < 2:
            raise ValueError(
                f"extension must start with '.' and name a suffix, got {self.extension!r}"
            )


@dataclass
class ScanConfig:
    """Settings for target scans."""

    # Bytes read per hashing iteration
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # Record per-file and per-document failures instead of aborting
    keep_going: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")


@dataclass
class ReportsConfig:
    """Settings for scan logs."""

    # Directory receiving <epoch>.log files
    log_directory: Path = DEFAULT_DATA_DIR / LOG_DIR_NAME


@dataclass
class DumpcheckConfig:
    """Main configuration for dumpcheck."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
