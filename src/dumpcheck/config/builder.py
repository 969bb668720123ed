"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building DumpcheckConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from dumpcheck.config.env import EnvReader
from dumpcheck.config.models import (
    DATABASE_ARCHIVE_NAME,
    DATABASE_DIR_NAME,
    LOG_DIR_NAME,
    DatabaseConfig,
    DumpcheckConfig,
    LoggingConfig,
    ReportsConfig,
    ScanConfig,
)
from dumpcheck.core.hashing import DEFAULT_CHUNK_SIZE


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Database
    database_directory: Path | None = None
    database_archive: Path | None = None
    database_extension: str | None = None

    # Scan
    scan_chunk_size: int | None = None
    scan_keep_going: bool | None = None

    # Reports
    reports_log_directory: Path | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds DumpcheckConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build(data_dir)
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}
        self._sources: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value it sets.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._sources[field_obj.name] = source_name

    def source_of(self, key: str) -> str:
        """Return which source set a key ("default" if none did)."""
        return self._sources.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self, data_dir: Path) -> DumpcheckConfig:
        """Build the final DumpcheckConfig with defaults for unset values.

        Args:
            data_dir: Data directory the default paths are derived from.

        Returns:
            Complete DumpcheckConfig.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        database = DatabaseConfig(
            directory=self._get("database_directory", data_dir / DATABASE_DIR_NAME),
            archive=self._get("database_archive", data_dir / DATABASE_ARCHIVE_NAME),
            extension=self._get("database_extension", ".dat"),
        )

        scan = ScanConfig(
            chunk_size=self._get("scan_chunk_size", DEFAULT_CHUNK_SIZE),
            keep_going=self._get("scan_keep_going", False),
        )

        reports = ReportsConfig(
            log_directory=self._get("reports_log_directory", data_dir / LOG_DIR_NAME),
        )

        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )

        return DumpcheckConfig(
            database=database,
            scan=scan,
            reports=reports,
            logging=logging_config,
        )


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed TOML config file.

    Args:
        file_config: Parsed configuration dictionary from TOML file.

    Returns:
        ConfigSource with values from the config file.
    """
    database = file_config.get("database", {})
    scan = file_config.get("scan", {})
    reports = file_config.get("reports", {})
    logging_conf = file_config.get("logging", {})

    return ConfigSource(
        database_directory=_optional_path(database.get("directory")),
        database_archive=_optional_path(database.get("archive")),
        database_extension=database.get("extension"),
        scan_chunk_size=scan.get("chunk_size"),
        scan_keep_going=scan.get("keep_going"),
        reports_log_directory=_optional_path(reports.get("log_directory")),
        logging_level=logging_conf.get("level"),
        logging_file=_optional_path(logging_conf.get("file")),
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from DUMPCHECK_* environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        database_directory=reader.get_path("DUMPCHECK_DB_DIR"),
        database_archive=reader.get_path("DUMPCHECK_DB_ARCHIVE"),
        database_extension=reader.get_str("DUMPCHECK_DB_EXTENSION"),
        scan_chunk_size=reader.get_int("DUMPCHECK_CHUNK_SIZE"),
        scan_keep_going=reader.get_bool("DUMPCHECK_KEEP_GOING"),
        reports_log_directory=reader.get_path("DUMPCHECK_LOG_DIR"),
        logging_level=reader.get_str("DUMPCHECK_LOG_LEVEL"),
        logging_file=reader.get_path("DUMPCHECK_LOG_FILE"),
        logging_format=reader.get_str("DUMPCHECK_LOG_FORMAT"),
    )
