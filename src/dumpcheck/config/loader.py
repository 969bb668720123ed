"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (DUMPCHECK_*)
3. Config file (~/.dumpcheck/config.toml)
4. Default values

Environment variables:
- DUMPCHECK_DATA_DIR: Data directory (overrides ~/.dumpcheck/)
- DUMPCHECK_CONFIG_PATH: Path to config file (overrides <data dir>/config.toml)
- DUMPCHECK_DB_DIR: Reference database directory
- DUMPCHECK_DB_ARCHIVE: Reference database zip archive
- DUMPCHECK_DB_EXTENSION: Reference document extension
- DUMPCHECK_LOG_DIR: Directory for scan logs
- DUMPCHECK_CHUNK_SIZE: Hashing read size in bytes
- DUMPCHECK_KEEP_GOING: Record failures instead of aborting
- DUMPCHECK_LOG_LEVEL, DUMPCHECK_LOG_FILE, DUMPCHECK_LOG_FORMAT: Logging
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from dumpcheck.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from dumpcheck.config.env import EnvReader
from dumpcheck.config.models import DEFAULT_DATA_DIR, DumpcheckConfig
from dumpcheck.config.toml_parser import TomlParseError, load_toml_file

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
_config_cache: dict[Path, tuple[dict, float]] = {}
_config_cache_lock = threading.Lock()


def get_data_dir(env_reader: EnvReader | None = None) -> Path:
    """Get the dumpcheck data directory.

    Holds config.toml, the extracted database (db/), its archive (db.zip)
    and scan logs (logs/). Overridden by DUMPCHECK_DATA_DIR.
    """
    reader = env_reader or EnvReader()
    return reader.get_path("DUMPCHECK_DATA_DIR") or DEFAULT_DATA_DIR


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, overridden by DUMPCHECK_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    env_path = reader.get_path("DUMPCHECK_CONFIG_PATH")
    if env_path is not None:
        return env_path
    return get_data_dir(reader) / CONFIG_FILE_NAME


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise TomlParseError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        TomlParseError: When strict=True and the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except OSError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        try:
            result = load_toml_file(path, strict=True)
        except TomlParseError as e:
            # Failures are not cached so a later strict load still reports them
            if strict:
                raise
            logger.warning("Ignoring config file: %s", e)
            return {}
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    database_directory: Path | None = None,
    database_archive: Path | None = None,
    log_directory: Path | None = None,
    chunk_size: int | None = None,
    keep_going: bool | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> DumpcheckConfig:
    """Get dumpcheck configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides DUMPCHECK_CONFIG_PATH).
        database_directory: CLI override for the database directory.
        database_archive: CLI override for the database archive.
        log_directory: CLI override for the scan log directory.
        chunk_size: CLI override for the hashing read size.
        keep_going: CLI override for error isolation.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise TomlParseError on config file parse failures.

    Returns:
        DumpcheckConfig with merged configuration.

    Raises:
        TomlParseError: When strict=True and the config file cannot be parsed.
        ValueError: If a resolved value is invalid.
    """
    reader = env_reader or EnvReader()

    if config_path is None:
        config_path = get_default_config_path(reader)
    file_config = load_config_file(config_path, strict=strict)

    cli_source = ConfigSource(
        database_directory=database_directory,
        database_archive=database_archive,
        reports_log_directory=log_directory,
        scan_chunk_size=chunk_size,
        scan_keep_going=keep_going,
    )

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    builder.apply(cli_source, source_name="cli")

    return builder.build(get_data_dir(reader))
