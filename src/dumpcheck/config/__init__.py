"""Configuration management for dumpcheck.

This module provides configuration loading with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (DUMPCHECK_*)
3. Config file (~/.dumpcheck/config.toml)
4. Default values (lowest priority)
"""

from dumpcheck.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from dumpcheck.config.env import EnvReader
from dumpcheck.config.loader import (
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from dumpcheck.config.models import (
    DatabaseConfig,
    DumpcheckConfig,
    LoggingConfig,
    ReportsConfig,
    ScanConfig,
)
from dumpcheck.config.toml_parser import TomlParseError, load_toml_file, parse_toml

__all__ = [
    # Models
    "DatabaseConfig",
    "DumpcheckConfig",
    "LoggingConfig",
    "ReportsConfig",
    "ScanConfig",
    # Loader
    "clear_config_cache",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "parse_toml",
    "load_toml_file",
    "TomlParseError",
]
