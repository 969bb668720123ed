"""Environment variable reader with dependency injection support.

Reads ``DUMPCHECK_*`` overrides with type conversion. Tests pass an explicit
mapping instead of patching ``os.environ``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "DUMPCHECK_"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off", ""})


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        reader = EnvReader(env={"DUMPCHECK_CHUNK_SIZE": "4096"})
        reader.get_int("DUMPCHECK_CHUNK_SIZE")  # 4096
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Get a string, or default if unset or blank."""
        value = self._env.get(var)
        if value is None or not value.strip():
            return default
        return value.strip()

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer, or default if unset or unparseable.

        Logs a warning if the value is set but cannot be parsed.
        """
        value = self.get_str(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean.

        Recognizes true/1/yes/on and false/0/no/off (case-insensitive).
        Anything else logs a warning and returns default.
        """
        value = self._env.get(var)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("Invalid boolean value for %s: %s", var, value)
        return default

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Get a path with tilde expansion. Existence is not checked."""
        value = self.get_str(var)
        if value is None:
            return default
        return Path(value).expanduser()
