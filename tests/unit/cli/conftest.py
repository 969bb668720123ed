"""Fixtures for CLI tests."""

from pathlib import Path
from unittest import mock

import pytest
from click.testing import CliRunner

from dumpcheck.config.loader import clear_config_cache


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolate_cli(temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the data directory at a temp dir and leave root logging alone."""
    for var in (
        "DUMPCHECK_CONFIG_PATH",
        "DUMPCHECK_DB_DIR",
        "DUMPCHECK_DB_ARCHIVE",
        "DUMPCHECK_DB_EXTENSION",
        "DUMPCHECK_LOG_DIR",
        "DUMPCHECK_CHUNK_SIZE",
        "DUMPCHECK_KEEP_GOING",
        "DUMPCHECK_LOG_LEVEL",
        "DUMPCHECK_LOG_FILE",
        "DUMPCHECK_LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DUMPCHECK_DATA_DIR", str(temp_dir))
    clear_config_cache()
    with mock.patch("dumpcheck.cli._configure_logging"):
        yield
    clear_config_cache()
