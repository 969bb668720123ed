"""Tests for EnvReader class."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dumpcheck.config.env import EnvReader


class TestEnvReaderGetStr:
    """Tests for EnvReader.get_str method."""

    def test_returns_value_when_set(self) -> None:
        reader = EnvReader(env={"MY_VAR": "hello"})
        assert reader.get_str("MY_VAR") == "hello"

    def test_returns_default_when_not_set(self) -> None:
        reader = EnvReader(env={})
        assert reader.get_str("MY_VAR") is None
        assert reader.get_str("MY_VAR", "default") == "default"

    def test_blank_value_falls_back_to_default(self) -> None:
        """Empty or whitespace-only values count as unset."""
        reader = EnvReader(env={"MY_VAR": "   "})
        assert reader.get_str("MY_VAR", "default") == "default"

    def test_strips_whitespace(self) -> None:
        reader = EnvReader(env={"MY_VAR": "  value \n"})
        assert reader.get_str("MY_VAR") == "value"


class TestEnvReaderGetInt:
    """Tests for EnvReader.get_int method."""

    def test_parses_integer(self) -> None:
        reader = EnvReader(env={"DUMPCHECK_CHUNK_SIZE": "4096"})
        assert reader.get_int("DUMPCHECK_CHUNK_SIZE") == 4096

    def test_returns_default_when_not_set(self) -> None:
        assert EnvReader(env={}).get_int("MY_VAR", 100) == 100

    def test_returns_default_and_warns_for_invalid(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        reader = EnvReader(env={"MY_VAR": "lots"})
        with caplog.at_level(logging.WARNING):
            result = reader.get_int("MY_VAR", 100)
        assert result == 100
        assert "Invalid integer value for MY_VAR: lots" in caplog.text


class TestEnvReaderGetBool:
    """Tests for EnvReader.get_bool method."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "on"])
    def test_true_values(self, value: str) -> None:
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR") is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "off", ""])
    def test_false_values(self, value: str) -> None:
        assert EnvReader(env={"MY_VAR": value}).get_bool("MY_VAR") is False

    def test_unset_returns_default(self) -> None:
        assert EnvReader(env={}).get_bool("MY_VAR") is None
        assert EnvReader(env={}).get_bool("MY_VAR", True) is True

    def test_invalid_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        reader = EnvReader(env={"MY_VAR": "maybe"})
        with caplog.at_level(logging.WARNING):
            assert reader.get_bool("MY_VAR", False) is False
        assert "Invalid boolean value for MY_VAR: maybe" in caplog.text


class TestEnvReaderGetPath:
    """Tests for EnvReader.get_path method."""

    def test_returns_path(self) -> None:
        reader = EnvReader(env={"MY_VAR": "/srv/dats"})
        assert reader.get_path("MY_VAR") == Path("/srv/dats")

    def test_expands_tilde(self) -> None:
        reader = EnvReader(env={"MY_VAR": "~/dats"})
        assert reader.get_path("MY_VAR") == Path.home() / "dats"

    def test_unset_returns_default(self) -> None:
        default = Path("/default")
        assert EnvReader(env={}).get_path("MY_VAR", default) == default
