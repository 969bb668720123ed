"""Tests for logging/context.py module."""

import logging

from dumpcheck.logging.context import (
    ScanContextFilter,
    clear_scan_context,
    get_scan_context,
    scan_context,
    set_scan_context,
)


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="dumpcheck.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello",
        args=(),
        exc_info=None,
    )


class TestScanContext:
    """Tests for the scan context variables."""

    def teardown_method(self) -> None:
        clear_scan_context()

    def test_default_is_empty(self) -> None:
        assert get_scan_context() == (None, None)

    def test_set_and_clear(self) -> None:
        set_scan_context(" 7/100", "/roms/game.gb")
        assert get_scan_context() == (" 7/100", "/roms/game.gb")
        clear_scan_context()
        assert get_scan_context() == (None, None)

    def test_context_manager_restores_previous(self) -> None:
        set_scan_context("1/2", "/roms/a.gb")
        with scan_context("2/2", "/roms/b.gb"):
            assert get_scan_context() == ("2/2", "/roms/b.gb")
        assert get_scan_context() == ("1/2", "/roms/a.gb")

    def test_context_manager_restores_on_error(self) -> None:
        try:
            with scan_context("1/1", "/roms/a.gb"):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_scan_context() == (None, None)


class TestScanContextFilter:
    """Tests for ScanContextFilter."""

    def teardown_method(self) -> None:
        clear_scan_context()

    def test_adds_tag_inside_context(self) -> None:
        record = _record()
        with scan_context(" 7/100", "/roms/game.gb"):
            assert ScanContextFilter().filter(record) is True
        assert record.scan_position == " 7/100"
        assert record.file_path == "/roms/game.gb"
        assert record.scan_tag == "[ 7/100] "

    def test_empty_tag_outside_context(self) -> None:
        record = _record()
        ScanContextFilter().filter(record)
        assert record.scan_position is None
        assert record.scan_tag == ""
