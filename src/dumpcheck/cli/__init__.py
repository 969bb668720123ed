"""CLI module for dumpcheck."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from dumpcheck import __version__

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Configure logging from the config file and environment plus CLI options.

    Options left unset keep the configured value. Invalid values raise
    ValueError from LoggingConfig.

    Args:
        config_path: Config file selected with --config.
        log_level: Override log level (debug, info, warning, error).
        log_file: Override log file path.
        log_json: Use JSON log format.
    """
    global _logging_configured
    if _logging_configured:
        return

    from dumpcheck.config import get_config
    from dumpcheck.logging import configure_logging

    overrides = {
        "level": log_level,
        "file": log_file,
        "format": "json" if log_json else None,
    }
    base = get_config(config_path=config_path).logging
    configure_logging(
        replace(base, **{k: v for k, v in overrides.items() if v is not None})
    )
    _logging_configured = True


def _is_interactive() -> bool:
    """Check if running in interactive mode (TTY).

    Extracted as a function to allow easier mocking in tests.
    """
    return sys.stdin.isatty()


@click.group()
@click.version_option(version=__version__, prog_name="dumpcheck")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.dumpcheck/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """dumpcheck - verify game dumps against No-Intro reference databases."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path

    try:
        _configure_logging(config_path, log_level, log_file, log_json)
    except ValueError as e:
        from dumpcheck.cli.exit_codes import ExitCode
        from dumpcheck.cli.output import error_exit

        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)


# Defer import to avoid circular dependency
def _register_commands():
    from dumpcheck.cli.db import db_group
    from dumpcheck.cli.scan import scan_command

    main.add_command(db_group)
    main.add_command(scan_command)


_register_commands()
