"""Shared config loading for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from dumpcheck.cli.exit_codes import ExitCode
from dumpcheck.cli.output import error_exit
from dumpcheck.config import DumpcheckConfig, TomlParseError, get_config


def load_config_or_exit(
    ctx: click.Context,
    *,
    json_output: bool = False,
    **overrides: Any,
) -> DumpcheckConfig:
    """Resolve configuration for a command, exiting with CONFIG_ERROR on failure.

    Args:
        ctx: Click context; ``ctx.obj["config_path"]`` selects the config file.
        json_output: Whether errors are reported as JSON.
        **overrides: CLI overrides passed to get_config().

    Returns:
        The resolved configuration.
    """
    obj = ctx.find_root().obj or {}
    config_path: Path | None = obj.get("config_path")
    try:
        return get_config(config_path=config_path, strict=True, **overrides)
    except (TomlParseError, ValueError) as e:
        error_exit(f"Invalid configuration: {e}", ExitCode.CONFIG_ERROR, json_output)
