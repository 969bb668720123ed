"""Reference database commands for dumpcheck CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from dumpcheck.cli.config_loader import load_config_or_exit
from dumpcheck.cli.exit_codes import ExitCode
from dumpcheck.cli.output import error_exit, warning_output
from dumpcheck.config import DatabaseConfig
from dumpcheck.datfile import (
    ArchiveCleanupError,
    DatabaseArchiveError,
    ReferenceLoadError,
    database_present,
    extract_database_archive,
    load_reference_index,
)

logger = logging.getLogger(__name__)


def _should_delete_archive(
    delete_archive: bool | None,
    archive: Path,
    json_output: bool = False,
) -> bool:
    """Resolve --delete-archive/--keep-archive, asking when interactive.

    JSON mode never prompts, so the archive is kept unless a flag says
    otherwise.
    """
    if delete_archive is not None:
        return delete_archive
    if json_output:
        return False

    from dumpcheck.cli import _is_interactive

    if not _is_interactive() or not archive.is_file():
        return False
    return click.confirm(f"Delete the archive {archive}?", default=False)


def extract_or_exit(
    database: DatabaseConfig,
    delete_archive: bool | None,
    json_output: bool = False,
) -> int:
    """Extract the database archive, exiting with a CLI error on failure.

    A failure to delete the archive after extraction is only a warning.

    Returns:
        Number of files extracted.
    """
    delete = _should_delete_archive(delete_archive, database.archive, json_output)
    if not json_output:
        click.echo(f"Extracting {database.archive} into {database.directory}...")
    try:
        count = extract_database_archive(
            database.archive, database.directory, delete_archive=delete
        )
    except ArchiveCleanupError as e:
        warning_output(str(e), json_output)
        return e.extracted
    except DatabaseArchiveError as e:
        error_exit(str(e), ExitCode.OPERATION_FAILED, json_output)

    if delete and not json_output:
        click.echo(f"Deleted {database.archive}")
    return count


def ensure_database_or_exit(
    database: DatabaseConfig,
    json_output: bool = False,
) -> None:
    """Make sure the database directory exists, extracting the archive if needed.

    Exits with DATABASE_NOT_FOUND when neither the directory nor the archive
    is available.
    """
    if database_present(database.directory):
        logger.debug("Reference database found at %s", database.directory)
        return

    if database.archive.is_file():
        logger.info(
            "Database directory %s missing, extracting %s",
            database.directory,
            database.archive,
        )
        extract_or_exit(database, delete_archive=None, json_output=json_output)
        return

    error_exit(
        f"No reference database found at {database.directory}",
        ExitCode.DATABASE_NOT_FOUND,
        json_output,
        hint=(
            f"Place the No-Intro zip at {database.archive} or run "
            "'dumpcheck db extract <archive>'."
        ),
    )


@click.group("db")
def db_group() -> None:
    """Manage the reference database."""


@db_group.command("extract")
@click.argument(
    "archive",
    required=False,
    type=click.Path(path_type=Path, dir_okay=False),
)
@click.option(
    "--db",
    "db_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Database directory. Default: ~/.dumpcheck/db",
)
@click.option(
    "--delete-archive/--keep-archive",
    default=None,
    help="Delete the archive after extracting (asks when interactive).",
)
@click.pass_context
def extract_command(
    ctx: click.Context,
    archive: Path | None,
    db_dir: Path | None,
    delete_archive: bool | None,
) -> None:
    """Extract a reference database zip archive.

    Examples:

        dumpcheck db extract ~/Downloads/No-Intro.zip

        dumpcheck db extract --db /srv/dats --keep-archive
    """
    config = load_config_or_exit(
        ctx, database_directory=db_dir, database_archive=archive
    )
    count = extract_or_exit(config.database, delete_archive)
    click.echo(f"Extracted {count:,} file(s) into {config.database.directory}")


@db_group.command("info")
@click.option(
    "--db",
    "db_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Database directory. Default: ~/.dumpcheck/db",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results in JSON format.",
)
@click.pass_context
def info_command(ctx: click.Context, db_dir: Path | None, json_output: bool) -> None:
    """Summarize the reference documents in the database directory."""
    config = load_config_or_exit(
        ctx, json_output=json_output, database_directory=db_dir
    )
    database = config.database

    try:
        index = load_reference_index(
            database.directory, database.extension, isolate_errors=True
        )
    except ReferenceLoadError as e:
        error_exit(str(e), ExitCode.DATABASE_NOT_FOUND, json_output)

    if json_output:
        data = {
            "directory": str(database.directory),
            "documents": len(index.documents),
            "digests": len(index),
            "entries_read": index.entries_read,
        }
        if index.errors:
            data["errors"] = [{"path": p, "error": e} for p, e in index.errors]
        click.echo(json.dumps(data, indent=2))
    else:
        click.echo(f"Database: {database.directory}")
        click.echo(f"  Documents: {len(index.documents):,}")
        click.echo(f"  Digests: {len(index):,}")
        duplicates = index.entries_read - len(index)
        if duplicates:
            click.echo(f"  Redeclared digests: {duplicates:,}")
        for path, error in index.errors:
            click.echo(f"  Unreadable: {path}: {error}", err=True)

    if index.errors:
        ctx.exit(ExitCode.WARNINGS)
