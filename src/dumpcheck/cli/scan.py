"""Scan command for dumpcheck CLI."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from dumpcheck import __version__
from dumpcheck.cli.config_loader import load_config_or_exit
from dumpcheck.cli.db import ensure_database_or_exit
from dumpcheck.cli.exit_codes import ExitCode
from dumpcheck.cli.output import error_exit, warning_output
from dumpcheck.core import DirectoryWalkError, FileHashError
from dumpcheck.datfile import (
    ReferenceIndex,
    ReferenceLoadError,
    ReferenceParseError,
    load_reference_index,
)
from dumpcheck.domain import MatchStatus, ScannedFile, ScanType
from dumpcheck.reports import (
    LogWriteError,
    default_log_path,
    format_file_record,
    result_to_dict,
    write_log,
)
from dumpcheck.scanner import ScanOrchestrator, ScanResult, TargetNotFoundError

logger = logging.getLogger(__name__)


class ProgressDisplay:
    """Display progress for scan operations.

    Shows a single status line that updates in place using carriage return.
    Only active when output is a TTY and not JSON mode.
    """

    def __init__(self, *, enabled: bool = True):
        """Initialize the progress display.

        Args:
            enabled: Whether to show progress output.
        """
        self._enabled = enabled and sys.stdout.isatty()
        self._phase = ""
        self._has_output = False

    def _write(self, text: str) -> None:
        """Write text to stdout, clearing previous line."""
        if not self._enabled:
            return
        # \r moves to start of line, \033[K clears to end of line
        sys.stdout.write(f"\r\033[K{text}")
        sys.stdout.flush()
        self._has_output = True

    def _finish_line(self) -> None:
        """Finish current line with newline."""
        if self._enabled and self._has_output:
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._has_output = False

    def on_document_loaded(
        self, position: int, total: int, path: Path, entries: int
    ) -> None:
        """Called after each reference document is merged into the index."""
        if self._phase != "index":
            self._finish_line()
            self._phase = "index"
        self._write(f"Loading database... {position:,}/{total:,} [{path.name}]")

    def on_hash_progress(
        self, position: int, total: int, label: str, display_path: str
    ) -> None:
        """Called before each target file is hashed."""
        if self._phase != "hash":
            self._finish_line()
            self._phase = "hash"
        self._write(f"[HASHING {label}] {display_path}")

    def finish(self) -> None:
        """Finish all progress display."""
        self._finish_line()
        self._phase = ""


def _load_index_or_exit(
    directory: Path,
    extension: str,
    *,
    isolate_errors: bool,
    progress: ProgressDisplay,
    json_output: bool,
) -> ReferenceIndex:
    try:
        return load_reference_index(
            directory, extension, isolate_errors=isolate_errors, progress=progress
        )
    except ReferenceParseError as e:
        progress.finish()
        error_exit(
            str(e),
            ExitCode.PARSE_ERROR,
            json_output,
            hint="Re-extract the database or rerun with --keep-going.",
        )
    except ReferenceLoadError as e:
        progress.finish()
        error_exit(str(e), ExitCode.OPERATION_FAILED, json_output)


def _format_summary(result: ScanResult, index: ReferenceIndex) -> list[str]:
    lines = [
        f"Scanned {result.target} ({result.scan_type.value})",
        f"  Reference digests: {len(index):,}",
        f"  Files: {result.files_found:,}",
        f"  Found: {result.files_matched:,}",
        f"  No match: {result.files_unmatched:,}",
    ]
    if result.files_empty:
        lines.append(f"  Empty: {result.files_empty:,}")
    if result.files_errored:
        lines.append(f"  Errors: {result.files_errored:,}")
    lines.append(f"  Time: {result.elapsed_seconds:.1f}s")
    return lines


def _echo_single_file(scanned: ScannedFile) -> None:
    """Show the full record when the target is one file."""
    for line in format_file_record(scanned).splitlines():
        click.echo(line)


@click.command("scan")
@click.argument(
    "target",
    type=click.Path(path_type=Path),
)
@click.option(
    "--db",
    "db_dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Reference database directory. Default: ~/.dumpcheck/db",
)
@click.option(
    "--log-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory for the scan log. Default: ~/.dumpcheck/logs",
)
@click.option(
    "--no-log",
    is_flag=True,
    default=False,
    help="Do not write a scan log.",
)
@click.option(
    "--keep-going/--fail-fast",
    default=None,
    help="Record unreadable files and documents instead of aborting.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output results in JSON format.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Show every file result.",
)
@click.pass_context
def scan_command(
    ctx: click.Context,
    target: Path,
    db_dir: Path | None,
    log_dir: Path | None,
    no_log: bool,
    keep_going: bool | None,
    json_output: bool,
    verbose: bool,
) -> None:
    """Identify a dump file, or every file in a folder, by MD5.

    TARGET is a file or directory. Directories are walked recursively in
    case-insensitive path order.

    Examples:

        dumpcheck scan "Super Game (USA).sfc"

        dumpcheck scan --verbose ~/roms/snes

        dumpcheck scan --json --no-log ~/roms > results.json
    """
    config = load_config_or_exit(
        ctx,
        json_output=json_output,
        database_directory=db_dir,
        log_directory=log_dir,
        keep_going=keep_going,
    )

    if not target.exists():
        error_exit(
            f"File/folder not found: {target}",
            ExitCode.TARGET_NOT_FOUND,
            json_output,
        )

    ensure_database_or_exit(config.database, json_output)

    progress = ProgressDisplay(enabled=not json_output)
    isolate = config.scan.keep_going

    try:
        index = _load_index_or_exit(
            config.database.directory,
            config.database.extension,
            isolate_errors=isolate,
            progress=progress,
            json_output=json_output,
        )
        if len(index) == 0:
            warning_output(
                f"No reference entries found in {config.database.directory}",
                json_output,
            )

        orchestrator = ScanOrchestrator(
            chunk_size=config.scan.chunk_size, isolate_errors=isolate
        )
        files, result = orchestrator.scan(target, index, scan_progress=progress)
    except KeyboardInterrupt:
        progress.finish()
        error_exit("Scan interrupted.", ExitCode.INTERRUPTED, json_output)
    except TargetNotFoundError as e:
        progress.finish()
        error_exit(str(e), ExitCode.TARGET_NOT_FOUND, json_output)
    except (FileHashError, DirectoryWalkError) as e:
        progress.finish()
        error_exit(
            str(e),
            ExitCode.OPERATION_FAILED,
            json_output,
            hint="Rerun with --keep-going to record unreadable files and continue.",
        )
    progress.finish()

    log_path: Path | None = None
    if not no_log:
        log_path = default_log_path(
            config.reports.log_directory, int(result.started_at.timestamp())
        )
        try:
            write_log(log_path, files, result, __version__)
        except LogWriteError as e:
            error_exit(str(e), ExitCode.OPERATION_FAILED, json_output)

    if json_output:
        data = result_to_dict(files, result)
        data["log_file"] = str(log_path) if log_path is not None else None
        if index.errors:
            data["database_errors"] = [
                {"path": p, "error": e} for p, e in index.errors
            ]
        click.echo(json.dumps(data, indent=2))
    else:
        if result.scan_type is ScanType.FILE and files:
            _echo_single_file(files[0])
        elif verbose:
            for scanned in files:
                if scanned.match.status is MatchStatus.FOUND:
                    click.echo(f"  {scanned.path}: {scanned.match.name}")
                elif scanned.error is not None:
                    click.echo(f"  {scanned.path}: error: {scanned.error}")
                elif scanned.is_empty:
                    click.echo(f"  {scanned.path}: {scanned.digest}")
                else:
                    click.echo(f"  {scanned.path}: {scanned.match}")
        for line in _format_summary(result, index):
            click.echo(line)
        if log_path is not None:
            click.echo(f"Log: {log_path}")
        for path, error in result.errors:
            warning_output(f"{path}: {error}")

    if result.errors or index.errors:
        ctx.exit(ExitCode.WARNINGS)
