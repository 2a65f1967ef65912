from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, NoReturn

import click.utils as click_utils
import typer

from gigafind._meta import logger
from gigafind.adapters.notify import DEFAULT_TIMEOUT, send_notification
from gigafind.adapters.render import OutputFormat, RenderOptions, render
from gigafind.adapters.traversal import FindProvider, ListingProvider
from gigafind.cli._shared import configure_logging, is_tty_stdout, resolve_use_color
from gigafind.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_UNAVAILABLE,
)
from gigafind.core.config import resolve_settings
from gigafind.core.model.thresholds import DEFAULT_MINIMUM_FILE_COUNT, build_config
from gigafind.core.model.types import DuplicatePolicy, KindFilter, ModeChoice
from gigafind.core.pipeline import DataError, run_scan
from gigafind.errors import ConfigError, DuplicateEntryError, SizeError, TraversalError
from gigafind.io import read_listing, write_output

if TYPE_CHECKING:
    from gigafind.adapters.traversal import TraversalProvider
    from gigafind.core.config import Settings
    from gigafind.core.model.thresholds import ScanConfig

_BOOL_FALSE = False


def _fail(message: str, code: int, exc: BaseException, *, debug: bool) -> NoReturn:
    typer.echo(f"ERROR: {message}", err=True)
    if debug:
        raise exc
    raise typer.Exit(code=code) from exc


def _build_scan_config(
    settings: Settings,
    *,
    path: str | None,
    mode: ModeChoice,
    only: KindFilter,
    minimum_file_size: str | None,
    minimum_dir_size: str | None,
    minimum_file_count: int | None,
    exclude: list[str],
    on_duplicate: DuplicatePolicy | None,
) -> ScanConfig:
    count = minimum_file_count if minimum_file_count is not None else settings.minimum_file_count
    duplicates = on_duplicate or DuplicatePolicy(settings.on_duplicate or DuplicatePolicy.KEEP_MAX)
    return build_config(
        root=path or settings.path or ".",
        mode=mode,
        minimum_file_size=minimum_file_size or settings.minimum_file_size,
        minimum_dir_size=minimum_dir_size or settings.minimum_dir_size,
        minimum_file_count=DEFAULT_MINIMUM_FILE_COUNT if count is None else count,
        exclude=[*settings.exclude, *exclude],
        kinds=only,
        duplicates=duplicates,
    )


def _make_provider(listing: Path | None, *, debug: bool) -> TraversalProvider:
    if listing is None:
        return FindProvider()
    try:
        text = read_listing(listing)
    except OSError as exc:
        _fail(f"cannot read listing {listing}: {exc}", EXIT_NOINPUT, exc, debug=debug)
    return ListingProvider(text, source=str(listing))


def scan_cmd(
    path: Annotated[
        str | None,
        typer.Option("-p", "--path", help="Search the selected path.", show_default="."),
    ] = None,
    minimum_file_size: Annotated[
        str | None,
        typer.Option(
            "-m",
            "--minimum-file-size",
            help="Smallest file size to report (e.g. 200MB, 1.5G). Anything below is ignored.",
            show_default="200MB",
        ),
    ] = None,
    minimum_dir_size: Annotated[
        str | None,
        typer.Option(
            "--minimum-dir-size",
            help="Smallest directory size to report. Defaults to the file size threshold.",
        ),
    ] = None,
    minimum_file_count: Annotated[
        int | None,
        typer.Option(
            "-c",
            "--minimum-file-count",
            help="Find directories with at least this many files (count mode).",
            min=0,
            show_default=str(DEFAULT_MINIMUM_FILE_COUNT),
        ),
    ] = None,
    mode: Annotated[
        ModeChoice,
        typer.Option(
            "--mode",
            help="Rank by size or by file count; auto picks count mode unless a size threshold is given.",
            case_sensitive=False,
        ),
    ] = ModeChoice.AUTO,
    only: Annotated[
        KindFilter,
        typer.Option("--only", help="Restrict size mode to files or directories.", case_sensitive=False),
    ] = KindFilter.ALL,
    exclude: Annotated[
        list[str] | None,
        typer.Option("-x", "--exclude", help="Glob of paths to exclude, e.g. '*/.git/*' (repeatable)."),
    ] = None,
    on_duplicate: Annotated[
        DuplicatePolicy | None,
        typer.Option(
            "--on-duplicate",
            help="How to handle a path reported twice.",
            case_sensitive=False,
            show_default="keep-max",
        ),
    ] = None,
    google_chat: Annotated[
        str | None,
        typer.Option(
            "-g",
            "--google-chat",
            help="Google Chat webhook to send results to.",
            envvar="GIGAFIND_GOOGLE_CHAT",
        ),
    ] = None,
    host: Annotated[
        str | None,
        typer.Option("-H", "--host", help="Name of the server to pass to webhooks.", envvar="GIGAFIND_HOST"),
    ] = None,
    listing: Annotated[
        Path | None,
        typer.Option("--listing", help="Replay captured find/ls/du output from PATH ('-' for stdin)."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (default: ./gigafind.toml or ~/.config/gigafind)."),
    ] = None,
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", help="Console output format.", case_sensitive=False),
    ] = OutputFormat.HUMAN,
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write output to PATH (use '-' for stdout)."),
    ] = None,
    color: Annotated[
        bool,
        typer.Option("--color", help="Force color output"),
    ] = _BOOL_FALSE,
    no_color: Annotated[
        bool,
        typer.Option("--no-color", help="Disable color output"),
    ] = _BOOL_FALSE,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Only log errors."),
    ] = _BOOL_FALSE,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log commands and ignored entries."),
    ] = _BOOL_FALSE,
    debug: Annotated[
        bool,
        typer.Option("-d", "--debug", help="Verbose output and full tracebacks on errors."),
    ] = _BOOL_FALSE,
) -> None:
    """Find large files, large directories, or directories with many files."""
    configure_logging(quiet=quiet, verbose=verbose, debug=debug)

    try:
        settings = resolve_settings(config)
        scan_config = _build_scan_config(
            settings,
            path=path,
            mode=mode,
            only=only,
            minimum_file_size=minimum_file_size,
            minimum_dir_size=minimum_dir_size,
            minimum_file_count=minimum_file_count,
            exclude=exclude or [],
            on_duplicate=on_duplicate,
        )
    except (ConfigError, SizeError, ValueError) as exc:
        _fail(str(exc), EXIT_CONFIG, exc, debug=debug)

    logger.debug(
        "mode=%s unit=%s root=%s",
        scan_config.mode.value,
        scan_config.unit_label,
        scan_config.root,
    )

    provider = _make_provider(listing, debug=debug)
    try:
        outcome = run_scan(scan_config, provider)
    except TraversalError as exc:
        _fail(f"Failed to execute command: {exc} {exc.command or ''}".rstrip(), EXIT_UNAVAILABLE, exc, debug=debug)
    except (DataError, DuplicateEntryError) as exc:
        _fail(str(exc), EXIT_DATAERR, exc, debug=debug)

    is_tty_like = is_tty_stdout() and (output is None or output == Path("-"))
    color_allowed = bool(is_tty_like and not click_utils.should_strip_ansi(sys.stdout))
    use_color = resolve_use_color(color=color, no_color=no_color, color_allowed=color_allowed)

    text = render(outcome, fmt=fmt, options=RenderOptions(color=use_color, is_tty=is_tty_like or color))
    write_output(text, output)

    send_notification(
        google_chat or settings.google_chat,
        outcome,
        host=host or settings.host or "",
        timeout=DEFAULT_TIMEOUT,
    )
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("scan")(scan_cmd)


__all__ = ["register", "scan_cmd"]
