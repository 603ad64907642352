"""CLI adapter for ``lib_log_fmt`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the logger from the shell: emit single records and relay the lines of
another program's output as logfmt records.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root group wiring traceback handling and ``.env`` loading.
* :func:`cli_info` – prints the metadata banner.
* :func:`cli_emit` – renders one record to standard output.
* :func:`cli_pipe` – feeds standard input through a :class:`WriterAdapter`.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer; it only composes a :class:`~lib_log_fmt.logger.Logger` and
calls its public operations.
"""

from __future__ import annotations

import sys
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from . import __init__conf__
from . import config as config_module
from .domain.context import EMPTY_CONTEXT, Property, PropagationContext, attach_properties
from .domain.errors import InvalidLevelError
from .domain.levels import LogLevel
from .domain.message import OutputFlags
from .domain.options import Option, with_code, with_status, with_value
from .logger import Logger

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _parse_pair(raw: str, param_hint: str) -> Property:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint=param_hint)
    return Property(key, value)


def _parse_level(raw: str, param_hint: str) -> LogLevel:
    try:
        return LogLevel.from_name(raw)
    except InvalidLevelError as exc:
        raise click.BadParameter(str(exc), param_hint=param_hint) from exc


def _context_from(props: Sequence[str]) -> PropagationContext:
    return attach_properties(EMPTY_CONTEXT, *(_parse_pair(raw, "--prop") for raw in props))


def _flags_from(base: OutputFlags, *, lf_only: bool, utc: bool, no_timestamp: bool) -> OutputFlags:
    flags = base
    if lf_only:
        flags |= OutputFlags.LF_ONLY
    if utc:
        flags |= OutputFlags.UTC
    if no_timestamp:
        flags &= ~OutputFlags.TIMESTAMP
    return flags


@click.group(
    help="Structured logfmt logging",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message="%(prog)s version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading LOG_* settings (default: ${config_module.DOTENV_ENV_VAR})",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: Optional[bool]) -> None:
    """Root command configuring traceback handling and ``.env`` loading."""

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if use_dotenv is None:
        use_dotenv = config_module.dotenv_requested()
    if use_dotenv:
        config_module.enable_dotenv()

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata so users can confirm installation."""

    click.echo(summary_info(), nl=False)


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level")
@click.argument("text")
@click.option("--prop", "props", multiple=True, metavar="KEY=VALUE", help="Context property (repeatable)")
@click.option("--value", "values", multiple=True, metavar="KEY=VALUE", help="Explicit property (repeatable)")
@click.option("--code", default=None, help="Application code")
@click.option("--status", type=int, default=None, help="Status number, e.g. an HTTP status")
@click.option("--lf-only", is_flag=True, help="Terminate the record with a bare line feed")
@click.option("--utc", is_flag=True, help="Render the timestamp in UTC")
@click.option("--no-timestamp", is_flag=True, help="Leave the timestamp out")
def cli_emit(
    level: str,
    text: str,
    props: Sequence[str],
    values: Sequence[str],
    code: Optional[str],
    status: Optional[int],
    lf_only: bool,
    utc: bool,
    no_timestamp: bool,
) -> None:
    """Render one record at LEVEL with message TEXT to standard output."""

    resolved = _parse_level(level, "LEVEL")
    settings = config_module.load_settings()
    options: list[Option] = [with_value(p.key, p.value) for p in (_parse_pair(raw, "--value") for raw in values)]
    if code is not None:
        options.append(with_code(code))
    if status is not None:
        options.append(with_status(status))
    logger = Logger(
        min_level=LogLevel.DEBUG,
        flags=_flags_from(settings.flags, lf_only=lf_only, utc=utc, no_timestamp=no_timestamp),
    )
    logger.log(resolved, _context_from(props), text, *options)


@cli.command("pipe", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--prop", "props", multiple=True, metavar="KEY=VALUE", help="Context property (repeatable)")
@click.option("--min-level", default=None, help="Minimum level to write (default: $LOG_MIN_LEVEL or info)")
@click.option("--lf-only", is_flag=True, help="Terminate records with a bare line feed")
@click.option("--utc", is_flag=True, help="Render timestamps in UTC")
def cli_pipe(props: Sequence[str], min_level: Optional[str], lf_only: bool, utc: bool) -> None:
    """Log every line of standard input; lines mentioning errors become error records."""

    settings = config_module.load_settings()
    logger = Logger(
        min_level=_parse_level(min_level, "--min-level") if min_level else settings.min_level,
        flags=_flags_from(settings.flags, lf_only=lf_only, utc=utc, no_timestamp=False),
    )
    writer = logger.new_writer(_context_from(props))
    for line in sys.stdin:
        writer.write(line)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=__init__conf__.shell_command,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
