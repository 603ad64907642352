from __future__ import annotations

import io

import pytest
from rich.console import Console

from lib_log_fmt import Logger, LogLevel, Message, OutputFlags
from lib_log_fmt.adapters import RichConsoleHandler
from tests.doubles import FixedClock
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def _message(level: LogLevel, text: str = "disk low") -> Message:
    return Message.create(None, level, text, clock=FixedClock().now)


def _console(*, colours: bool) -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    if colours:
        console = Console(file=buffer, force_terminal=True, color_system="standard", width=200)
    else:
        console = Console(file=buffer, force_terminal=False, width=200)
    return console, buffer


def test_handler_prints_the_logfmt_line() -> None:
    console, buffer = _console(colours=False)
    RichConsoleHandler(console=console, flags=OutputFlags.NONE).handle([_message(LogLevel.INFO, "ready")])
    assert buffer.getvalue() == "info msg=ready\n"


def test_handler_prints_every_message_of_a_batch() -> None:
    console, buffer = _console(colours=False)
    batch = [_message(LogLevel.INFO, "one"), _message(LogLevel.ERROR, "two")]
    RichConsoleHandler(console=console, flags=OutputFlags.NONE).handle(batch)
    assert buffer.getvalue() == "info msg=one\nerror msg=two\n"


def test_handler_styles_lines_by_level() -> None:
    console, buffer = _console(colours=True)
    RichConsoleHandler(console=console, flags=OutputFlags.NONE).handle([_message(LogLevel.ERROR)])
    assert "\x1b[" in buffer.getvalue()
    assert 'error msg="disk low"' in buffer.getvalue()


def test_no_color_disables_styles() -> None:
    handler = RichConsoleHandler(console=Console(file=io.StringIO()), no_color=True)
    assert handler.style_for(LogLevel.ERROR) == ""


def test_markup_in_messages_is_printed_literally() -> None:
    console, buffer = _console(colours=False)
    RichConsoleHandler(console=console, flags=OutputFlags.NONE).handle([_message(LogLevel.INFO, "[bold]x[/bold]")])
    assert buffer.getvalue() == 'info msg="[bold]x[/bold]"\n'


@pytest.mark.parametrize(
    "styles, level, expected",
    [
        ({"warn": "magenta"}, LogLevel.WARNING, "magenta"),
        ({LogLevel.DEBUG: "blue"}, LogLevel.DEBUG, "blue"),
        ({"warn": "magenta"}, LogLevel.ERROR, "bold red"),
    ],
)
def test_style_overrides(styles: dict, level: LogLevel, expected: str) -> None:
    handler = RichConsoleHandler(console=Console(file=io.StringIO()), styles=styles)
    assert handler.style_for(level) == expected


def test_handler_receives_dispatched_messages() -> None:
    console, buffer = _console(colours=False)
    logger = Logger(
        sink=io.StringIO(),
        clock=FixedClock(),
        handlers=[RichConsoleHandler(console=console, flags=OutputFlags.NONE)],
    )
    logger.warn(None, "disk low")
    assert buffer.getvalue() == 'warn msg="disk low"\n'
