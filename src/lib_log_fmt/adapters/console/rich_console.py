"""Rich-powered console handler implementing :class:`HandlerPort`.

Purpose
-------
Echo every dispatched message to an interactive terminal with per-level
colours, next to the plain logfmt sink.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleHandler` - handler registered via ``Logger.add_handler``.

System Role
-----------
Human-facing secondary consumer; the sink stays the machine-readable record.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Mapping

from rich.console import Console

from lib_log_fmt.application.ports.handler import HandlerPort
from lib_log_fmt.domain.levels import LogLevel
from lib_log_fmt.domain.message import Message, OutputFlags

#: Default Rich styles keyed by :class:`LogLevel`.
_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}


class RichConsoleHandler(HandlerPort):
    """Print messages as logfmt lines using Rich styles."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: Mapping[LogLevel | str, str] | None = None,
        flags: int = OutputFlags.DEFAULT,
    ) -> None:
        """Configure the handler with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(stderr=True, force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        self._flags = flags
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def style_for(self, level: LogLevel) -> str:
        return "" if self._no_color else self._style_map.get(level, "")

    def handle(self, messages: Sequence[Message]) -> None:
        """Print each message on its own line.

        Examples
        --------
        >>> from io import StringIO
        >>> from datetime import datetime, timezone
        >>> msg = Message.create(None, LogLevel.WARNING, "disk low",
        ...                      clock=lambda: datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc))
        >>> console = Console(file=StringIO(), record=True, width=200)
        >>> RichConsoleHandler(console=console).handle([msg])
        >>> console.export_text()
        '2025-09-30T12:00:00.000000+0000 warn msg="disk low"\\n'
        """
        for message in messages:
            self._console.print(
                message.logfmt(self._flags),
                style=self.style_for(message.level),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )


__all__ = ["RichConsoleHandler"]
