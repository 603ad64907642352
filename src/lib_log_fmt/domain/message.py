"""Log message that doubles as an error value.

Purpose
-------
Represent one logging call: severity, constant text, optional error, explicit
properties, a snapshot of the context chain, and optional code/status. Because
:class:`Message` is an :class:`Exception`, a logging call can be raised or
returned directly from an operation that failed.

Contents
--------
* :class:`OutputFlags` – rendering switches (timestamp, UTC, LF-only).
* :class:`Message` – the immutable record with logfmt rendering helpers.

System Role
-----------
Built by :class:`lib_log_fmt.logger.Logger` for every call (suppressed or not)
and rendered by the dispatch use case through a pooled
:class:`~lib_log_fmt.domain.buffer.RecordBuffer`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntFlag
from typing import Any, Callable, Iterable

from .buffer import RecordBuffer
from .context import Property, PropagationContext, iter_chain, read_chain
from .levels import LogLevel
from .logfmt import safe_str
from .options import MessageDraft, Option


class OutputFlags(IntFlag):
    """Bits controlling how a message is rendered."""

    NONE = 0
    TIMESTAMP = 1
    UTC = 2
    LF_ONLY = 4
    DEFAULT = TIMESTAMP


class Message(Exception):
    """Structured log record; ``str(message)`` is the message text.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_fmt.domain.options import with_code, with_status
    >>> msg = Message.create(
    ...     None, LogLevel.ERROR, "cannot open file", [with_code("E42"), with_status(500)],
    ...     clock=lambda: datetime(2009, 2, 13, 23, 31, 30, 987654, tzinfo=timezone.utc),
    ... )
    >>> str(msg)
    'cannot open file'
    >>> msg.logfmt()
    '2009-02-13T23:31:30.987654+0000 error msg="cannot open file" code=E42 status=500'
    """

    def __init__(
        self,
        *,
        timestamp: datetime,
        level: LogLevel,
        text: str,
        error: BaseException | None = None,
        properties: Iterable[Property] = (),
        context_properties: Iterable[Property] = (),
        code: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(text)
        self._timestamp = timestamp
        self._level = level
        self._text = text
        self._error = error
        self._properties = tuple(properties)
        self._context_properties = tuple(context_properties)
        self._code = code
        self._status = status

    @classmethod
    def create(
        cls,
        context: PropagationContext | None,
        level: LogLevel,
        text: str,
        options: Iterable[Option] = (),
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> "Message":
        """Snapshot ``context``, stamp the time, apply ``options`` in order."""
        timestamp = clock() if clock is not None else datetime.now().astimezone()
        snapshot = tuple(Property(node.key, node.value) for node in iter_chain(read_chain(context)))
        draft = MessageDraft(timestamp=timestamp, level=level, text=text, context_properties=snapshot)
        for option in options:
            option.apply(draft)
        return cls(
            timestamp=draft.timestamp,
            level=draft.level,
            text=draft.text,
            error=draft.error,
            properties=draft.properties,
            context_properties=draft.context_properties,
            code=draft.code,
            status=draft.status,
        )

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def text(self) -> str:
        return self._text

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def properties(self) -> tuple[Property, ...]:
        """Explicit properties in the order their options were applied."""
        return self._properties

    @property
    def context_properties(self) -> tuple[Property, ...]:
        """Chain properties captured when the message was created."""
        return self._context_properties

    @property
    def code(self) -> str | None:
        return self._code

    @property
    def status(self) -> int | None:
        return self._status

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"Message(level={self._level.text!r}, text={self._text!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            _restore_message,
            (
                self._timestamp,
                self._level,
                self._text,
                self._error,
                tuple((p.key, p.value) for p in self._properties),
                tuple((p.key, p.value) for p in self._context_properties),
                self._code,
                self._status,
            ),
        )

    def write_to(self, buffer: RecordBuffer, flags: int = OutputFlags.DEFAULT) -> None:
        """Render the record fields into ``buffer`` (no line terminator)."""
        if flags & OutputFlags.TIMESTAMP:
            timestamp = self._timestamp
            if flags & OutputFlags.UTC:
                timestamp = _as_utc(timestamp)
            buffer.write_timestamp(timestamp)
        buffer.write_key(self._level.text)
        buffer.write_property("msg", self._text)
        if self._error is not None:
            buffer.write_property("error", self._error)
        for prop in self._properties:
            buffer.write_property(prop.key, prop.value)
        for prop in self._context_properties:
            buffer.write_property(prop.key, prop.value)
        if self._code:
            buffer.write_property("code", self._code)
        if self._status is not None:
            buffer.write_property("status", self._status)

    def logfmt(self, flags: int = OutputFlags.DEFAULT) -> str:
        """Return the logfmt line without a terminator."""
        with RecordBuffer() as buffer:
            self.write_to(buffer, flags)
            return buffer.getvalue()

    def render(self, flags: int = OutputFlags.DEFAULT) -> str:
        """Return the logfmt line including the line terminator."""
        with RecordBuffer() as buffer:
            self.write_to(buffer, flags)
            write_terminator(buffer, flags)
            return buffer.getvalue()

    def to_dict(self) -> dict[str, Any]:
        """Return the record fields as a plain dictionary."""
        return {
            "timestamp": self._timestamp.isoformat(),
            "level": self._level.text,
            "text": self._text,
            "error": None if self._error is None else safe_str(self._error),
            "properties": [tuple(p) for p in self._properties],
            "context_properties": [tuple(p) for p in self._context_properties],
            "code": self._code,
            "status": self._status,
        }


def write_terminator(buffer: RecordBuffer, flags: int) -> None:
    """Append ``\\n`` when ``LF_ONLY`` is set, otherwise the platform EOL."""
    if flags & OutputFlags.LF_ONLY:
        buffer.write_newline()
    else:
        buffer.write_eol()


def _restore_message(
    timestamp: datetime,
    level: LogLevel,
    text: str,
    error: BaseException | None,
    properties: tuple[tuple[str, Any], ...],
    context_properties: tuple[tuple[str, Any], ...],
    code: str | None,
    status: int | None,
) -> Message:
    """Rebuild a :class:`Message` for :mod:`copy` and :mod:`pickle`."""
    return Message(
        timestamp=timestamp,
        level=level,
        text=text,
        error=error,
        properties=[Property(key, value) for key, value in properties],
        context_properties=[Property(key, value) for key, value in context_properties],
        code=code,
        status=status,
    )


def _as_utc(ts: datetime) -> datetime:
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        ts = ts.astimezone()
    return ts.astimezone(timezone.utc)


__all__ = ["Message", "OutputFlags", "write_terminator"]
