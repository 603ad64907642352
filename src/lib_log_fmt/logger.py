"""Dispatch core: the thread-safe logger.

Purpose
-------
Own the logger configuration (minimum level, sink, handlers, output flags)
and run each logging call as one filter/render/write/fan-out transaction.

Contents
--------
* :class:`Logger` – leveled entry points returning :class:`Message` values.

System Role
-----------
Composition point between the domain (message assembly) and the dispatch use
case. One :class:`threading.RLock` serialises configuration changes and
dispatch; message assembly happens before the lock is taken. Sinks and
handlers run under the lock, so slow I/O there serialises every caller of the
same logger.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from .application.ports import ClockPort, HandlerPort, SinkPort
from .application.use_cases.dispatch import DiagnosticHook, build_diagnostic_emitter, dispatch_message
from .domain.buffer import BufferPool
from .domain.context import ContextBinder, PropagationContext
from .domain.levels import LogLevel, coerce_level
from .domain.message import Message, OutputFlags
from .domain.options import Option, with_error

if TYPE_CHECKING:
    from .adapters.writer import WriterAdapter
    from .config import LoggerSettings


class Logger:
    """Structured logger writing logfmt records to a sink.

    Every entry point returns the assembled :class:`Message`, even when the
    level filter suppresses it, so the result can be returned or raised as an
    error.

    Examples
    --------
    >>> import io
    >>> from lib_log_fmt.domain import EMPTY_CONTEXT
    >>> out = io.StringIO()
    >>> log = Logger(sink=out, flags=OutputFlags.LF_ONLY)
    >>> ctx = EMPTY_CONTEXT.with_properties(env="prod")
    >>> msg = log.info(ctx, "started")
    >>> out.getvalue()
    'info msg=started env=prod\\n'
    >>> str(log.debug(ctx, "started"))
    'started'
    >>> out.getvalue().count("\\n")
    1
    """

    def __init__(
        self,
        *,
        sink: SinkPort | None = None,
        min_level: LogLevel | str = LogLevel.INFO,
        flags: int = OutputFlags.DEFAULT,
        handlers: Iterable[HandlerPort] = (),
        clock: ClockPort | None = None,
        binder: ContextBinder | None = None,
        diagnostic_hook: DiagnosticHook = None,
        pool: BufferPool | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._sink = sink
        self._min_level = coerce_level(min_level)
        self._flags = OutputFlags(flags)
        self._handlers: list[HandlerPort] = list(handlers)
        self._clock = clock
        self._binder = binder
        self._pool = pool
        self._emit = build_diagnostic_emitter(diagnostic_hook)

    @classmethod
    def from_settings(cls, settings: "LoggerSettings", **overrides: Any) -> "Logger":
        """Build a logger from :class:`~lib_log_fmt.config.LoggerSettings`."""
        options: dict[str, Any] = {"min_level": settings.min_level, "flags": settings.flags}
        options.update(overrides)
        return cls(**options)

    def debug(self, context: PropagationContext | None, text: str, *options: Option) -> Message:
        """Log ``text`` at ``DEBUG``; the returned message is always usable."""
        return self.log(LogLevel.DEBUG, context, text, *options)

    def info(self, context: PropagationContext | None, text: str, *options: Option) -> Message:
        return self.log(LogLevel.INFO, context, text, *options)

    def warn(self, context: PropagationContext | None, text: str, *options: Option) -> Message:
        return self.log(LogLevel.WARNING, context, text, *options)

    warning = warn

    def error(self, context: PropagationContext | None, text: str, *options: Option) -> Message:
        return self.log(LogLevel.ERROR, context, text, *options)

    def error_from(
        self,
        context: PropagationContext | None,
        error: BaseException,
        text: str,
        *options: Option,
    ) -> Message:
        """Log ``text`` at ``ERROR`` with ``error`` attached after ``options``."""
        return self.log(LogLevel.ERROR, context, text, *options, with_error(error))

    def log(
        self,
        level: LogLevel | str,
        context: PropagationContext | None,
        text: str,
        *options: Option,
    ) -> Message:
        """Assemble a message and dispatch it when ``level`` passes the filter.

        ``level`` may be given as level text; the handler list is snapshotted
        so registrations made by a handler apply from the next call on.
        """
        clock = self._clock.now if self._clock is not None else None
        message = Message.create(self._resolve_context(context), coerce_level(level), text, options, clock=clock)
        with self._lock:
            if message.level < self._min_level:
                return message
            dispatch_message(
                message,
                sink=self._sink if self._sink is not None else sys.stdout,
                handlers=tuple(self._handlers),
                emit=self._emit,
                flags=self._flags,
                pool=self._pool,
            )
        return message

    def _resolve_context(self, context: PropagationContext | None) -> PropagationContext | None:
        if context is None and self._binder is not None:
            return self._binder.current()
        return context

    @property
    def min_level(self) -> LogLevel:
        with self._lock:
            return self._min_level

    def set_min_level(self, level: LogLevel | str) -> None:
        """Change the minimum level; strings are parsed like level text."""
        resolved = coerce_level(level)
        with self._lock:
            self._min_level = resolved

    def enabled_for(self, level: LogLevel) -> bool:
        """Return ``True`` when a message at ``level`` would be dispatched."""
        with self._lock:
            return level >= self._min_level

    @property
    def sink(self) -> SinkPort:
        with self._lock:
            return self._sink if self._sink is not None else sys.stdout

    def set_sink(self, sink: SinkPort | None) -> None:
        """Replace the sink; ``None`` selects the current standard output."""
        with self._lock:
            self._sink = sink

    def add_handler(self, handler: HandlerPort) -> None:
        """Register ``handler``; handlers run in registration order."""
        with self._lock:
            self._handlers.append(handler)

    @property
    def handlers(self) -> tuple[HandlerPort, ...]:
        with self._lock:
            return tuple(self._handlers)

    @property
    def flags(self) -> OutputFlags:
        with self._lock:
            return self._flags

    def set_flags(self, flags: int) -> None:
        with self._lock:
            self._flags = OutputFlags(flags)

    def new_writer(
        self,
        context: PropagationContext | None = None,
        *,
        quiet_level: LogLevel = LogLevel.INFO,
    ) -> "WriterAdapter":
        """Return a line writer that logs through this logger."""
        from .adapters.writer import WriterAdapter

        return WriterAdapter(self, context, quiet_level=quiet_level)


__all__ = ["Logger"]
