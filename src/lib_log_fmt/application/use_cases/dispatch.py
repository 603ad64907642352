"""Use case rendering one message and fanning it out.

Purpose
-------
Turn an accepted :class:`~lib_log_fmt.domain.message.Message` into a logfmt
line on the sink and hand it to every registered handler, without ever
raising into the logging call.

Contents
--------
* :func:`build_diagnostic_emitter` – wraps the optional diagnostic hook.
* :func:`dispatch_message` – render, write, release, fan out.

System Role
-----------
Invoked by :class:`lib_log_fmt.logger.Logger` while it holds its exclusion
lock, so records reach the sink in lock-acquisition order and handlers run
after the sink write in registration order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from lib_log_fmt.application.ports import HandlerPort, SinkPort
from lib_log_fmt.domain.buffer import BufferPool, RecordBuffer
from lib_log_fmt.domain.message import Message, OutputFlags, write_terminator

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None
DiagnosticEmitter = Callable[[str, dict[str, Any]], None]
DispatchResult = dict[str, Any]


def build_diagnostic_emitter(hook: DiagnosticHook) -> DiagnosticEmitter:
    """Return an emitter that logs ``event`` and forwards it to ``hook``.

    A failing hook is logged and otherwise ignored.

    Examples
    --------
    >>> seen = []
    >>> emit = build_diagnostic_emitter(lambda name, payload: seen.append(name))
    >>> emit("handler_failed", {"handler": "Broken"})
    >>> seen
    ['handler_failed']
    """

    def emit(event: str, payload: dict[str, Any]) -> None:
        logger.warning("lib_log_fmt %s: %s", event, payload)
        if hook is None:
            return
        try:
            hook(event, payload)
        except Exception:  # noqa: BLE001 - diagnostics must not break logging
            logger.exception("diagnostic hook failed for %s", event)

    return emit


def _write_record(
    message: Message,
    sink: SinkPort,
    flags: int,
    pool: BufferPool | None,
    emit: DiagnosticEmitter,
) -> bool:
    buffer = RecordBuffer(pool)
    try:
        message.write_to(buffer, flags)
        write_terminator(buffer, flags)
        buffer.write_to(sink)
        flush = getattr(sink, "flush", None)
        if callable(flush):
            flush()
    except Exception as exc:  # noqa: BLE001 - sink failures are best effort
        emit("sink_failed", {"sink": type(sink).__name__, "error": repr(exc), "text": message.text})
        return False
    finally:
        buffer.release()
    return True


def _fan_out(
    message: Message,
    handlers: Sequence[HandlerPort],
    emit: DiagnosticEmitter,
) -> tuple[int, list[str]]:
    batch = (message,)
    delivered = 0
    failures: list[str] = []
    for handler in handlers:
        try:
            handler.handle(batch)
        except Exception as exc:  # noqa: BLE001 - handler failures are discarded
            name = type(handler).__name__
            failures.append(name)
            emit("handler_failed", {"handler": name, "error": repr(exc), "text": message.text})
        else:
            delivered += 1
    return delivered, failures


def dispatch_message(
    message: Message,
    *,
    sink: SinkPort | None,
    handlers: Sequence[HandlerPort],
    emit: DiagnosticEmitter,
    flags: int = OutputFlags.DEFAULT,
    pool: BufferPool | None = None,
) -> DispatchResult:
    """Write ``message`` to ``sink`` then pass it to each handler.

    ``sink=None`` skips the write. Never raises for sink or handler errors.

    Examples
    --------
    >>> import io
    >>> from datetime import datetime, timezone
    >>> from lib_log_fmt.domain import LogLevel
    >>> msg = Message.create(None, LogLevel.INFO, "started",
    ...                      clock=lambda: datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
    >>> out = io.StringIO()
    >>> result = dispatch_message(msg, sink=out, handlers=[], emit=lambda *_: None,
    ...                           flags=OutputFlags.DEFAULT | OutputFlags.LF_ONLY)
    >>> out.getvalue()
    '2020-01-02T03:04:05.000000+0000 info msg=started\\n'
    >>> result["ok"]
    True
    """
    written = False
    failures: list[str] = []
    if sink is not None:
        written = _write_record(message, sink, flags, pool, emit)
        if not written:
            failures.append("sink")
    delivered, handler_failures = _fan_out(message, handlers, emit)
    failures.extend(handler_failures)
    return {"ok": not failures, "written": written, "handlers": delivered, "failures": failures}


__all__ = ["DiagnosticHook", "DispatchResult", "build_diagnostic_emitter", "dispatch_message"]
