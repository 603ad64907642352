"""Module-level logging functions backed by the default logger.

Purpose
-------
Give applications the ``lib_log_fmt.info(ctx, "text", ...)`` style of calls
without threading a :class:`~lib_log_fmt.logger.Logger` everywhere.

Contents
--------
* :func:`get_logger` / :func:`replace_default_logger` – default lifecycle.
* ``debug``/``info``/``warn``/``warning``/``error``/``error_from`` – leveled
  entry points returning :class:`~lib_log_fmt.domain.message.Message`.
* ``set_min_level``/``set_sink``/``set_flags``/``add_handler``/``new_writer``
  – configuration forwarded to the default logger.

System Role
-----------
Outer shell of the package. The default logger is the only process-wide
mutable state; every other logger is independent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lib_log_fmt.application.ports import HandlerPort, SinkPort
from lib_log_fmt.domain.context import PropagationContext
from lib_log_fmt.domain.levels import LogLevel
from lib_log_fmt.domain.message import Message
from lib_log_fmt.domain.options import Option

from ._state import get_logger, replace_default_logger

if TYPE_CHECKING:
    from lib_log_fmt.adapters.writer import WriterAdapter


def debug(context: PropagationContext | None, text: str, *options: Option) -> Message:
    """Log at ``DEBUG`` on the default logger."""
    return get_logger().debug(context, text, *options)


def info(context: PropagationContext | None, text: str, *options: Option) -> Message:
    """Log at ``INFO`` on the default logger."""
    return get_logger().info(context, text, *options)


def warn(context: PropagationContext | None, text: str, *options: Option) -> Message:
    """Log at ``WARNING`` on the default logger."""
    return get_logger().warn(context, text, *options)


warning = warn


def error(context: PropagationContext | None, text: str, *options: Option) -> Message:
    """Log at ``ERROR`` on the default logger."""
    return get_logger().error(context, text, *options)


def error_from(context: PropagationContext | None, err: BaseException, text: str, *options: Option) -> Message:
    """Log ``text`` at ``ERROR`` with ``err`` attached, on the default logger."""
    return get_logger().error_from(context, err, text, *options)


def set_min_level(level: LogLevel | str) -> None:
    get_logger().set_min_level(level)


def set_sink(sink: SinkPort | None) -> None:
    get_logger().set_sink(sink)


def set_flags(flags: int) -> None:
    get_logger().set_flags(flags)


def add_handler(handler: HandlerPort) -> None:
    get_logger().add_handler(handler)


def new_writer(context: PropagationContext | None = None) -> "WriterAdapter":
    """Return a line writer feeding the default logger."""
    return get_logger().new_writer(context)


__all__ = [
    "add_handler",
    "debug",
    "error",
    "error_from",
    "get_logger",
    "info",
    "new_writer",
    "replace_default_logger",
    "set_flags",
    "set_min_level",
    "set_sink",
    "warn",
    "warning",
]
