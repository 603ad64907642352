"""Structured logfmt logging with immutable, forkable propagation contexts.

Build a :class:`PropagationContext` with properties, log through a
:class:`Logger` (or the module-level default), and get back a
:class:`Message` that can also be returned or raised as an error::

    ctx = attach_properties(EMPTY_CONTEXT, Property("request_id", rid))
    return lib_log_fmt.error(ctx, "cannot open file", with_value("path", path), with_error(exc))
"""

from __future__ import annotations

import logging

from .adapters import DiscardSink, RichConsoleHandler, StdlibLoggingHandler, WriterAdapter
from .application.ports import ClockPort, HandlerPort, SinkPort
from .config import LoggerSettings, enable_dotenv, load_settings
from .domain import (
    EMPTY_CONTEXT,
    ContextBinder,
    InvalidLevelError,
    LogFmtError,
    LogLevel,
    Message,
    OutputFlags,
    PropagationContext,
    Property,
    RecordBuffer,
    attach_properties,
    encode_value,
    with_code,
    with_error,
    with_status,
    with_value,
)
from .logger import Logger
from .runtime import (
    add_handler,
    debug,
    error,
    error_from,
    get_logger,
    info,
    new_writer,
    replace_default_logger,
    set_flags,
    set_min_level,
    set_sink,
    warn,
    warning,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ClockPort",
    "ContextBinder",
    "DiscardSink",
    "EMPTY_CONTEXT",
    "HandlerPort",
    "InvalidLevelError",
    "LogFmtError",
    "LogLevel",
    "Logger",
    "LoggerSettings",
    "Message",
    "OutputFlags",
    "PropagationContext",
    "Property",
    "RecordBuffer",
    "RichConsoleHandler",
    "SinkPort",
    "StdlibLoggingHandler",
    "WriterAdapter",
    "add_handler",
    "attach_properties",
    "debug",
    "enable_dotenv",
    "encode_value",
    "error",
    "error_from",
    "get_logger",
    "info",
    "load_settings",
    "new_writer",
    "replace_default_logger",
    "set_flags",
    "set_min_level",
    "set_sink",
    "warn",
    "warning",
    "with_code",
    "with_error",
    "with_status",
    "with_value",
]
