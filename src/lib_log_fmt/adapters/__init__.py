"""Adapters connecting the logger to streams, consoles, and stdlib logging."""

from __future__ import annotations

from .console import RichConsoleHandler
from .sinks import DiscardSink
from .stdlib_bridge import StdlibLoggingHandler
from .writer import WriterAdapter, classify_line

__all__ = ["DiscardSink", "RichConsoleHandler", "StdlibLoggingHandler", "WriterAdapter", "classify_line"]
