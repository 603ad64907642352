"""Domain values used by the logfmt logging core."""

from __future__ import annotations

from .buffer import DEFAULT_POOL, BufferPool, RecordBuffer
from .context import (
    EMPTY_CONTEXT,
    ContextBinder,
    PropagationContext,
    Property,
    PropertyNode,
    attach_properties,
    iter_chain,
    read_chain,
)
from .errors import InvalidLevelError, LogFmtError
from .levels import LogLevel, coerce_level
from .logfmt import TIMESTAMP_FORMAT, encode_value, format_timestamp, quote_value
from .message import Message, OutputFlags
from .options import Option, with_code, with_error, with_status, with_value

__all__ = [
    "BufferPool",
    "ContextBinder",
    "DEFAULT_POOL",
    "EMPTY_CONTEXT",
    "InvalidLevelError",
    "LogFmtError",
    "LogLevel",
    "Message",
    "Option",
    "OutputFlags",
    "PropagationContext",
    "Property",
    "PropertyNode",
    "RecordBuffer",
    "TIMESTAMP_FORMAT",
    "attach_properties",
    "coerce_level",
    "encode_value",
    "format_timestamp",
    "iter_chain",
    "quote_value",
    "read_chain",
    "with_code",
    "with_error",
    "with_status",
    "with_value",
]
