"""Value encoder for logfmt records.

Purpose
-------
Render arbitrary scalar values into the text that follows ``key=`` in a
logfmt record, with deterministic quoting and escaping.

Contents
--------
* :data:`TIMESTAMP_FORMAT` and :func:`format_timestamp`.
* :func:`quote_value` – the quoting/escaping algorithm for text values.
* :func:`encode_value` – capability dispatch for arbitrary values.
* :func:`format_property` – ``key=value`` convenience used by the buffer.
* :class:`TextMarshaler` – protocol for values with a text serialisation.

System Role
-----------
Leaf of the record pipeline: :class:`~lib_log_fmt.domain.buffer.RecordBuffer`
calls :func:`encode_value` for every property it writes. Nothing here raises
for any input value.
"""

from __future__ import annotations

import numbers
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Protocol, runtime_checkable

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"
"""``YYYY-MM-DDTHH:MM:SS.ffffff±HHMM``: microseconds, numeric UTC offset."""

_FORCE_ESCAPE = frozenset('"=\r\n\t')


@runtime_checkable
class TextMarshaler(Protocol):
    """Value that knows how to serialise itself to text."""

    def marshal_text(self) -> str | bytes: ...


def format_timestamp(ts: datetime) -> str:
    """Format ``ts`` with :data:`TIMESTAMP_FORMAT`.

    Naive datetimes are taken as local time so the offset is always present.

    Examples
    --------
    >>> from datetime import timezone
    >>> format_timestamp(datetime(2009, 2, 13, 23, 31, 30, 987654, tzinfo=timezone.utc))
    '2009-02-13T23:31:30.987654+0000'
    """
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        ts = ts.astimezone()
    return ts.strftime(TIMESTAMP_FORMAT)


def quote_value(text: str) -> str:
    """Quote and escape ``text`` when its characters require it.

    ``"``, ``=``, CR, LF and TAB force quoting and escaping; any other
    character at or below the space forces quoting only. A backslash is
    escaped only inside a value that is quoted for another reason.

    Examples
    --------
    >>> quote_value("noquotes")
    'noquotes'
    >>> print(quote_value('contains"quotes"'))
    "contains\\"quotes\\""
    >>> print(quote_value("contains\\rCR"))
    "containsCR"
    >>> print(quote_value("contains\\\\backslash"))
    contains\\backslash
    >>> print(quote_value("contains\\\\backslash and space"))
    "contains\\\\backslash and space"
    """
    needs_quotes = False
    needs_escape = False
    has_backslash = False
    for char in text:
        if char in _FORCE_ESCAPE:
            needs_quotes = True
            needs_escape = True
        elif char <= " ":
            needs_quotes = True
        elif char == "\\":
            has_backslash = True

    if not needs_quotes:
        return text
    if not (needs_escape or has_backslash):
        return f'"{text}"'

    parts = ['"']
    for char in text:
        if char == "\r":
            continue
        if char == "\n":
            parts.append("\\n")
        elif char == "\t":
            parts.append("\\t")
        elif char in '\\"':
            parts.append("\\" + char)
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


def _format_component(value: float) -> str:
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def _format_complex(value: complex) -> str:
    imag = value.imag
    sign = "-" if imag < 0 or (imag == 0 and str(imag).startswith("-")) else "+"
    return f"({_format_component(value.real)}{sign}{_format_component(abs(imag))}i)"


def _overrides_str(value: Any) -> bool:
    return type(value).__str__ is not object.__str__


def fallback_text(value: Any) -> str:
    """Return ``repr(value)``, or a type placeholder when even that fails."""
    try:
        return repr(value)
    except Exception:  # noqa: BLE001 - last resort, still a valid token
        return f"<{type(value).__name__} object>"


def safe_str(value: Any) -> str:
    """Return ``str(value)``, falling back to :func:`fallback_text` when it raises.

    Examples
    --------
    >>> class Broken(Exception):
    ...     def __str__(self):
    ...         raise RuntimeError("no text")
    >>> safe_str(Broken())
    'Broken()'
    """
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - a broken __str__ falls back to repr
        return fallback_text(value)


def _marshalled_text(value: TextMarshaler) -> str | None:
    try:
        text = value.marshal_text()
    except Exception:  # noqa: BLE001 - encoding never fails; fall back to repr
        return None
    if isinstance(text, (bytes, bytearray)):
        return bytes(text).decode("utf-8", errors="replace")
    return str(text)


def encode_value(value: Any) -> str:
    """Return the logfmt text for ``value``.

    Examples
    --------
    >>> encode_value(True), encode_value(3), encode_value(31.4159)
    ('true', '3', '31.4159')
    >>> encode_value(complex(10.4, 11.5))
    '(10.4+11.5i)'
    >>> encode_value(ValueError("This is an error"))
    '"This is an error"'
    >>> encode_value("string")
    'string'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Real) and not isinstance(value, Enum):
        return quote_value(safe_str(value))
    if isinstance(value, complex):
        return quote_value(_guarded(_format_complex, value))
    if isinstance(value, BaseException):
        return quote_value(safe_str(value))
    if isinstance(value, datetime):
        return quote_value(_guarded(format_timestamp, value))
    if isinstance(value, str):
        return quote_value(value)
    if _overrides_str(value):
        try:
            return quote_value(str(value))
        except Exception:  # noqa: BLE001 - a broken __str__ tries the marshaler next
            pass
    if isinstance(value, TextMarshaler):
        text = _marshalled_text(value)
        if text is not None:
            return quote_value(text)
    return quote_value(fallback_text(value))


def _guarded(render: Callable[[Any], str], value: Any) -> str:
    try:
        return render(value)
    except Exception:  # noqa: BLE001 - encoding never fails
        return fallback_text(value)


def format_property(key: str, value: Any) -> str:
    """Return ``key=<encoded value>``.

    Examples
    --------
    >>> format_property("status", 400)
    'status=400'
    """
    return f"{key}={encode_value(value)}"


__all__ = [
    "TIMESTAMP_FORMAT",
    "TextMarshaler",
    "encode_value",
    "format_property",
    "fallback_text",
    "format_timestamp",
    "quote_value",
    "safe_str",
]
