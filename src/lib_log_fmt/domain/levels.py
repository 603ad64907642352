"""Log level abstraction with logfmt text (de)serialisation.

Purpose
-------
Offer an ordered severity enumeration whose canonical text form is the bare
key written into every logfmt record (``debug``, ``info``, ``warn``,
``error``).

Contents
--------
* :class:`LogLevel` enum with parse/format helpers.
* :func:`coerce_level` accepting enum members or level names.
* ``_TEXT_TABLE`` / ``_SYNONYMS`` constants driving the conversions.

System Role
-----------
The dispatch core filters with ``message.level >= logger.min_level``; the
record renderer writes :attr:`LogLevel.text` as the second token of each line.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from .errors import InvalidLevelError


class LogLevel(IntEnum):
    """Enumerated logging levels, totally ordered by severity."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    def __str__(self) -> str:
        return self.text

    @property
    def text(self) -> str:
        """Return the canonical lowercase text written into records."""

        return _TEXT_TABLE[self]

    def marshal_text(self) -> str:
        """Return the text form; formatting a level never fails."""

        return self.text

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @staticmethod
    def format_code(code: int) -> str:
        """Format any integer level code.

        Examples
        --------
        >>> LogLevel.format_code(30)
        'warn'
        >>> LogLevel.format_code(63)
        'unknown 63'
        """
        try:
            return _TEXT_TABLE[LogLevel(code)]
        except ValueError:
            return f"unknown {code}"

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Parse ``name`` case-insensitively, accepting common synonyms.

        Examples
        --------
        >>> LogLevel.from_name("Information")
        <LogLevel.INFO: 20>
        >>> LogLevel.from_name("WARN") is LogLevel.WARNING
        True
        """
        normalized = name.strip().lower()
        try:
            return _SYNONYMS[normalized]
        except KeyError as exc:
            raise InvalidLevelError(name) from exc

    parse = from_name

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose code is exactly ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise InvalidLevelError(level) from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`."""
        return cls.from_numeric(level)


_TEXT_TABLE = {
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARNING: "warn",
    LogLevel.ERROR: "error",
}

#: Accepted (lowercased) spellings when parsing level text.
_SYNONYMS = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "information": LogLevel.INFO,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
}


def coerce_level(level: str | int | LogLevel) -> LogLevel:
    """Normalise level inputs (name, numeric code or enum) into :class:`LogLevel`.

    Examples
    --------
    >>> coerce_level("warning") is LogLevel.WARNING
    True
    >>> coerce_level(LogLevel.ERROR) is LogLevel.ERROR
    True
    >>> coerce_level(20) is LogLevel.INFO
    True
    """
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, int):
        return LogLevel.from_numeric(level)
    return LogLevel.from_name(level)


__all__ = ["LogLevel", "coerce_level"]
