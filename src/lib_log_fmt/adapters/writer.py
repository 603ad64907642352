"""Line writer bridging unstructured text producers into a logger.

Purpose
-------
Let components that only know how to write lines (a stdlib
:class:`logging.StreamHandler`, a subprocess relay, a third-party library's
error log) emit logfmt records through a :class:`~lib_log_fmt.logger.Logger`.

Contents
--------
* :class:`WriterAdapter` – file-like object with ``write``/``flush``.

System Role
-----------
Created by :meth:`lib_log_fmt.logger.Logger.new_writer`. Each ``write`` is
treated as one line: only the first line of a chunk is logged, at ``ERROR``
when it mentions ``error``, ``panic`` or ``fatal`` and at the quiet level
(``INFO``) otherwise.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lib_log_fmt.domain.context import PropagationContext
from lib_log_fmt.domain.levels import LogLevel

if TYPE_CHECKING:
    from lib_log_fmt.logger import Logger

_ERROR_PATTERN = re.compile(r"error|panic|fatal", re.IGNORECASE)


def classify_line(line: str, quiet_level: LogLevel = LogLevel.INFO) -> LogLevel:
    """Return the level inferred from the content of ``line``.

    Examples
    --------
    >>> classify_line("http: panic serving 10.0.0.1")
    <LogLevel.ERROR: 40>
    >>> classify_line("listening on :8080")
    <LogLevel.INFO: 20>
    """
    return LogLevel.ERROR if _ERROR_PATTERN.search(line) else quiet_level


def first_line(text: str) -> str:
    """Return ``text`` up to the first line feed, without the terminator."""
    line = text.split("\n", 1)[0]
    return line[:-1] if line.endswith("\r") else line


class WriterAdapter:
    """File-like object logging each written chunk as one record."""

    def __init__(
        self,
        logger: "Logger",
        context: PropagationContext | None = None,
        *,
        quiet_level: LogLevel = LogLevel.INFO,
    ) -> None:
        self._logger = logger
        self._context = context
        self._quiet_level = quiet_level

    def write(self, data: bytes | str) -> int:
        """Log the first line of ``data``; always report the full length."""
        text = data.decode("utf-8", errors="replace") if isinstance(data, (bytes, bytearray)) else data
        line = first_line(text)
        self._logger.log(classify_line(line, self._quiet_level), self._context, line)
        return len(data)

    def flush(self) -> None:
        """Nothing is buffered; present for stream compatibility."""

    def writable(self) -> bool:
        return True

    @property
    def closed(self) -> bool:
        return False


__all__ = ["WriterAdapter", "classify_line", "first_line"]
