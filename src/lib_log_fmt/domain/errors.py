"""Error taxonomy for the logfmt logging core.

Only parse operations raise. Logging calls never do: sink and handler
failures are caught at the dispatch boundary and reported through the
diagnostic channel instead (see :mod:`lib_log_fmt.application.use_cases.dispatch`).
"""

from __future__ import annotations

from typing import Any


class LogFmtError(Exception):
    """Base class for errors raised by :mod:`lib_log_fmt`."""


class InvalidLevelError(LogFmtError, ValueError):
    """Raised when text or a number does not name a known log level.

    Examples
    --------
    >>> err = InvalidLevelError("verbose")
    >>> str(err)
    "invalid level: 'verbose'"
    >>> err.value
    'verbose'
    """

    def __init__(self, value: Any) -> None:
        super().__init__(f"invalid level: {value!r}")
        self.value = value


__all__ = ["InvalidLevelError", "LogFmtError"]
