"""Process-wide default logger and its access helpers.

The default logger is created lazily (under a lock) on first use from
:func:`lib_log_fmt.config.load_settings` and lives for the whole process.
It is safe for concurrent use; it is never torn down.
"""

from __future__ import annotations

from threading import RLock

from lib_log_fmt.config import load_settings
from lib_log_fmt.logger import Logger

_DEFAULT: Logger | None = None
_STATE_LOCK = RLock()


def get_logger() -> Logger:
    """Return the default logger, creating it on first use."""

    global _DEFAULT
    with _STATE_LOCK:
        if _DEFAULT is None:
            _DEFAULT = Logger.from_settings(load_settings())
        return _DEFAULT


def replace_default_logger(logger: Logger) -> Logger | None:
    """Install ``logger`` as the default and return the previous one.

    Intended for start-up wiring and test isolation; the previous logger may
    be ``None`` when the default was never used.
    """

    global _DEFAULT
    with _STATE_LOCK:
        previous, _DEFAULT = _DEFAULT, logger
        return previous


__all__ = ["get_logger", "replace_default_logger"]
