"""Environment-driven logger settings with optional ``.env`` support.

Purpose
-------
Translate ``LOG_*`` environment variables into :class:`LoggerSettings` so the
default logger and the CLI pick up deployment configuration without code
changes.

Contents
--------
* :data:`DOTENV_ENV_VAR` and the ``LOG_*`` variable names.
* :class:`LoggerSettings` and :func:`load_settings`.
* :func:`enable_dotenv` – load the nearest ``.env`` without overriding the
  real environment.

System Role
-----------
Consumed by :mod:`lib_log_fmt.runtime` when the default logger is created and
by :mod:`lib_log_fmt.cli`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .domain.levels import LogLevel, coerce_level
from .domain.message import OutputFlags

MIN_LEVEL_ENV_VAR = "LOG_MIN_LEVEL"
TIMESTAMP_ENV_VAR = "LOG_TIMESTAMP"
UTC_ENV_VAR = "LOG_UTC"
LF_ONLY_ENV_VAR = "LOG_LF_ONLY"
DOTENV_ENV_VAR = "LOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True, frozen=True)
class LoggerSettings:
    """Resolved configuration for a :class:`~lib_log_fmt.logger.Logger`."""

    min_level: LogLevel = LogLevel.INFO
    flags: OutputFlags = OutputFlags.DEFAULT


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> _env_bool({"LOG_UTC": "on"}, "LOG_UTC", default=False)
    True
    >>> _env_bool({}, "LOG_UTC", default=False)
    False
    """
    value = environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def load_settings(environ: Mapping[str, str] | None = None) -> LoggerSettings:
    """Build :class:`LoggerSettings` from ``environ`` (defaults to ``os.environ``).

    Raises :class:`~lib_log_fmt.domain.errors.InvalidLevelError` when
    ``LOG_MIN_LEVEL`` does not name a level.

    Examples
    --------
    >>> settings = load_settings({"LOG_MIN_LEVEL": "debug", "LOG_LF_ONLY": "1"})
    >>> settings.min_level is LogLevel.DEBUG
    True
    >>> bool(settings.flags & OutputFlags.LF_ONLY), bool(settings.flags & OutputFlags.TIMESTAMP)
    (True, True)
    """
    env = os.environ if environ is None else environ
    raw_level = env.get(MIN_LEVEL_ENV_VAR, "").strip()
    min_level = coerce_level(raw_level) if raw_level else LogLevel.INFO

    flags = OutputFlags.NONE
    if _env_bool(env, TIMESTAMP_ENV_VAR, default=True):
        flags |= OutputFlags.TIMESTAMP
    if _env_bool(env, UTC_ENV_VAR, default=False):
        flags |= OutputFlags.UTC
    if _env_bool(env, LF_ONLY_ENV_VAR, default=False):
        flags |= OutputFlags.LF_ONLY
    return LoggerSettings(min_level=min_level, flags=flags)


def dotenv_requested(environ: Mapping[str, str] | None = None) -> bool:
    """Return ``True`` when ``LOG_USE_DOTENV`` asks for ``.env`` loading."""
    env = os.environ if environ is None else environ
    return _env_bool(env, DOTENV_ENV_VAR, default=False)


def enable_dotenv(start: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` file, keeping existing variables intact.

    The search walks upwards from ``start`` (default: working directory).
    Returns the resolved path of the loaded file or ``None`` when none exists.
    """
    if start is not None:
        candidate = _search_upwards(Path(start))
    else:
        found = find_dotenv(usecwd=True)
        candidate = Path(found) if found else None
    if candidate is None:
        return None
    load_dotenv(candidate, override=False)
    return candidate.resolve()


def _search_upwards(start: Path) -> Path | None:
    directory = start.resolve()
    if directory.is_file():
        directory = directory.parent
    for folder in (directory, *directory.parents):
        candidate = folder / ".env"
        if candidate.is_file():
            return candidate
    return None


__all__ = [
    "DOTENV_ENV_VAR",
    "LF_ONLY_ENV_VAR",
    "LoggerSettings",
    "MIN_LEVEL_ENV_VAR",
    "TIMESTAMP_ENV_VAR",
    "UTC_ENV_VAR",
    "dotenv_requested",
    "enable_dotenv",
    "load_settings",
]
