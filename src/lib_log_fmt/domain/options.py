"""Composable options applied to a message while it is being assembled.

Each option is a small frozen dataclass with an ``apply`` method; logging
calls accept any number of them and apply them left to right.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from .context import Property
from .levels import LogLevel


@dataclass(slots=True)
class MessageDraft:
    """Mutable fields of a message before it is finalised."""

    timestamp: datetime
    level: LogLevel
    text: str
    context_properties: tuple[Property, ...] = ()
    error: BaseException | None = None
    properties: list[Property] = field(default_factory=list)
    code: str | None = None
    status: int | None = None


@runtime_checkable
class Option(Protocol):
    """Mutator applied to a :class:`MessageDraft`."""

    def apply(self, draft: MessageDraft) -> None: ...


@dataclass(slots=True, frozen=True)
class WithError:
    error: BaseException | None

    def apply(self, draft: MessageDraft) -> None:
        draft.error = self.error


@dataclass(slots=True, frozen=True)
class WithValue:
    name: str
    value: Any

    def apply(self, draft: MessageDraft) -> None:
        draft.properties.append(Property(self.name, self.value))


@dataclass(slots=True, frozen=True)
class WithCode:
    code: str

    def apply(self, draft: MessageDraft) -> None:
        draft.code = self.code


@dataclass(slots=True, frozen=True)
class WithStatus:
    """Numeric status such as an HTTP status code."""

    status: int

    def apply(self, draft: MessageDraft) -> None:
        draft.status = self.status


def with_error(error: BaseException | None) -> WithError:
    """Attach the error that caused the message; rendered as ``error=``."""
    return WithError(error)


def with_value(name: str, value: Any) -> WithValue:
    """Append an explicit ``name=value`` property."""
    return WithValue(name, value)


def with_code(code: str) -> WithCode:
    """Associate an application code; the last one applied wins."""
    return WithCode(code)


def with_status(status: int) -> WithStatus:
    """Associate a status number; the last one applied wins."""
    return WithStatus(status)


__all__ = [
    "MessageDraft",
    "Option",
    "WithCode",
    "WithError",
    "WithStatus",
    "WithValue",
    "with_code",
    "with_error",
    "with_status",
    "with_value",
]
