"""Port for secondary consumers of every dispatched message."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from lib_log_fmt.domain.message import Message


@runtime_checkable
class HandlerPort(Protocol):
    """Receive dispatched messages after they were written to the sink.

    The logger passes a one-element sequence per dispatch; the sequence shape
    leaves room for buffering handlers. Exceptions raised here are caught and
    discarded by the logger.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.messages = []
    ...     def handle(self, messages):
    ...         self.messages.extend(messages)
    >>> isinstance(Recorder(), HandlerPort)
    True
    """

    def handle(self, messages: Sequence[Message]) -> None:
        """Consume ``messages``."""


__all__ = ["HandlerPort"]
