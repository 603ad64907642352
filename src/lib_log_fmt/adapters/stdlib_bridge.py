"""Handler forwarding messages into the stdlib :mod:`logging` tree.

Lets hosts that already configured :mod:`logging` receive every dispatched
message as a :class:`logging.LogRecord` whose text is the logfmt line.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lib_log_fmt.application.ports.handler import HandlerPort
from lib_log_fmt.domain.message import Message, OutputFlags


class StdlibLoggingHandler(HandlerPort):
    """Re-emit messages on a stdlib logger at the matching level.

    The record carries the original message as ``record.logfmt_message``.
    Timestamps are left out of the text by default because stdlib formatters
    add their own.
    """

    def __init__(self, logger: logging.Logger | str = "lib_log_fmt.records", *, flags: int = OutputFlags.NONE) -> None:
        self._logger = logging.getLogger(logger) if isinstance(logger, str) else logger
        self._flags = flags

    def handle(self, messages: Sequence[Message]) -> None:
        for message in messages:
            level = message.level.to_python_level()
            if not self._logger.isEnabledFor(level):
                continue
            self._logger.log(level, "%s", message.logfmt(self._flags), extra={"logfmt_message": message})


__all__ = ["StdlibLoggingHandler"]
