"""Small sink implementations for tests and silenced loggers."""

from __future__ import annotations


class DiscardSink:
    """Sink that drops every line.

    Examples
    --------
    >>> DiscardSink().write("info msg=dropped\\n")
    17
    """

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        return None


__all__ = ["DiscardSink"]
