"""Port describing the destination of rendered log lines."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SinkPort(Protocol):
    """Receive complete logfmt lines (terminator included).

    Any text stream qualifies: :data:`sys.stdout`, an open file, or
    :class:`io.StringIO`. A ``flush`` method is called when present.
    """

    def write(self, text: str, /) -> Any:
        """Write ``text`` to the destination."""


__all__ = ["SinkPort"]
