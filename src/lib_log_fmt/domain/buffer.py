"""Pooled text builder for logfmt records.

Purpose
-------
Accumulate one record (timestamp, bare keys, ``key=value`` properties, line
terminator) while reusing backing storage across records.

Contents
--------
* :class:`BufferPool` – unbounded free list of :class:`io.StringIO` objects.
* :data:`DEFAULT_POOL` – the process-wide pool.
* :class:`RecordBuffer` – the builder handed to renderers.

System Role
-----------
Used by :meth:`lib_log_fmt.domain.message.Message.write_to` and by the dispatch
use case, which releases the buffer once the text reached the sink.
"""

from __future__ import annotations

import io
import os
from collections import deque
from datetime import datetime
from typing import Any, Callable, Deque, Protocol

from .logfmt import encode_value, format_timestamp


class _TextSink(Protocol):
    def write(self, text: str, /) -> Any: ...


class BufferPool:
    """Concurrent-safe free list of reusable text buffers.

    ``deque.append`` and ``deque.pop`` are atomic, so acquiring and releasing
    never blocks; an empty pool simply allocates.

    Examples
    --------
    >>> pool = BufferPool()
    >>> storage = pool.acquire()
    >>> _ = storage.write("abc")
    >>> pool.release(storage)
    >>> len(pool)
    1
    >>> pool.acquire().getvalue()
    ''
    """

    def __init__(self, *, on_allocate: Callable[[], None] | None = None) -> None:
        self._free: Deque[io.StringIO] = deque()
        self._on_allocate = on_allocate

    def acquire(self) -> io.StringIO:
        """Return an empty buffer, reusing a released one when available."""
        try:
            return self._free.pop()
        except IndexError:
            if self._on_allocate is not None:
                self._on_allocate()
            return io.StringIO()

    def release(self, storage: io.StringIO) -> None:
        """Clear ``storage`` and return it to the free list."""
        storage.seek(0)
        storage.truncate(0)
        self._free.append(storage)

    def __len__(self) -> int:
        return len(self._free)


DEFAULT_POOL = BufferPool()


class RecordBuffer:
    """Append-only logfmt record builder backed by pooled storage.

    Tokens are separated by a single space; nothing precedes the first one.
    Call :meth:`release` (or use the buffer as a context manager) exactly once
    after consuming the text.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> with RecordBuffer() as buf:
    ...     buf.write_timestamp(datetime(2009, 2, 13, 23, 31, 30, 987654, tzinfo=timezone.utc))
    ...     buf.write_key("info")
    ...     buf.write_property("key", "value")
    ...     buf.getvalue()
    '2009-02-13T23:31:30.987654+0000 info key=value'
    """

    __slots__ = ("_pool", "_storage")

    def __init__(self, pool: BufferPool | None = None) -> None:
        self._pool = pool if pool is not None else DEFAULT_POOL
        self._storage: io.StringIO | None = None

    def _allocate(self) -> io.StringIO:
        if self._storage is None:
            self._storage = self._pool.acquire()
        return self._storage

    def _spacer(self) -> io.StringIO:
        storage = self._allocate()
        if storage.tell() > 0:
            storage.write(" ")
        return storage

    def write_timestamp(self, ts: datetime) -> None:
        """Append ``ts`` formatted with the fixed record timestamp format."""
        self._spacer().write(format_timestamp(ts))

    def write_key(self, key: str) -> None:
        """Append a bare key; ``key`` must not need quoting."""
        self._spacer().write(key)

    def write_property(self, key: str, value: Any) -> None:
        """Append ``key=value`` with the value encoded and quoted as needed."""
        storage = self._spacer()
        storage.write(key)
        storage.write("=")
        storage.write(encode_value(value))

    def write_eol(self) -> None:
        """Append the platform line terminator."""
        self._allocate().write(os.linesep)

    def write_newline(self) -> None:
        """Append a bare line feed regardless of platform."""
        self._allocate().write("\n")

    def getvalue(self) -> str:
        return self._allocate().getvalue()

    def __str__(self) -> str:
        return self.getvalue()

    def __len__(self) -> int:
        """Return the UTF-8 byte length of the accumulated text."""
        return len(self.getvalue().encode("utf-8"))

    def write_to(self, sink: _TextSink) -> int:
        """Write the accumulated text to ``sink`` and return its UTF-8 byte length."""
        text = self.getvalue()
        sink.write(text)
        return len(text.encode("utf-8"))

    def release(self) -> None:
        """Return the storage to the pool; safe to call more than once."""
        if self._storage is not None:
            storage, self._storage = self._storage, None
            self._pool.release(storage)

    def __enter__(self) -> "RecordBuffer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


__all__ = ["BufferPool", "DEFAULT_POOL", "RecordBuffer"]
