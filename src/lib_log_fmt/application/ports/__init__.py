"""Ports connecting the dispatch core to sinks, handlers, and clocks."""

from __future__ import annotations

from .handler import HandlerPort
from .sink import SinkPort
from .time import ClockPort

__all__ = ["ClockPort", "HandlerPort", "SinkPort"]
