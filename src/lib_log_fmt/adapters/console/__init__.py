"""Console handlers."""

from __future__ import annotations

from .rich_console import RichConsoleHandler

__all__ = ["RichConsoleHandler"]
