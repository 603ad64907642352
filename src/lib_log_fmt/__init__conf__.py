"""Static package metadata surfaced by the CLI ``info`` command.

Keep these values in sync with ``pyproject.toml``.
"""

from __future__ import annotations

from typing import Callable

name = "lib_log_fmt"
title = "Structured logfmt logging with immutable propagation contexts"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_fmt"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_fmt"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner, one field per line.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_fmt:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    out = writer if writer is not None else (lambda text: print(text, end=""))
    for line in lines:
        out(line)
