from __future__ import annotations

import logging

import lib_log_fmt
from lib_log_fmt import DiscardSink, Logger, __init__conf__
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


def test_every_exported_name_resolves() -> None:
    missing = [name for name in lib_log_fmt.__all__ if not hasattr(lib_log_fmt, name)]
    assert missing == []


def test_library_logger_has_a_null_handler() -> None:
    handlers = logging.getLogger("lib_log_fmt").handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_discard_sink_silences_a_logger() -> None:
    message = Logger(sink=DiscardSink()).error(None, "dropped")
    assert message.text == "dropped"


def test_metadata_matches_the_distribution_name() -> None:
    assert __init__conf__.name == "lib_log_fmt"
    assert __init__conf__.shell_command == "lib_log_fmt"
