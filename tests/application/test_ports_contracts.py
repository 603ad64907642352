from __future__ import annotations

import io
import sys

import pytest

from lib_log_fmt.adapters import DiscardSink, RichConsoleHandler, StdlibLoggingHandler
from lib_log_fmt.application.ports import ClockPort, HandlerPort, SinkPort
from tests.doubles import FixedClock, RecordingHandler
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.mark.parametrize("sink", [io.StringIO(), sys.stdout, DiscardSink()])
def test_text_streams_satisfy_the_sink_port(sink: object) -> None:
    assert isinstance(sink, SinkPort)


@pytest.mark.parametrize(
    "handler",
    [RecordingHandler(), RichConsoleHandler(), StdlibLoggingHandler()],
    ids=["recording", "rich-console", "stdlib"],
)
def test_shipped_handlers_satisfy_the_handler_port(handler: object) -> None:
    assert isinstance(handler, HandlerPort)


def test_fixed_clock_satisfies_the_clock_port() -> None:
    assert isinstance(FixedClock(), ClockPort)


def test_objects_without_the_method_do_not_satisfy_ports() -> None:
    assert not isinstance(object(), SinkPort)
    assert not isinstance(object(), HandlerPort)
    assert not isinstance(object(), ClockPort)
