from __future__ import annotations

import io
import logging

import pytest

from lib_log_fmt.application.use_cases.dispatch import build_diagnostic_emitter, dispatch_message
from lib_log_fmt.domain.buffer import BufferPool
from lib_log_fmt.domain.levels import LogLevel
from lib_log_fmt.domain.message import Message, OutputFlags
from tests.doubles import ExplodingHandler, ExplodingSink, FixedClock, RecordingHandler
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]

LF = OutputFlags.DEFAULT | OutputFlags.LF_ONLY


def _message(text: str = "started", level: LogLevel = LogLevel.INFO) -> Message:
    return Message.create(None, level, text, clock=FixedClock().now)


class FlushTrackingSink(io.StringIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


def test_dispatch_writes_one_line_then_fans_out() -> None:
    out = io.StringIO()
    recorder = RecordingHandler()
    message = _message()

    result = dispatch_message(message, sink=out, handlers=[recorder], emit=lambda *_: None, flags=LF)

    assert out.getvalue() == "2009-02-13T23:31:30.987654+0000 info msg=started\n"
    assert recorder.batches == [(message,)]
    assert result == {"ok": True, "written": True, "handlers": 1, "failures": []}


def test_dispatch_flushes_sinks_that_support_it() -> None:
    out = FlushTrackingSink()
    dispatch_message(_message(), sink=out, handlers=[], emit=lambda *_: None, flags=LF)
    assert out.flushes == 1


def test_dispatch_without_sink_only_fans_out() -> None:
    recorder = RecordingHandler()
    result = dispatch_message(_message(), sink=None, handlers=[recorder], emit=lambda *_: None)
    assert result["written"] is False
    assert result["ok"] is True
    assert len(recorder.messages) == 1


def test_handler_failure_is_reported_and_later_handlers_still_run() -> None:
    events: list[tuple[str, dict]] = []
    broken = ExplodingHandler()
    recorder = RecordingHandler()

    result = dispatch_message(
        _message(),
        sink=io.StringIO(),
        handlers=[broken, recorder],
        emit=lambda name, payload: events.append((name, payload)),
    )

    assert broken.calls == 1
    assert len(recorder.messages) == 1
    assert result["ok"] is False
    assert result["failures"] == ["ExplodingHandler"]
    assert [name for name, _ in events] == ["handler_failed"]
    assert events[0][1]["handler"] == "ExplodingHandler"


def test_sink_failure_is_reported_and_handlers_still_run() -> None:
    events: list[str] = []
    sink = ExplodingSink()
    recorder = RecordingHandler()

    result = dispatch_message(
        _message(),
        sink=sink,
        handlers=[recorder],
        emit=lambda name, payload: events.append(name),
    )

    assert sink.calls == 1
    assert events == ["sink_failed"]
    assert result["written"] is False
    assert result["failures"] == ["sink"]
    assert len(recorder.messages) == 1


def test_buffers_return_to_the_pool_even_when_the_sink_fails() -> None:
    pool = BufferPool()
    dispatch_message(_message(), sink=ExplodingSink(), handlers=[], emit=lambda *_: None, pool=pool)
    dispatch_message(_message(), sink=io.StringIO(), handlers=[], emit=lambda *_: None, pool=pool)
    assert len(pool) == 1


def test_diagnostic_emitter_logs_and_forwards(caplog: pytest.LogCaptureFixture) -> None:
    seen: list[tuple[str, dict]] = []
    emit = build_diagnostic_emitter(lambda name, payload: seen.append((name, payload)))

    with caplog.at_level(logging.WARNING, logger="lib_log_fmt"):
        emit("sink_failed", {"sink": "Broken"})

    assert seen == [("sink_failed", {"sink": "Broken"})]
    assert "sink_failed" in caplog.text


def test_diagnostic_emitter_survives_a_failing_hook(caplog: pytest.LogCaptureFixture) -> None:
    def hook(name: str, payload: dict) -> None:
        raise RuntimeError("hook broke")

    emit = build_diagnostic_emitter(hook)
    with caplog.at_level(logging.WARNING, logger="lib_log_fmt"):
        emit("handler_failed", {})

    assert "diagnostic hook failed for handler_failed" in caplog.text


def test_diagnostic_emitter_without_hook_only_logs(caplog: pytest.LogCaptureFixture) -> None:
    emit = build_diagnostic_emitter(None)
    with caplog.at_level(logging.WARNING, logger="lib_log_fmt"):
        emit("handler_failed", {"handler": "X"})
    assert len(caplog.records) == 1
