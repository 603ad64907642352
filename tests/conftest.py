from __future__ import annotations

import io

import pytest

from lib_log_fmt import Logger, OutputFlags
from tests.doubles import FixedClock, RecordingHandler


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def recorder() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def logger(sink: io.StringIO, fixed_clock: FixedClock, recorder: RecordingHandler) -> Logger:
    return Logger(
        sink=sink,
        flags=OutputFlags.DEFAULT | OutputFlags.LF_ONLY,
        clock=fixed_clock,
        handlers=[recorder],
    )
