from __future__ import annotations

import logging

import pytest

from lib_log_fmt.domain.errors import InvalidLevelError
from lib_log_fmt.domain.levels import LogLevel, coerce_level
from tests.os_markers import OS_AGNOSTIC

pytestmark = [OS_AGNOSTIC]


@pytest.mark.parametrize(
    "level, text",
    [
        (LogLevel.DEBUG, "debug"),
        (LogLevel.INFO, "info"),
        (LogLevel.WARNING, "warn"),
        (LogLevel.ERROR, "error"),
    ],
)
def test_text_form_is_canonical_lowercase(level: LogLevel, text: str) -> None:
    assert level.text == text
    assert str(level) == text
    assert level.marshal_text() == text


@pytest.mark.parametrize("level", list(LogLevel))
def test_parse_of_format_round_trips(level: LogLevel) -> None:
    assert LogLevel.parse(level.text) is level


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Debug", LogLevel.DEBUG),
        ("DEBUG", LogLevel.DEBUG),
        ("INFO", LogLevel.INFO),
        ("information", LogLevel.INFO),
        ("Warning", LogLevel.WARNING),
        ("WARN", LogLevel.WARNING),
        (" error ", LogLevel.ERROR),
    ],
)
def test_from_name_accepts_case_insensitive_synonyms(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


@pytest.mark.parametrize("name", ["xxxx", "verbose", "critical", ""])
def test_from_name_rejects_unknown_tokens(name: str) -> None:
    with pytest.raises(InvalidLevelError, match="invalid level"):
        LogLevel.from_name(name)


def test_invalid_level_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        LogLevel.from_name("loud")


@pytest.mark.parametrize("code, text", [(10, "debug"), (40, "error"), (63, "unknown 63"), (-1, "unknown -1")])
def test_format_code_never_fails(code: int, text: str) -> None:
    assert LogLevel.format_code(code) == text


def test_levels_are_totally_ordered() -> None:
    assert LogLevel.DEBUG < LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR
    assert sorted([LogLevel.ERROR, LogLevel.DEBUG, LogLevel.WARNING]) == [
        LogLevel.DEBUG,
        LogLevel.WARNING,
        LogLevel.ERROR,
    ]


def test_from_numeric_rejects_non_standard_codes() -> None:
    assert LogLevel.from_numeric(30) is LogLevel.WARNING
    with pytest.raises(InvalidLevelError):
        LogLevel.from_numeric(35)


@pytest.mark.parametrize("level", list(LogLevel))
def test_to_python_level_matches_logging_constants(level: LogLevel) -> None:
    assert level.to_python_level() == getattr(logging, level.name)
    assert LogLevel.from_python_level(level.to_python_level()) is level


def test_coerce_level_accepts_enum_and_text() -> None:
    assert coerce_level(LogLevel.INFO) is LogLevel.INFO
    assert coerce_level("warning") is LogLevel.WARNING
