from __future__ import annotations

from contextlib import contextmanager
from types import SimpleNamespace
from typing import Any, Iterator, List, Tuple

import pytest

from spanpatch.buffer import NoCoveringSegmentError, TouchConflictError, construct
from spanpatch.runtime import telemetry
from spanpatch.runtime.telemetry import TelemetrySettings


class RecordingLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, dict[str, str]]] = []

    def add_context(self, key: str, value: str) -> None:
        del key, value

    def remove_context(self, key: str) -> None:
        del key

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        del name
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        del name
        yield

    def _record(self, level: str, message: str, pairs: Any) -> None:
        self.records.append((level, message, dict(pairs)))

    def info_with(self, message: str, pairs: Any) -> None:
        self._record("info", message, pairs)

    def warning_with(self, message: str, pairs: Any) -> None:
        self._record("warning", message, pairs)

    def error_with(self, message: str, pairs: Any) -> None:
        self._record("error", message, pairs)


class RecordingConfig:
    def __init__(self) -> None:
        self.profiling = False

    def with_profiling(self, enabled: bool) -> None:
        self.profiling = enabled


@pytest.fixture
def recording_logger(monkeypatch: pytest.MonkeyPatch) -> RecordingLogger:
    logger = RecordingLogger()
    fake_telelog = SimpleNamespace(
        Logger=SimpleNamespace(with_config=lambda name, config: logger)
    )
    monkeypatch.setattr(telemetry, "tl", fake_telelog)
    monkeypatch.setattr(telemetry, "_LOGGER_CACHE", {})
    monkeypatch.setattr(telemetry, "_ACTIVE_CONFIG", None)
    config = RecordingConfig()
    telemetry.configure(config=config)
    assert config.profiling is True
    return logger


def test_settings_defaults_without_environment() -> None:
    settings = TelemetrySettings.from_env({})

    assert settings == TelemetrySettings()
    assert settings.level == "INFO"
    assert settings.console is True


def test_settings_read_prefixed_variables() -> None:
    settings = TelemetrySettings.from_env(
        {
            "SPANPATCH_LOGGER": "rewriter",
            "SPANPATCH_LOG_LEVEL": "debug",
            "SPANPATCH_DISABLE_CONSOLE": "yes",
            "SPANPATCH_LOG_JSON": "1",
            "SPANPATCH_LOG_FILE": "patch.log",
            "SPANPATCH_LOG_BUFFERED": "on",
            "SPANPATCH_LOG_BUFFER_SIZE": "64",
        }
    )

    assert settings.logger_name == "rewriter"
    assert settings.level == "DEBUG"
    assert settings.console is False
    assert settings.json_format is True
    assert settings.log_file == "patch.log"
    assert settings.buffered is True
    assert settings.buffer_size == 64


def test_settings_reject_bad_buffer_size() -> None:
    with pytest.raises(ValueError):
        TelemetrySettings.from_env({"SPANPATCH_LOG_BUFFER_SIZE": "lots"})


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.build_preset_config("verbose", TelemetrySettings())


def test_span_reraises_errors(recording_logger: RecordingLogger) -> None:
    with pytest.raises(KeyError):
        with telemetry.span("tests::span", component=True, metadata={"case": "fail"}):
            raise KeyError("boom")

    [(level, message, payload)] = recording_logger.records
    assert (level, message) == ("error", "span::fail")
    assert payload["component"] == "tests::span"
    assert payload["case"] == "fail"


def test_rejected_replacements_emit_warning_events(
    recording_logger: RecordingLogger,
) -> None:
    buffer = construct(b"foo bar baz")
    buffer.replace_range(4, 7, b"qux")

    with pytest.raises(TouchConflictError):
        buffer.replace_range_unless_touched(5, 6, b"z")
    with pytest.raises(NoCoveringSegmentError):
        construct(b"").replace_range(0, 1, b"x")

    warnings = [rec for rec in recording_logger.records if rec[0] == "warning"]
    assert [message for _, message, _ in warnings] == [
        "event::buffer.touch_conflict",
        "event::buffer.no_covering_segment",
    ]
    conflict = warnings[0][2]
    assert conflict["event"] == "buffer.touch_conflict"
    assert (conflict["start"], conflict["end"], conflict["conflicts"]) == ("5", "6", "1")
    assert warnings[1][2]["start"] == "0"

    failures = [rec for rec in recording_logger.records if rec[0] == "error"]
    assert [message for _, message, _ in failures] == ["span::fail", "span::fail"]


def test_successful_replacement_emits_no_warnings(
    recording_logger: RecordingLogger,
) -> None:
    buffer = construct(b"foo")

    buffer.replace_range_unless_touched(0, 3, b"bar")

    assert recording_logger.records == []
