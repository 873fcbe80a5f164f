from __future__ import annotations

import pytest

from subword_engine.runtime import telemetry
from subword_engine.runtime.telemetry import TelemetrySettings


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUBWORD_ENGINE_LOG_LEVEL", "debug")
    monkeypatch.setenv("SUBWORD_ENGINE_DISABLE_CONSOLE", "yes")
    monkeypatch.setenv("SUBWORD_ENGINE_LOG_JSON", "1")
    monkeypatch.setenv("SUBWORD_ENGINE_LOG_BUFFER_SIZE", "64")

    settings = TelemetrySettings.from_env()

    assert settings.level == "DEBUG"
    assert settings.console is False
    assert settings.json_format is True
    assert settings.buffer_size == 64


def test_production_preset_writes_to_file(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SUBWORD_ENGINE_LOG_FILE", raising=False)

    settings = TelemetrySettings.preset("production")

    assert settings.console is False
    assert settings.buffered is True
    assert settings.log_file == "subword_engine.log"


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        TelemetrySettings.preset("verbose")


def test_configure_accepts_a_single_source() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="development", settings=TelemetrySettings())


def test_span_reraises_and_keeps_metadata() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", component=True, metadata={"k": 1}) as handle:
            handle.add_metadata("status", "running")
            assert handle.metadata == {"k": "1", "status": "running"}
            assert handle.component_name == "test::span"
            raise RuntimeError("boom")
