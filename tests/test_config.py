"""Tests for settings loading and logging configuration."""

import logging

import pytest

from apibump.config import load_settings
from apibump.errors import ConfigError
from apibump.logging import configure_logging, get_logger


def test_defaults(monkeypatch):
    monkeypatch.delenv("APIBUMP_LOGGING__LEVEL", raising=False)
    monkeypatch.delenv("APIBUMP_LOGGING__FORMAT", raising=False)
    monkeypatch.delenv("APIBUMP_REPORT__INDENT", raising=False)
    settings = load_settings()
    assert settings.logging.level == "WARNING"
    assert settings.logging.format == "console"
    assert settings.report.indent is None


def test_env_vars(monkeypatch):
    monkeypatch.setenv("APIBUMP_LOGGING__LEVEL", "debug")
    monkeypatch.setenv("APIBUMP_LOGGING__FORMAT", "json")
    monkeypatch.setenv("APIBUMP_REPORT__INDENT", "4")
    settings = load_settings()
    assert settings.logging.level == "DEBUG"
    assert settings.logging.format == "json"
    assert settings.report.indent == 4


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("APIBUMP_REPORT__INDENT", "4")
    settings = load_settings(report={"indent": 1})
    assert settings.report.indent == 1


def test_invalid_value_raises_config_error():
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_settings(logging={"level": "LOUD"})


def test_configure_logging_sets_root_level():
    try:
        configure_logging(level="DEBUG", json_format=True)
        assert logging.getLogger().level == logging.DEBUG
        assert get_logger("apibump.test") is not None
    finally:
        configure_logging(level="WARNING")
    assert logging.getLogger().level == logging.WARNING


def test_named_logger_writes_to_stderr(capsys):
    try:
        configure_logging(level="INFO", json_format=True)
        get_logger("apibump.test").info("named_logger_event", answer=42)
    finally:
        configure_logging(level="WARNING")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert '"event": "named_logger_event"' in captured.err
    assert '"answer": 42' in captured.err


def test_named_logger_created_before_configuration_follows_it(capsys):
    log = get_logger("apibump.early")
    try:
        configure_logging(level="ERROR")
        log.warning("dropped_event")
        configure_logging(level="DEBUG")
        log.debug("kept_event")
    finally:
        configure_logging(level="WARNING")
    err = capsys.readouterr().err
    assert "dropped_event" not in err
    assert "kept_event" in err
