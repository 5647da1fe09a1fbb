"""Tests for settings and process configuration."""

import logging

import pytest
from pydantic import ValidationError

from tsg.config import new_default
from tsg.core.exceptions import UnsupportedLogFormatError, UnsupportedLogLevelError
from tsg.database.driver_logging import DriverLogLevel, StructlogDriverLogger
from tsg.utils.logger import LogFormat, parse_log_format, parse_log_level
from tsg.utils.settings import DatabaseSettings, HTTPServerSettings, LogSettings

SETTINGS_ENV = [
    "LOG_LEVEL",
    "LOG_FORMAT",
    "HTTP_BIND",
    "HTTP_PORT",
    "PG_DATABASE",
    "PG_USER",
    "PG_PASSWORD",
    "PG_HOST",
    "PG_PORT",
    "PG_MAX_CONNECTIONS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


def test_log_settings_defaults():
    settings = LogSettings(_env_file=None)

    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_FORMAT == LogFormat.AUTO
    assert settings.level == logging.INFO
    assert settings.driver_level == DriverLogLevel.TRACE
    assert settings.is_debug is False


def test_log_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "JSON")

    settings = LogSettings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == LogFormat.JSON
    assert settings.level == logging.DEBUG
    assert settings.is_debug is True


def test_log_settings_reject_unknown_level():
    with pytest.raises(ValidationError) as exc_info:
        LogSettings(_env_file=None, LOG_LEVEL="chatty")

    assert "unsupported log level" in str(exc_info.value)


def test_log_settings_reject_unknown_format():
    with pytest.raises(ValidationError):
        LogSettings(_env_file=None, LOG_FORMAT="xml")


def test_parse_helpers():
    assert parse_log_level("warn") == logging.WARNING
    assert parse_log_level("FATAL") == logging.CRITICAL
    assert parse_log_format("human") == LogFormat.HUMAN
    assert parse_log_format(LogFormat.JSON) == LogFormat.JSON

    with pytest.raises(UnsupportedLogLevelError):
        parse_log_level("WARNING")
    with pytest.raises(UnsupportedLogFormatError):
        parse_log_format("logfmt")


def test_database_settings_build_asyncpg_url(monkeypatch):
    monkeypatch.setenv("PG_DATABASE", "tsg")
    monkeypatch.setenv("PG_USER", "tsg_user")
    monkeypatch.setenv("PG_PASSWORD", "s3cret")
    monkeypatch.setenv("PG_HOST", "db.internal")

    settings = DatabaseSettings(_env_file=None)
    url = settings.DATABASE_URL_ASYNC

    assert url.drivername == "postgresql+asyncpg"
    assert url.host == "db.internal"
    assert url.port == 26257
    assert url.database == "tsg"
    assert url.username == "tsg_user"
    assert url.password == "s3cret"
    assert "s3cret" not in repr(settings)
    assert settings.runtime_params == {"application_name": "tsg-keys"}


def test_new_default_applies_defaults():
    config = new_default(
        LogSettings(_env_file=None),
        HTTPServerSettings(_env_file=None),
        DatabaseSettings(_env_file=None),
    )

    assert config.http_server.bind == "127.0.0.1"
    assert config.http_server.port == 3000
    assert config.db_pool.url.port == 26257
    assert config.db_pool.max_connections == 5
    assert config.db_pool.runtime_params == {"application_name": "tsg-keys"}
    assert config.db_pool.log_level == DriverLogLevel.TRACE
    assert isinstance(config.db_pool.logger, StructlogDriverLogger)
    assert config.agent.log_format == LogFormat.AUTO
    assert config.agent.debug is False


def test_new_default_falls_back_on_empty_http_values():
    config = new_default(
        LogSettings(_env_file=None, LOG_LEVEL="ERROR"),
        HTTPServerSettings(_env_file=None, HTTP_BIND="", HTTP_PORT=0),
        DatabaseSettings(_env_file=None),
    )

    assert config.http_server.bind == "127.0.0.1"
    assert config.http_server.port == 3000
    assert config.db_pool.log_level == DriverLogLevel.ERROR
    assert config.agent.log_level == logging.ERROR


def test_new_default_reads_environment(monkeypatch):
    monkeypatch.setenv("HTTP_BIND", "0.0.0.0")
    monkeypatch.setenv("HTTP_PORT", "8080")
    monkeypatch.setenv("PG_PORT", "5432")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = new_default()

    assert config.http_server.bind == "0.0.0.0"
    assert config.http_server.port == 8080
    assert config.db_pool.url.port == 5432
    assert config.agent.debug is True


def test_new_default_stops_on_unknown_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "LOUD")

    with pytest.raises(ValidationError):
        new_default()
