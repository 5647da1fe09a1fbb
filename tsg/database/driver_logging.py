"""Bridge between the application log severity and the database driver loggers.

SQLAlchemy and its dialects log through plain stdlib loggers. This module
decides how verbose those loggers are allowed to be, based on the configured
application severity, and re-emits everything they log through structlog,
tagged with a fixed ``module`` field so consumers can filter the subsystem.

The driver scale has one deliberate divergence from a straight mapping: an
application running at ``INFO`` gets the driver's most verbose ``TRACE``
output, and everything the driver reports at ``INFO`` or below is emitted at
application ``DEBUG``. The driver's own informational output is noise at the
application's normal level, only its detailed tracing is worth keeping.
"""

import logging
from enum import IntEnum
from typing import Any, Protocol

import structlog

from tsg.core.constants import DRIVER_LOG_MODULE
from tsg.core.exceptions import UnsupportedLogLevelError
from tsg.utils.logger import get_logger, normalize_severity

# Loggers used by SQLAlchemy and the asyncpg dialect
DRIVER_LOGGER_NAMES = (
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "sqlalchemy.dialects",
)

TRACE = 5


class DriverLogLevel(IntEnum):
    """Verbosity scale of the database driver, least to most verbose."""

    NONE = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5
    TRACE = 6

    @property
    def logging_threshold(self) -> int:
        """Stdlib level to set on the driver loggers for this verbosity."""
        return _LOGGING_THRESHOLDS[self]


_LOGGING_THRESHOLDS = {
    DriverLogLevel.NONE: logging.CRITICAL + 1,
    DriverLogLevel.ERROR: logging.ERROR,
    DriverLogLevel.WARN: logging.WARNING,
    DriverLogLevel.INFO: logging.INFO,
    DriverLogLevel.DEBUG: logging.DEBUG,
    DriverLogLevel.TRACE: TRACE,
}

_DRIVER_LEVELS = {
    "FATAL": DriverLogLevel.NONE,
    "ERROR": DriverLogLevel.ERROR,
    "WARN": DriverLogLevel.WARN,
    # Application INFO still wants the driver's detailed output
    "INFO": DriverLogLevel.TRACE,
    "DEBUG": DriverLogLevel.TRACE,
}

_APP_LEVELS = {
    DriverLogLevel.NONE: logging.CRITICAL,
    DriverLogLevel.ERROR: logging.ERROR,
    DriverLogLevel.WARN: logging.WARNING,
    DriverLogLevel.INFO: logging.DEBUG,
    DriverLogLevel.DEBUG: logging.DEBUG,
    DriverLogLevel.TRACE: logging.DEBUG,
}


def driver_level_for(severity: str) -> DriverLogLevel:
    """Map a configured application severity onto the driver scale.

    Raises:
        UnsupportedLogLevelError: the severity is not one of FATAL, ERROR,
            WARN, INFO or DEBUG.
    """
    try:
        return _DRIVER_LEVELS[normalize_severity(severity)]
    except KeyError:
        raise UnsupportedLogLevelError(severity) from None


def app_level_for(level: DriverLogLevel) -> int:
    """Map a driver level onto the stdlib level used by the application."""
    return _APP_LEVELS.get(level, logging.DEBUG)


def driver_level_from_record(levelno: int) -> DriverLogLevel:
    if levelno >= logging.ERROR:
        return DriverLogLevel.ERROR
    if levelno >= logging.WARNING:
        return DriverLogLevel.WARN
    if levelno >= logging.INFO:
        return DriverLogLevel.INFO
    if levelno >= logging.DEBUG:
        return DriverLogLevel.DEBUG
    return DriverLogLevel.TRACE


def is_debug(severity: str) -> bool:
    """True when the process is configured for DEBUG output."""
    return normalize_severity(severity) == "DEBUG"


class DriverLogger(Protocol):
    def log(self, level: DriverLogLevel, msg: str, data: dict[str, Any]) -> None:
        ...


_RESERVED_FIELDS = ("event", "level")


class StructlogDriverLogger:
    """Forwards driver events to structlog, tagged with the driver module."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self.logger = logger if logger is not None else get_logger(__name__)

    def log(self, level: DriverLogLevel, msg: str, data: dict[str, Any]) -> None:
        fields = dict(data)
        # Keys structlog owns are kept under a driver_ prefix
        for reserved in _RESERVED_FIELDS:
            if reserved in fields:
                fields[f"driver_{reserved}"] = fields.pop(reserved)
        fields["module"] = DRIVER_LOG_MODULE
        self.logger.bind(**fields).log(app_level_for(level), msg)


# Attributes every LogRecord carries; anything else was passed as extra
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def record_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields = {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRIBUTES
    }
    fields["source"] = record.name
    if record.exc_info:
        fields["exc_info"] = record.exc_info
    return fields


class DriverLogHandler(logging.Handler):
    """Intercepts driver log records and hands them to a DriverLogger."""

    def __init__(self, driver_logger: DriverLogger, level: int = logging.NOTSET):
        super().__init__(level)
        self.driver_logger = driver_logger

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.driver_logger.log(
                driver_level_from_record(record.levelno),
                record.getMessage(),
                record_fields(record),
            )
        except Exception:
            self.handleError(record)


def install_driver_logging(
    level: DriverLogLevel, driver_logger: DriverLogger | None = None
) -> DriverLogHandler:
    """Route the driver loggers through the bridge at the given verbosity.

    Calling it again replaces the previously installed handler.
    """
    handler = DriverLogHandler(driver_logger or StructlogDriverLogger())
    for name in DRIVER_LOGGER_NAMES:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if isinstance(existing, DriverLogHandler):
                logger.removeHandler(existing)
        logger.setLevel(level.logging_threshold)
        logger.addHandler(handler)
        logger.propagate = False
    return handler
