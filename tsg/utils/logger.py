import logging
import sys
from enum import Enum

import structlog
from structlog.stdlib import ProcessorFormatter

from tsg.core.exceptions import UnsupportedLogFormatError, UnsupportedLogLevelError


class LogFormat(str, Enum):
    AUTO = "auto"
    HUMAN = "human"
    JSON = "json"


# Application severities accepted in configuration
APP_LOG_LEVELS: dict[str, int] = {
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def normalize_severity(severity: str) -> str:
    return severity.strip().upper()


def parse_log_level(severity: str) -> int:
    """Translate a configured severity into a stdlib logging level."""
    try:
        return APP_LOG_LEVELS[normalize_severity(severity)]
    except KeyError:
        raise UnsupportedLogLevelError(severity) from None


def parse_log_format(value: str | LogFormat) -> LogFormat:
    if isinstance(value, LogFormat):
        return value
    try:
        return LogFormat(value.strip().lower())
    except ValueError:
        raise UnsupportedLogFormatError(value) from None


def setup_logging(
    log_format: LogFormat = LogFormat.AUTO, log_level: int = logging.INFO
):
    """Setup structlog configuration with JSON or console output."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers = []

    if log_format == LogFormat.AUTO:
        log_format = LogFormat.HUMAN if sys.stdout.isatty() else LogFormat.JSON

    if log_format == LogFormat.JSON:
        formatter = ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(sort_keys=False),
        )
    else:
        formatter = ProcessorFormatter(
            processor=structlog.dev.ConsoleRenderer(colors=True, pad_event=8),
        )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logger = structlog.get_logger()
    return logger


def get_logger(
    name: str | None = None, **initial_values
) -> structlog.stdlib.BoundLogger:
    """Get a logger instance with optional name and bound values."""
    return structlog.get_logger(name, **initial_values)
