"""Process configuration assembled from the settings sources."""

from dataclasses import dataclass, field

import structlog
from sqlalchemy.engine import URL

from tsg.core.constants import DEFAULT_HTTP_BIND, DEFAULT_HTTP_PORT, HTTP_LOG_MODULE
from tsg.database.driver_logging import (
    DriverLogger,
    DriverLogLevel,
    StructlogDriverLogger,
)
from tsg.utils.logger import LogFormat, get_logger
from tsg.utils.settings import DatabaseSettings, HTTPServerSettings, LogSettings


@dataclass
class DBPoolConfig:
    url: URL
    max_connections: int
    runtime_params: dict[str, str]
    log_level: DriverLogLevel
    logger: DriverLogger


@dataclass
class AgentConfig:
    log_format: LogFormat
    log_level: int
    debug: bool = False


@dataclass
class HTTPServerConfig:
    bind: str
    port: int
    logger: structlog.stdlib.BoundLogger = field(repr=False)


@dataclass
class Config:
    db_pool: DBPoolConfig
    agent: AgentConfig
    http_server: HTTPServerConfig


def new_default(
    log_settings: LogSettings | None = None,
    http_settings: HTTPServerSettings | None = None,
    database_settings: DatabaseSettings | None = None,
) -> Config:
    """Build the process configuration.

    Settings not passed in are read from the environment. An unsupported log
    level or log format raises a ``pydantic.ValidationError`` while the
    settings are loaded, before anything else is constructed.
    """
    log_settings = log_settings or LogSettings()
    http_settings = http_settings or HTTPServerSettings()
    database_settings = database_settings or DatabaseSettings()

    agent = AgentConfig(
        log_format=log_settings.LOG_FORMAT,
        log_level=log_settings.level,
        debug=log_settings.is_debug,
    )

    http_server = HTTPServerConfig(
        bind=http_settings.HTTP_BIND or DEFAULT_HTTP_BIND,
        port=http_settings.HTTP_PORT or DEFAULT_HTTP_PORT,
        logger=get_logger("tsg.http", module=HTTP_LOG_MODULE),
    )

    db_pool = DBPoolConfig(
        url=database_settings.DATABASE_URL_ASYNC,
        max_connections=database_settings.PG_MAX_CONNECTIONS,
        runtime_params=database_settings.runtime_params,
        log_level=log_settings.driver_level,
        logger=StructlogDriverLogger(get_logger("tsg.database")),
    )

    return Config(db_pool=db_pool, agent=agent, http_server=http_server)
