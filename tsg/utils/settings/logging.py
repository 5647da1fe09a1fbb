"""Log settings configuration."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tsg.database.driver_logging import DriverLogLevel, driver_level_for, is_debug
from tsg.utils.logger import (
    LogFormat,
    normalize_severity,
    parse_log_format,
    parse_log_level,
)


class LogSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: LogFormat = LogFormat.AUTO

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        # Unknown severities must stop startup
        driver_level_for(value)
        return normalize_severity(value)

    @field_validator("LOG_FORMAT", mode="before")
    @classmethod
    def validate_log_format(cls, value):
        return parse_log_format(value)

    @property
    def level(self) -> int:
        return parse_log_level(self.LOG_LEVEL)

    @property
    def driver_level(self) -> DriverLogLevel:
        return driver_level_for(self.LOG_LEVEL)

    @property
    def is_debug(self) -> bool:
        return is_debug(self.LOG_LEVEL)


__all__ = ["LogSettings"]
