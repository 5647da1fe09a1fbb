"""HTTP server settings configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from tsg.core.constants import DEFAULT_HTTP_BIND, DEFAULT_HTTP_PORT


class HTTPServerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    HTTP_BIND: str = DEFAULT_HTTP_BIND
    HTTP_PORT: int = DEFAULT_HTTP_PORT


__all__ = ["HTTPServerSettings"]
