"""Database settings configuration."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from tsg.core.constants import DEFAULT_PG_MAX_CONNECTIONS, DEFAULT_PG_PORT, PROGNAME


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PG_DATABASE: str = "triton"
    PG_USER: str = "root"
    PG_PASSWORD: SecretStr = SecretStr("")
    PG_HOST: str = "localhost"
    PG_PORT: int = DEFAULT_PG_PORT
    PG_MAX_CONNECTIONS: int = DEFAULT_PG_MAX_CONNECTIONS

    @property
    def DATABASE_URL_ASYNC(self) -> URL:
        """Build the asyncpg connection URL."""
        return URL.create(
            "postgresql+asyncpg",
            username=self.PG_USER,
            password=self.PG_PASSWORD.get_secret_value() or None,
            host=self.PG_HOST,
            port=self.PG_PORT,
            database=self.PG_DATABASE,
        )

    @property
    def runtime_params(self) -> dict[str, str]:
        return {"application_name": PROGNAME}


__all__ = ["DatabaseSettings"]
