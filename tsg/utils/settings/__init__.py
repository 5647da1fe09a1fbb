from .database import DatabaseSettings
from .http import HTTPServerSettings
from .logging import LogSettings

__all__ = ["DatabaseSettings", "HTTPServerSettings", "LogSettings"]
