"""Centralized message codes and default messages for errors."""

from enum import Enum


class MessageCode(str, Enum):
    """Centralized message codes."""

    # Precondition errors
    KEY_MISSING_ACCOUNT_ID = "KEY_MISSING_ACCOUNT_ID"
    KEY_MISSING_ID = "KEY_MISSING_ID"
    KEY_MISSING_IDENTITY = "KEY_MISSING_IDENTITY"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Configuration errors
    CONFIG_UNSUPPORTED_LOG_LEVEL = "CONFIG_UNSUPPORTED_LOG_LEVEL"
    CONFIG_UNSUPPORTED_LOG_FORMAT = "CONFIG_UNSUPPORTED_LOG_FORMAT"


# Default messages for each message code
DEFAULT_MESSAGES = {
    # Precondition errors
    MessageCode.KEY_MISSING_ACCOUNT_ID: "missing account identifier for insert",
    MessageCode.KEY_MISSING_ID: "missing identifier for save",
    MessageCode.KEY_MISSING_IDENTITY: "can't check existence without id or name",
    # Database errors
    MessageCode.DATABASE_ERROR: "database operation failed",
    # Configuration errors
    MessageCode.CONFIG_UNSUPPORTED_LOG_LEVEL: "unsupported log level",
    MessageCode.CONFIG_UNSUPPORTED_LOG_FORMAT: "unsupported log format",
}


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "Unknown message code")
