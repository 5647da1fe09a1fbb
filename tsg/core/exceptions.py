"""Exception hierarchy for key persistence and configuration."""

from enum import Enum

from .messages import MessageCode, get_default_message


class TSGException(Exception):
    """Base exception with unified message codes."""

    def __init__(
        self,
        message_code: MessageCode,
        message: str | None = None,
        details: dict | None = None,
    ):
        self.message_code = message_code
        self.message: str = message or get_default_message(message_code)
        self.details = details or {}
        super().__init__(self.message)


class PreconditionError(TSGException):
    """A required identifying field was missing before any I/O."""


class MissingAccountIDError(PreconditionError):
    def __init__(self) -> None:
        super().__init__(MessageCode.KEY_MISSING_ACCOUNT_ID)


class MissingIDError(PreconditionError):
    def __init__(self) -> None:
        super().__init__(MessageCode.KEY_MISSING_ID)


class MissingIdentityError(PreconditionError):
    def __init__(self) -> None:
        super().__init__(MessageCode.KEY_MISSING_IDENTITY)


class TransactionPhase(str, Enum):
    BEGIN = "begin"
    INSERT = "insert"
    UPDATE = "update"
    COMMIT = "commit"
    POST_INSERT_LOOKUP = "post-insert lookup"
    EXISTS = "exists"
    LOOKUP = "lookup"


_PHASE_MESSAGES = {
    TransactionPhase.BEGIN: "failed to begin transaction",
    TransactionPhase.INSERT: "failed to insert key",
    TransactionPhase.UPDATE: "failed to update key",
    TransactionPhase.COMMIT: "failed to commit transaction",
    TransactionPhase.POST_INSERT_LOOKUP: "failed to find key after insert",
    TransactionPhase.EXISTS: "failed to check key existence",
    TransactionPhase.LOOKUP: "failed to find key",
}


class TransactionError(TSGException):
    """A database phase failed; the original cause is chained as __cause__."""

    def __init__(
        self,
        operation: str,
        phase: TransactionPhase,
        cause: BaseException | None = None,
    ):
        self.operation = operation
        self.phase = phase
        message = f"{operation}: {_PHASE_MESSAGES[phase]}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(
            MessageCode.DATABASE_ERROR,
            message=message,
            details={"operation": operation, "phase": phase.value},
        )


class ConfigurationError(TSGException):
    """Configuration that must stop the process at startup."""


class UnsupportedLogLevelError(ConfigurationError, ValueError):
    def __init__(self, level: str):
        self.level = level
        super().__init__(
            MessageCode.CONFIG_UNSUPPORTED_LOG_LEVEL,
            message=f"unsupported log level: {level!r}",
            details={"level": level},
        )


class UnsupportedLogFormatError(ConfigurationError, ValueError):
    def __init__(self, log_format: str):
        self.log_format = log_format
        super().__init__(
            MessageCode.CONFIG_UNSUPPORTED_LOG_FORMAT,
            message=f"unsupported log format: {log_format!r}",
            details={"log_format": log_format},
        )
