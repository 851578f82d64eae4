"""
Structured error handling with stable error codes.

Every failure the setup command can surface is mapped to a stable code and
a process exit status, so operators and wrapper scripts can tell a missing
environment variable apart from a database or validation failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for command failures."""

    # Configuration errors (1xxx)
    CONFIGURATION_ERROR = "E1001"

    # Storage errors (2xxx)
    STORAGE_ERROR = "E2000"

    # Account service errors (3xxx)
    ACCOUNT_SERVICE_ERROR = "E3000"
    ACCOUNT_VALIDATION_ERROR = "E3001"
    ACCOUNT_NOT_FOUND = "E3002"
    EMAIL_TAKEN = "E3003"


class ExitCode:
    """Process exit statuses."""

    OK = 0
    FAILURE = 1
    CONFIGURATION = 2


@dataclass(frozen=True)
class ErrorReport:
    """Structured error report.

    Format: {error: {code, message, details?}}
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON output."""
        error: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            error["details"] = self.details
        return {"error": error}


class AppError(Exception):
    """Base application error with structured error detail."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        exit_code: int = ExitCode.FAILURE,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.exit_code = exit_code
        self.details = details
        super().__init__(message)

    def to_report(self) -> ErrorReport:
        """Create an error report for logging or JSON output."""
        return ErrorReport(code=self.code, message=self.message, details=self.details)


class ConfigurationError(AppError):
    """Required configuration missing or invalid (exit 2)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            ErrorCode.CONFIGURATION_ERROR, message, ExitCode.CONFIGURATION, details
        )


class StorageError(AppError):
    """Persistent store read/write failure (exit 1)."""

    def __init__(self, message: str = "Storage error", details: dict[str, Any] | None = None):
        super().__init__(ErrorCode.STORAGE_ERROR, message, ExitCode.FAILURE, details)


class AccountServiceError(AppError):
    """Account creation or update failure (exit 1)."""

    def __init__(
        self,
        message: str = "Account service error",
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.ACCOUNT_SERVICE_ERROR,
    ):
        super().__init__(code, message, ExitCode.FAILURE, details)


class AccountValidationError(AccountServiceError):
    """Account fields failed validation."""

    def __init__(self, message: str = "Invalid account fields", details: dict[str, Any] | None = None):
        super().__init__(message, details, ErrorCode.ACCOUNT_VALIDATION_ERROR)


class AccountNotFoundError(AccountServiceError):
    """Account to update does not exist."""

    def __init__(self, message: str = "Account not found"):
        super().__init__(message, code=ErrorCode.ACCOUNT_NOT_FOUND)


class EmailTakenError(AccountServiceError):
    """Email already registered to another account."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, code=ErrorCode.EMAIL_TAKEN)
