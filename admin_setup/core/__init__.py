"""Core module with logging, error types, and time helpers."""

from admin_setup.core.errors import (
    AccountNotFoundError,
    AccountServiceError,
    AccountValidationError,
    AppError,
    ConfigurationError,
    EmailTakenError,
    ErrorCode,
    ErrorReport,
    ExitCode,
    StorageError,
)
from admin_setup.core.logging import get_logger, run_context, setup_logging
from admin_setup.core.time import Clock, utcnow

__all__ = [
    # Errors
    "AppError",
    "ErrorCode",
    "ErrorReport",
    "ExitCode",
    "ConfigurationError",
    "StorageError",
    "AccountServiceError",
    "AccountValidationError",
    "AccountNotFoundError",
    "EmailTakenError",
    # Logging
    "get_logger",
    "run_context",
    "setup_logging",
    # Time
    "Clock",
    "utcnow",
]
