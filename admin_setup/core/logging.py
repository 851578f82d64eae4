"""Structured logging configuration for the admin setup command."""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional

from admin_setup.core.time import utcnow

# Run-scoped fields (run_id, command) attached to every record
run_context: ContextVar[Dict[str, Any]] = ContextVar("run_context", default={})


def _record_data(record: logging.LogRecord) -> Optional[Dict[str, Any]]:
    return getattr(record, "data", None) or None


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log files and log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({k: v for k, v in run_context.get().items() if v is not None})

        data = _record_data(record)
        if data:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain pipe-separated lines for stderr, without terminal escape codes."""

    def format(self, record: logging.LogRecord) -> str:
        run_id = run_context.get().get("run_id") or "-"
        parts = [
            utcnow().strftime("%Y-%m-%d %H:%M:%S"),
            f"{record.levelname:8}",
            run_id[:8],
            record.name,
            record.getMessage(),
        ]
        data = _record_data(record)
        if data:
            parts.append(str(data))

        line = " | ".join(parts)
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that accepts a ``data`` keyword for structured fields."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        if "data" in kwargs:
            extra["data"] = kwargs.pop("data")
        kwargs["extra"] = extra
        return msg, kwargs


_loggers: Dict[str, ContextLogger] = {}


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger."""
    if name not in _loggers:
        _loggers[name] = ContextLogger(logging.getLogger(name), {})
    return _loggers[name]


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
    debug: bool = False,
) -> None:
    """Configure logging for a command run.

    Log records go to stderr so stdout stays reserved for progress lines.
    A ``log_file`` always receives JSON regardless of ``json_output``.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(StructuredFormatter() if json_output else ConsoleFormatter())
    root_logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    if not debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.WARNING)
