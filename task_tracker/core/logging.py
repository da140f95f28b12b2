"""Structured logging configuration for the application."""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

# Context variables for tracing: request id is set by the middleware,
# actor id is set once the X-User-ID header has been resolved to a user.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
actor_id_var: ContextVar[str] = ContextVar("actor_id", default="")

# Standard LogRecord attributes, everything else passed via extra={} is ours
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Output format:
    {
        "timestamp": "2026-01-22T12:00:00.000Z",
        "level": "INFO",
        "logger": "task_tracker.services.crud",
        "message": "Status changed",
        "request_id": "abc-123",
        "actor_id": "6f1c...",
        "extra": {"entity": "project", "id": "..."}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_var.get()
        if request_id:
            log_data["request_id"] = request_id

        actor_id = actor_id_var.get()
        if actor_id:
            log_data["actor_id"] = actor_id

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            log_data["extra"] = extra

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class SimpleFormatter(logging.Formatter):
    """Simple human-readable formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
        request_id = request_id_var.get()
        req_id_str = f"[{request_id[:8]}] " if request_id else ""
        actor_id = actor_id_var.get()
        actor_str = f"<{actor_id[:8]}> " if actor_id else ""

        base = (
            f"{timestamp} | {record.levelname:8} | "
            f"{req_id_str}{actor_str}{record.name}: {record.getMessage()}"
        )

        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)

        return base


def setup_logging(
    log_level: str = "INFO", log_format: str = "json", database_echo: bool = False
) -> None:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" for structured, "simple" for human-readable)
        database_echo: Show SQLAlchemy engine logs at INFO level
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    # json - для production (легко парсить в ELK/Datadog)
    # simple - для разработки (человекочитаемый)
    formatter = JSONFormatter() if log_format.lower() == "json" else SimpleFormatter()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if database_echo else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name (usually __name__)."""
    return logging.getLogger(name)


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())
