"""Structured logging configuration for the sonifier."""

import json
import logging
import logging.config
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import SonifierConfig

# Client libraries log every export request and frame at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "websockets", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Extra context passed as extra={"context": {...}}
        if hasattr(record, "context"):
            log_data["context"] = record.context

        return json.dumps(log_data, default=str)


def _quiet_level(log_level: str) -> int:
    level = logging.getLevelName(log_level)
    if not isinstance(level, int):
        return logging.WARNING
    return max(logging.WARNING, level)


def setup_logging(config: SonifierConfig | None = None) -> dict:
    """
    Setup structured logging for the server or the viewer.

    Args:
        config: Settings carrying log_level and log_file. Defaults to
                SonifierConfig(), i.e. INFO into 04_logs/app.log.

    Returns:
        The dictConfig mapping that was applied.
    """
    config = config or SonifierConfig()
    log_level = config.log_level.upper()
    log_file = config.log_file

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "sonifier.logging_config.JSONFormatter",
            },
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": log_file,
                "maxBytes": 10 * 1024 * 1024,  # 10 MB
                "backupCount": 5,
                "formatter": "json",
                "encoding": "utf-8",
            },
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["file", "console"],
        },
        "loggers": {
            name: {"level": _quiet_level(log_level)} for name in QUIET_LOGGERS
        },
    }

    logging.config.dictConfig(logging_config)
    return logging_config


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
