"""Logging setup for url-splitter.

Standard output is reserved for CSV data, so every handler configured here
writes to standard error. Records can be rendered for humans (``console``)
or as one JSON object per line (``json``), and carry the correlation
identifier of the run that produced them.
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_LOG_LEVEL_ENV_VAR = "URL_SPLITTER_LOG_LEVEL"
_LOG_FORMAT_ENV_VAR = "URL_SPLITTER_LOG_FORMAT"
_DEFAULT_LEVEL = "WARNING"
_DEFAULT_FORMAT = "console"
_LOG_FORMATS = ("console", "json")

_STANDARD_RECORD_KEYS = frozenset(
    {
        "args",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
        "message",
    }
)

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Attach the active correlation ID to each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - required signature
        record.correlation_id = get_correlation_id() or "-"
        return True


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", "-"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in payload or key in _STANDARD_RECORD_KEYS:
                continue
            payload[key] = value
        return json.dumps(payload, ensure_ascii=False, default=str)


def _resolve_level(level: Optional[str]) -> str:
    if level is None:
        level = os.getenv(_LOG_LEVEL_ENV_VAR, _DEFAULT_LEVEL)
    level = str(level).upper()
    if not isinstance(logging.getLevelName(level), int):
        return _DEFAULT_LEVEL
    return level


def _resolve_format(fmt: Optional[str]) -> str:
    if fmt is None:
        fmt = os.getenv(_LOG_FORMAT_ENV_VAR, _DEFAULT_FORMAT)
    fmt = str(fmt).lower()
    if fmt not in _LOG_FORMATS:
        return _DEFAULT_FORMAT
    return fmt


def configure_logging(*, level: Optional[str] = None, log_format: Optional[str] = None, stream: Any = None) -> None:
    """Configure application-wide logging.

    ``level`` and ``log_format`` fall back to the ``URL_SPLITTER_LOG_LEVEL``
    and ``URL_SPLITTER_LOG_FORMAT`` environment variables, then to
    ``WARNING`` and ``console``. Unknown values fall back to the defaults.
    """

    resolved_level = _resolve_level(level)
    resolved_format = _resolve_format(log_format)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "correlation": {"()": CorrelationIdFilter},
            },
            "formatters": {
                "json": {"()": JsonFormatter},
                "console": {
                    "format": "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "stream": stream or sys.stderr,
                    "level": resolved_level,
                    "filters": ["correlation"],
                    "formatter": resolved_format,
                }
            },
            "root": {
                "level": resolved_level,
                "handlers": ["default"],
            },
        }
    )


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> Optional[str]:
    """Return the correlation identifier of the current context, if any."""

    return _correlation_id.get()


class LogContext:
    """Context manager binding a correlation ID for the duration of a run."""

    def __init__(self, correlation_id: Optional[str] = None):
        self._token: Optional[Token] = None
        self._correlation_id = correlation_id or generate_correlation_id()

    def __enter__(self) -> str:
        self._token = _correlation_id.set(self._correlation_id)
        return self._correlation_id

    def __exit__(self, exc_type, exc, exc_tb) -> None:  # noqa: D401 - context manager signature
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None


def get_logger(name: str) -> logging.Logger:
    """Return a ``logging.Logger`` instance."""

    return logging.getLogger(name)
