"""
app/core/logging.py

Purpose: Logging configuration

- JSON lines in production, colored single lines in development
- quickserve.* logger namespace
- Per-task onboarding context (user_id, role, phase) stamped on records
"""

import contextvars
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from app.core.config import settings

# Record attributes copied into output when present, with their dev labels
CONTEXT_FIELDS = {
    "user_id": "user",
    "role": "role",
    "phase": "phase",
    "commit_phase": "commit_phase",
    "category_id": "category",
}

LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"

# Each asyncio task gets its own copy, so concurrent submissions never
# see each other's user_id.
_log_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "quickserve_log_context", default={}
)

_base_record_factory = logging.getLogRecordFactory()


def _context_record_factory(*args, **kwargs) -> logging.LogRecord:
    record = _base_record_factory(*args, **kwargs)
    for key, value in _log_context.get().items():
        setattr(record, key, value)
    return record


logging.setLogRecordFactory(_context_record_factory)


def _record_context(record: logging.LogRecord) -> Dict[str, Any]:
    return {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, for log shipping in production."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(_record_context(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class DevelopmentFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelname, RESET)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{color}[{clock}] {record.levelname:<8}{RESET} {record.name}: {record.getMessage()}"

        context = _record_context(record)
        if context:
            tags = ", ".join(f"{CONTEXT_FIELDS[k]}={v}" for k, v in context.items())
            line += f" [{tags}]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def setup_logging() -> logging.Logger:
    """
    Installs a single stdout handler on the root logger.

    The formatter follows settings.ENVIRONMENT; the level follows
    settings.LOG_LEVEL. Driver and server loggers are kept at WARNING.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if settings.is_production else DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    for noisy in ("motor", "pymongo", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger = logging.getLogger("quickserve")
    logger.info(f"Logging ready ({settings.ENVIRONMENT}, level {settings.LOG_LEVEL})")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Returns the quickserve.<name> logger."""
    return logging.getLogger(f"quickserve.{name}")


class LogContext:
    """
    Adds fields to every record logged inside the block.

    Scoped to the current task, and nested blocks merge with the outer one:

        with LogContext(user_id="123", phase="submitting"):
            logger.info("Committing onboarding profile")

    Keys set here must not also be passed through logging's extra=.
    """

    def __init__(self, **fields):
        self.fields = fields
        self._token = None

    def __enter__(self):
        self._token = _log_context.set({**_log_context.get(), **self.fields})
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        _log_context.reset(self._token)
