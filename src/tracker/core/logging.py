"""JSON logging for the tracker service.

Each record becomes one JSON line on stdout. ``request_id``, ``user_id``,
``project_id`` and ``task_id`` sit at the top level so a single request or
record can be followed across log lines; any other ``extra`` values are
grouped under ``context``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import current_identifiers

TRACKED_FIELDS = ("request_id", "user_id", "project_id", "task_id")

# Attributes every LogRecord has; anything else arrived through ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _jsonable(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonLogFormatter(logging.Formatter):
    """Render a record as ``{timestamp, level, logger, message, ...}``.

    ``static_fields`` (service name, environment) are written on every line.
    """

    def __init__(self, *, static_fields: dict[str, Any] | None = None) -> None:
        super().__init__()
        self._static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self._static_fields,
        }

        context: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRS:
                continue
            if key in TRACKED_FIELDS:
                payload[key] = _jsonable(value)
            else:
                context[key] = _jsonable(value)
        if context:
            payload["context"] = context

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False)


class RequestContextFilter(logging.Filter):
    """Copy the bound request and user ids onto each record.

    An explicit ``extra={"user_id": ...}`` wins over the bound value.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        for key, value in current_identifiers().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


def _routed(level: int) -> dict[str, Any]:
    return {"handlers": ["stdout"], "level": level, "propagate": False}


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.captureWarnings(True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonLogFormatter,
                    "static_fields": {
                        "service": settings.project_name,
                        "environment": settings.environment,
                    },
                }
            },
            "filters": {"request_context": {"()": RequestContextFilter}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                    "filters": ["request_context"],
                    "level": level,
                }
            },
            "root": {"handlers": ["stdout"], "level": level},
            "loggers": {
                name: _routed(level) for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
            },
        }
    )


__all__ = ["JsonLogFormatter", "RequestContextFilter", "TRACKED_FIELDS", "configure_logging"]
