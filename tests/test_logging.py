from __future__ import annotations

import io
import json
import logging

from tracker.core.config import Settings
from tracker.core.context import (
    bind_request_id,
    bind_user_id,
    reset_request_id,
    reset_user_id,
)
from tracker.core.logging import configure_logging


def test_configure_logging_outputs_json_with_request_id() -> None:
    settings = Settings(environment="test")
    configure_logging(settings)

    root_logger = logging.getLogger()
    handler = next(
        (h for h in root_logger.handlers if isinstance(h, logging.StreamHandler)),
        None,
    )
    assert handler is not None, "Expected JSON stream handler to be configured"

    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)

    token = bind_request_id("req-json-1")
    try:
        logger = logging.getLogger("tracker.tests.logging")
        logger.info("structured log event", extra={"component": "unit-test"})
    finally:
        handler.flush()
        reset_request_id(token)
        handler.setStream(previous_stream)

    log_lines = buffer.getvalue().strip().splitlines()
    assert log_lines, "Expected structured log line to be captured"
    payload = json.loads(log_lines[-1])

    assert payload["message"] == "structured log event"
    assert payload["request_id"] == "req-json-1"
    assert payload["environment"] == "test"
    assert payload["level"] == "INFO"
    assert payload["context"] == {"component": "unit-test"}
    assert "user_id" not in payload
    assert payload["service"] == settings.project_name
    assert "taskName" not in payload


def test_record_identifiers_are_top_level() -> None:
    configure_logging(Settings(environment="test"))
    handler = next(h for h in logging.getLogger().handlers if isinstance(h, logging.StreamHandler))
    buffer = io.StringIO()
    previous_stream = handler.setStream(buffer)

    request_token = bind_request_id("req-json-2")
    user_token = bind_user_id("user-abc")
    try:
        logger = logging.getLogger("tracker.tests.logging")
        logger.info("Task updated", extra={"task_id": "t-1", "project_id": "p-1", "dangling": True})
        logger.info("Registered user", extra={"user_id": "user-new"})
    finally:
        handler.flush()
        reset_user_id(user_token)
        reset_request_id(request_token)
        handler.setStream(previous_stream)

    updated, registered = (json.loads(line) for line in buffer.getvalue().strip().splitlines()[-2:])

    assert updated["request_id"] == "req-json-2"
    assert updated["user_id"] == "user-abc"
    assert updated["task_id"] == "t-1"
    assert updated["project_id"] == "p-1"
    assert updated["context"] == {"dangling": True}
    assert registered["user_id"] == "user-new"
    assert "context" not in registered
