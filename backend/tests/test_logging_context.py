"""Tests for structured logging and request_id propagation."""

import json
import logging

from backend.core.logging import JsonFormatter, LOGGER_NAME, log_event


def test_request_id_in_response_and_logs(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        response = client.get("/healthz")
    rid = response.headers.get("x-request-id")
    assert rid
    records = [r for r in caplog.records if getattr(r, "request_id", None) == rid]
    assert records, "Expected logs to contain request_id from response"
    assert len({r.request_id for r in records}) == 1


def test_todo_events_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        todo = client.post("/api/todos", json={"title": "Buy milk"}).json()
        client.delete(f"/api/todos/{todo['id']}")

    events = [getattr(r, "event_type", None) for r in caplog.records]
    assert "todo.created" in events
    assert "todo.deleted" in events
    created = next(r for r in caplog.records if getattr(r, "event_type", None) == "todo.created")
    assert created.todo_id == todo["id"]


def test_log_event_truncates_long_values(caplog):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_event("info", "test.event", request_id="rid-1", extra={"blob": "x" * 2000})
    record = caplog.records[-1]
    assert record.request_id == "rid-1"
    assert record.blob.endswith("...<truncated>")
    assert len(record.blob) < 600


def test_json_formatter_includes_request_id_and_extras():
    record = logging.LogRecord(LOGGER_NAME, logging.INFO, __file__, 1, "hello", None, None)
    record.request_id = "rid-json"
    record.todo_id = 7
    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["request_id"] == "rid-json"
    assert payload["todo_id"] == 7
    assert payload["level"] == "INFO"
