import asyncio
import logging

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from backend.core.logging import LOGGER_NAME, get_request_id
from backend.core.middleware.request_id import RequestIdMiddleware


def _make_app():
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)

    @app.get("/")
    async def root(request: Request):
        return {
            "request_id": getattr(request.state, "request_id", None),
            "context_request_id": get_request_id(),
        }

    return app


def test_generates_request_id_when_missing():
    app = _make_app()
    client = TestClient(app)

    resp = client.get("/")
    assert resp.status_code == 200
    rid_header = resp.headers.get("x-request-id")
    body_rid = resp.json().get("request_id")

    assert rid_header
    assert body_rid
    assert rid_header == body_rid


def test_echoes_provided_request_id():
    app = _make_app()
    client = TestClient(app)

    provided = "test-rid-123"
    resp = client.get("/", headers={"X-Request-Id": provided})

    assert resp.status_code == 200
    assert resp.headers.get("x-request-id") == provided
    assert resp.json().get("request_id") == provided
    assert resp.json().get("context_request_id") == provided


def test_context_request_id_reset_when_downstream_raises():
    async def run():
        middleware = RequestIdMiddleware(_make_app())
        request = Request({
            "type": "http",
            "method": "GET",
            "path": "/",
            "query_string": b"",
            "headers": [(b"x-request-id", b"rid-failing")],
        })

        async def call_next(req):
            assert get_request_id() == "rid-failing"
            raise RuntimeError("downstream failed")

        with pytest.raises(RuntimeError):
            await middleware.dispatch(request, call_next)
        return get_request_id()

    assert asyncio.run(run()) is None


def test_completion_log_carries_route_and_todo_id(client, caplog):
    todo = client.post("/api/todos", json={"title": "Buy milk"}).json()

    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        resp = client.put(f"/api/todos/{todo['id']}", json={"completed": True})

    rid = resp.headers.get("x-request-id")
    completed = [
        r for r in caplog.records
        if r.getMessage() == "request.complete" and getattr(r, "request_id", None) == rid
    ]
    assert len(completed) == 1
    record = completed[0]
    assert record.route == "/api/todos/{todo_id}"
    assert str(record.todo_id) == str(todo["id"])
    assert record.status == 200
