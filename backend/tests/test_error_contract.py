"""Tests for normalized error responses."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.core.errors import (
    AppError,
    NotFoundError,
    app_error_handler,
    unhandled_exception_handler,
)
from backend.core.middleware.request_id import RequestIdMiddleware


def test_validation_error_has_standard_shape(client):
    resp = client.post("/api/todos", json={"title": ""})
    assert resp.status_code == 400
    body = resp.json()
    rid = resp.headers.get("x-request-id")
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["request_id"] == rid
    assert body["detail"] == body["error"]["message"]


def test_not_found_error_normalized(client):
    resp = client.put("/api/todos/424242", json={"completed": True})
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"]["code"] == "not_found"
    assert body["error"]["request_id"] == resp.headers.get("x-request-id")


def test_malformed_body_is_validation_error(client):
    resp = client.put("/api/todos/1", json={"completed": "not-a-bool"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "validation_error"


def _make_app():
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Todo not found")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    return app


def test_app_error_uses_its_status_code():
    client = TestClient(_make_app())
    resp = client.get("/missing", headers={"X-Request-Id": "rid-404"})
    assert resp.status_code == 404
    assert resp.json()["error"] == {"code": "not_found", "message": "Todo not found", "request_id": "rid-404"}


def test_unhandled_error_hides_details():
    client = TestClient(_make_app(), raise_server_exceptions=False)
    resp = client.get("/boom")
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"]["code"] == "internal_error"
    assert "exploded" not in body["detail"]
