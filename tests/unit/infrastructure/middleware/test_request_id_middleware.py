from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from chainrecord_api.infrastructure.middleware.access_log import AccessLogMiddleware
from chainrecord_api.infrastructure.middleware.request_id import (
    RequestIdMiddleware,
    coerce_request_id,
)


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str]:
        return {"request_id": request.state.request_id}

    return app


def test_incoming_request_id_is_preserved() -> None:
    resp = TestClient(_app()).get("/echo", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"
    assert resp.json() == {"request_id": "abc-123"}


def test_request_id_generated_when_missing_or_unsafe() -> None:
    client = TestClient(_app())
    generated = client.get("/echo").headers["X-Request-ID"]
    unsafe = client.get("/echo", headers={"X-Request-ID": "bad id\twith spaces"}).headers["X-Request-ID"]
    assert len(generated) == 36
    assert unsafe != "bad id\twith spaces"


def test_coerce_request_id() -> None:
    assert coerce_request_id("req:1@x") == "req:1@x"
    assert coerce_request_id("x" * 200) != "x" * 200
