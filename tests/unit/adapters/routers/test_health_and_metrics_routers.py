from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from chainrecord_api.adapters.routers import api_router, metrics_router
from chainrecord_api.adapters.routers.health_router import get_runtime_settings
from chainrecord_api.config.settings import Settings


def _app(settings: Settings) -> FastAPI:
    app = FastAPI()
    app.include_router(api_router)
    app.include_router(metrics_router)
    app.dependency_overrides[get_runtime_settings] = lambda: settings
    return app


def test_liveness() -> None:
    resp = TestClient(_app(Settings(RPC_URL=None))).get("/health/liveness")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_readiness_ok_when_rpc_configured() -> None:
    resp = TestClient(_app(Settings(RPC_URL="https://node.example.test"))).get("/health/readiness")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_readiness_degraded_without_rpc() -> None:
    resp = TestClient(_app(Settings(RPC_URL=None))).get("/health/readiness")
    assert resp.status_code == 503
    body = resp.json()
    assert body["status"] == "degraded"
    assert body["checks"][0]["name"] == "rpc_url"
    assert body["checks"][0]["status"] == "down"


def test_metrics_exposes_record_families() -> None:
    resp = TestClient(_app(Settings(RPC_URL=None))).get("/metrics")
    assert resp.status_code == 200
    assert "ledger_rpc_latency_seconds" in resp.text
    assert "record_verification_outcomes_total" in resp.text
