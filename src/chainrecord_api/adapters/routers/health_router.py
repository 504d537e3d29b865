# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Health endpoints (Adapters Layer).

Purpose:
    Expose liveness and readiness signals for container orchestrators.

Design:
    * Liveness performs no I/O.
    * Readiness reports whether the ledger endpoint is configured. It does
      not contact the node: each retrieval is a single attempt and a probe
      call would add load without changing the answer for the next request.
    * ``/health/readiness`` returns 503 with ``degraded`` when ``RPC_URL`` is
      missing.
"""

from __future__ import annotations

import typing as t
from enum import Enum
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import Field

from chainrecord_api.adapters.schemas.http.base import BaseHTTPSchema
from chainrecord_api.config.settings import Settings, get_settings
from chainrecord_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)
router = APIRouter()


class HealthState(str, Enum):
    """Overall service health classification."""

    OK = "ok"
    DEGRADED = "degraded"


class CheckResult(BaseHTTPSchema):
    """Result of a single readiness check."""

    name: str = Field(..., examples=["rpc_url"])
    status: t.Literal["ok", "down"]
    detail: str | None = None


class ReadinessResponse(BaseHTTPSchema):
    """Aggregated readiness response."""

    status: HealthState
    checks: list[CheckResult] = Field(default_factory=list)


class LivenessResponse(BaseHTTPSchema):
    """Liveness response indicating the process is running."""

    status: t.Literal["ok"] = "ok"


def get_runtime_settings(request: Request) -> Settings:
    """Return the lifespan settings, or the cached singleton outside a lifespan."""
    settings = getattr(request.app.state, "settings", None)
    return settings if isinstance(settings, Settings) else get_settings()


@router.get(
    "/liveness",
    summary="Liveness",
    operation_id="health_liveness",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
)
async def liveness() -> LivenessResponse:
    """Return a fast liveness signal (no external I/O)."""
    return LivenessResponse()


@router.get(
    "/readiness",
    summary="Readiness",
    operation_id="health_readiness",
    response_model=ReadinessResponse,
    responses={503: {"description": "Service degraded", "model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    settings: Annotated[Settings, Depends(get_runtime_settings)],
) -> ReadinessResponse:
    """Report readiness based on ledger endpoint configuration."""
    if settings.rpc_configured:
        check = CheckResult(name="rpc_url", status="ok")
    else:
        check = CheckResult(name="rpc_url", status="down", detail="RPC_URL is not configured")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    payload = ReadinessResponse(
        status=HealthState.OK if check.status == "ok" else HealthState.DEGRADED,
        checks=[check],
    )
    logger.info("readiness_probe", extra={"overall": payload.status, "rpc_configured": settings.rpc_configured})
    return payload
