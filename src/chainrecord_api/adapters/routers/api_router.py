# src/chainrecord_api/adapters/routers/api_router.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""API Router Aggregator (Adapters Layer).

Purpose:
    Compose and expose the top-level `router` that includes all feature routers.

Responsibilities:
    • Mount health endpoints under `/health`.
    • Mount the record endpoint under `/v1/record`.

Layer:
    adapters/routers
"""

from __future__ import annotations

from fastapi import APIRouter

from chainrecord_api.adapters.routers.health_router import router as health_router
from chainrecord_api.adapters.routers.record_router import router as record_router

router = APIRouter()

router.include_router(health_router, prefix="/health", tags=["Health"])

# BaseRouter already includes the /v1/record prefix.
router.include_router(record_router)
