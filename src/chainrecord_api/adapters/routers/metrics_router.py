# src/chainrecord_api/adapters/routers/metrics_router.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Prometheus scrape endpoint (`/metrics`).

The record metrics are created lazily; this router creates them before the
scrape so every series family is listed from the first request on.

Layer:
    adapters/routers
"""

from __future__ import annotations

from contextlib import suppress

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from chainrecord_api.infrastructure.observability.metrics_record import (
    get_document_fetch_total,
    get_ledger_errors_total,
    get_ledger_rpc_latency_seconds,
    get_verification_outcomes_total,
)

router = APIRouter()


@router.get("/metrics", include_in_schema=False)
async def metrics_probe() -> Response:
    """Expose Prometheus metrics in text format."""
    for getter in (
        get_ledger_rpc_latency_seconds,
        get_ledger_errors_total,
        get_document_fetch_total,
        get_verification_outcomes_total,
    ):
        with suppress(Exception):
            getter()
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
