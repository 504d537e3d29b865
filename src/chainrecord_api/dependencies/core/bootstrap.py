# src/chainrecord_api/dependencies/core/bootstrap.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Core bootstrap for shared infrastructure (settings, HTTP).

This module owns the lifecycle of shared infrastructure used by the FastAPI
app. The single public surface is :func:`bootstrap`, an async context manager
that yields the resolved Settings and one shared ``httpx.AsyncClient`` used
for both JSON-RPC calls and document downloads.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx
from fastapi import FastAPI

from chainrecord_api.config.settings import Settings, get_settings
from chainrecord_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass
class BootstrapState:
    """State yielded by the bootstrap context manager."""

    settings: Settings
    http_client: httpx.AsyncClient


@asynccontextmanager
async def bootstrap(app: FastAPI) -> AsyncGenerator[BootstrapState, None]:
    """Initialize and teardown shared infrastructure.

    A missing ``RPC_URL`` does not stop startup; it is reported by the
    readiness probe and by each retrieval as a ``ConfigurationError``.

    Args:
        app: FastAPI application instance.

    Yields:
        BootstrapState: Resolved settings and shared HTTP client.
    """
    settings: Settings = get_settings()
    logger.info("bootstrap.start", extra={"rpc_configured": settings.rpc_configured})

    http_client = httpx.AsyncClient()
    state = BootstrapState(settings=settings, http_client=http_client)

    try:
        yield state
    finally:
        try:
            await http_client.aclose()
        except Exception:
            logger.exception("bootstrap.http_client_close_failed")
        logger.info("bootstrap.stop")
