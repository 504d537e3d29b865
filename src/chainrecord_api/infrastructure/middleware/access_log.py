# src/chainrecord_api/infrastructure/middleware/access_log.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Access log middleware.

One ``http.access`` JSON line is written per request with the method, path,
status, latency and correlation id. A handler that raises is logged with
status 500 and ``ok=false`` before the exception continues upward.
"""

from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from chainrecord_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Write a structured access line around each request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "http.access",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status": status_code,
                    "ok": status_code < 500,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 2),
                    "request_id": getattr(request.state, "request_id", None),
                },
            )
