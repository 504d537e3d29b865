# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Adapter Gateway: reference document over HTTP.

Purpose:
    Download the official reference document as raw bytes with a single GET.
    Any failure (network, timeout, invalid URL, closed client, non-200 status)
    is logged and reported as ``None`` ("document unavailable"); nothing is
    raised past this gateway.

Layer:
    adapters
"""

from __future__ import annotations

from contextlib import suppress
from typing import Final

import httpx

from chainrecord_api.domain.interfaces.gateways.document_gateway import DocumentGatewayProtocol
from chainrecord_api.infrastructure.logging.logger import get_json_logger
from chainrecord_api.infrastructure.observability.metrics_record import (
    get_document_fetch_total,
)

_DEFAULT_TIMEOUT: Final[float] = 20.0
_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/pdf, application/octet-stream;q=0.9, */*;q=0.1",
    "User-Agent": "Chainrecord/0.1",
}

logger = get_json_logger(__name__)


class HttpDocumentGateway(DocumentGatewayProtocol):
    """Single-attempt binary document fetcher."""

    def __init__(self, http: httpx.AsyncClient, *, timeout_s: float | None = None) -> None:
        """Initialize the gateway.

        Args:
            http: Shared ``httpx.AsyncClient`` (not owned by this gateway).
            timeout_s: Optional download timeout in seconds.
        """
        self._client = http
        self._timeout = float(timeout_s) if timeout_s is not None else _DEFAULT_TIMEOUT
        self._fetch_total = get_document_fetch_total()

    async def fetch(self, url: str) -> bytes | None:
        """Return the document body, or ``None`` when it is unavailable."""
        try:
            response = await self._client.get(
                url,
                headers=_DEFAULT_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
        except Exception as exc:
            # Wider than httpx.HTTPError: InvalidURL and a closed client raise outside it.
            self._record("transport_error")
            logger.warning(
                "record.document.fetch_failed",
                extra={"url": url, "reason": type(exc).__name__, "error": str(exc)},
            )
            return None

        if response.status_code != 200:
            self._record("bad_status")
            logger.warning(
                "record.document.fetch_failed",
                extra={"url": url, "reason": "status", "status": response.status_code},
            )
            return None

        body = response.content
        self._record("success")
        logger.info("record.document.fetched", extra={"url": url, "bytes": len(body)})
        return body

    def _record(self, outcome: str) -> None:
        with suppress(Exception):
            self._fetch_total.labels(outcome=outcome).inc()
