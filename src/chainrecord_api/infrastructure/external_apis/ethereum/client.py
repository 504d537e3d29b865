# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Ethereum JSON-RPC transport client (async, instrumented, single attempt).

This transport is framework-agnostic and provides:

* Async HTTP (httpx) with per-request timeout.
* JSON-RPC 2.0 envelopes with per-client request ids.
* Deterministic mapping to ledger domain errors.
* Prometheus metrics for latency and errors.

Methods:
    * get_code: ``eth_getCode`` at the ``latest`` block.
    * call: ``eth_call`` at the ``latest`` block.

Notes:
    * There is no retry: every call is attempted exactly once.
    * Caller-facing exceptions are always ledger domain exceptions; httpx
      types are never allowed to cross the boundary.
"""

from __future__ import annotations

import itertools
import time
from collections.abc import Mapping
from contextlib import suppress
from typing import Any, Final

import httpx

from chainrecord_api.domain.exceptions.ledger import (
    LedgerCallError,
    LedgerError,
    LedgerMappingError,
    LedgerUnavailable,
)
from chainrecord_api.infrastructure.external_apis.ethereum.types import (
    EthCallObject,
    JsonRpcRequest,
)
from chainrecord_api.infrastructure.logging.logger import (
    get_json_logger,
    get_request_id,
    get_trace_id,
)
from chainrecord_api.infrastructure.observability.metrics_record import (
    get_ledger_errors_total,
    get_ledger_rpc_latency_seconds,
)

_DEFAULT_TIMEOUT: Final[float] = 10.0
_BLOCK_TAG: Final[str] = "latest"

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": "Chainrecord/0.1",
}

logger = get_json_logger(__name__)


class EthereumRpcClient:
    """Single-attempt JSON-RPC client for an Ethereum node."""

    def __init__(
        self,
        rpc_url: str,
        *,
        http: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
    ) -> None:
        """Initialize the transport client.

        Args:
            rpc_url: Node endpoint URL.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
            timeout_s: Optional per-request timeout in seconds.
        """
        self._url = rpc_url
        self._timeout = float(timeout_s) if timeout_s is not None else _DEFAULT_TIMEOUT
        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=self._timeout)
        self._ids = itertools.count(1)

        self._latency = get_ledger_rpc_latency_seconds()
        self._errors = get_ledger_errors_total()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def get_code(self, address: str) -> str:
        """Return the deployed bytecode at ``address`` (``"0x"`` when none)."""
        result = await self._request("eth_getCode", [address, _BLOCK_TAG])
        if not isinstance(result, str):
            raise LedgerMappingError(
                "eth_getCode result must be a hex string.",
                details={"method": "eth_getCode", "type": type(result).__name__},
            )
        return result

    async def call(self, to: str, data: str) -> str:
        """Execute a read-only ``eth_call`` and return the raw hex result."""
        call_object: EthCallObject = {"to": to, "data": data}
        result = await self._request("eth_call", [call_object, _BLOCK_TAG])
        if not isinstance(result, str):
            raise LedgerMappingError(
                "eth_call result must be a hex string.",
                details={"method": "eth_call", "type": type(result).__name__},
            )
        return result

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _request(self, method: str, params: list[Any]) -> Any:
        """Send one JSON-RPC request and return its ``result`` member.

        Raises:
            LedgerUnavailable: On transport failures, timeouts, or HTTP errors.
            LedgerCallError: When the node answers with a JSON-RPC error.
            LedgerMappingError: On non-JSON or malformed envelopes.
        """
        payload: JsonRpcRequest = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        headers = dict(_DEFAULT_HEADERS)
        request_id = get_request_id()
        trace_id = get_trace_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        if trace_id:
            headers["x-trace-id"] = trace_id

        start = time.perf_counter()
        error_reason: str | None = None
        try:
            response = await self._perform_request(payload, headers=headers, method=method)
            return self._handle_response(response, method=method)
        except LedgerError as exc:
            error_reason = type(exc).__name__
            raise
        finally:
            elapsed = time.perf_counter() - start
            outcome = "error" if error_reason else "success"
            with suppress(Exception):
                self._latency.labels(method=method, outcome=outcome).observe(elapsed)
                if error_reason:
                    self._errors.labels(method=method, reason=error_reason).inc()
            logger.debug(
                "ledger.rpc.call",
                extra={
                    "rpc_method": method,
                    "outcome": outcome,
                    "elapsed_ms": round(elapsed * 1000.0, 2),
                },
            )

    async def _perform_request(
        self,
        payload: JsonRpcRequest,
        *,
        headers: Mapping[str, str],
        method: str,
    ) -> httpx.Response:
        """Execute a single HTTP POST and map transport errors."""
        try:
            return await self._client.post(
                self._url,
                json=payload,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise LedgerUnavailable(
                "Ledger node timed out.",
                details={"method": method, "error": str(exc)},
            ) from exc
        except httpx.RequestError as exc:
            raise LedgerUnavailable(
                "Ledger node unreachable.",
                details={"method": method, "error": str(exc)},
            ) from exc

    @staticmethod
    def _handle_response(response: httpx.Response, *, method: str) -> Any:
        """Map an HTTP response into a JSON-RPC result or domain error."""
        if response.status_code != 200:
            raise LedgerUnavailable(
                f"Ledger node returned HTTP {response.status_code}.",
                details={"method": method, "status": response.status_code},
            )

        try:
            body: Any = response.json()
        except ValueError as exc:
            raise LedgerMappingError(
                "Ledger node response was not valid JSON.",
                details={"method": method, "error": str(exc)},
            ) from exc

        if not isinstance(body, Mapping):
            raise LedgerMappingError(
                "JSON-RPC response must be an object.",
                details={"method": method, "type": type(body).__name__},
            )

        error = body.get("error")
        if error is not None:
            if not isinstance(error, Mapping):
                raise LedgerCallError(
                    "JSON-RPC error.",
                    details={"method": method, "rpc_message": str(error)},
                )
            message = str(error.get("message") or "")
            data = error.get("data")
            raise LedgerCallError(
                f"JSON-RPC error {error.get('code')}: {message}".rstrip(": "),
                details={
                    "method": method,
                    "rpc_code": error.get("code"),
                    "rpc_message": message,
                    "rpc_data": data if isinstance(data, str) else None,
                },
            )

        if "result" not in body:
            raise LedgerMappingError(
                "JSON-RPC response has neither result nor error.",
                details={"method": method},
            )
        return body["result"]
