# src/chainrecord_api/dependencies/record.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Dependency wiring for on-chain record retrieval.

Overview:
    Builds the JSON-RPC client, gateways and use case for one retrieval and
    exposes them to the router (FastAPI dependency) and the CLI (plain
    coroutine).

Layer:
    dependencies

Design:
    * ``RPC_URL`` is validated before any client is created, so a missing
      endpoint fails fast with ``ConfigurationError`` and no network I/O.
    * Each retrieval is a fresh, independent run; the only shared object is
      the optional ``httpx.AsyncClient`` owned by the app lifespan.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import cast

import httpx
from fastapi import Depends, Request

from chainrecord_api.adapters.gateways.document_gateway import HttpDocumentGateway
from chainrecord_api.adapters.gateways.ledger_gateway import ContractLedgerGateway
from chainrecord_api.application.use_cases.record.get_onchain_record import GetOnChainRecord
from chainrecord_api.config.record import DEFAULT_RECORD_CONFIG, RecordConfig
from chainrecord_api.config.settings import Settings, get_settings
from chainrecord_api.domain.entities.retrieval_result import RetrievalResult
from chainrecord_api.infrastructure.external_apis.ethereum.client import EthereumRpcClient

type RecordRetriever = Callable[[], Awaitable[RetrievalResult]]


async def retrieve_onchain_record(
    *,
    settings: Settings,
    config: RecordConfig = DEFAULT_RECORD_CONFIG,
    http: httpx.AsyncClient | None = None,
) -> RetrievalResult:
    """Run one read-and-verify retrieval.

    Args:
        settings: Resolved process settings (endpoint and timeouts).
        config: Record configuration; tests inject one pointing at mocks.
        http: Optional shared client. When omitted, a client is created for
            this run and closed afterwards.

    Raises:
        ConfigurationError: If ``RPC_URL`` is not configured.
        NotDeployedError: If the contract has no code at the configured address.
        LedgerReadError: If the commitment or timestamp cannot be read.
        LedgerUnavailable: If the node is unreachable during the deployment check.
    """
    rpc_url = settings.require_rpc_url()

    owned = http is None
    client = http or httpx.AsyncClient()
    try:
        rpc = EthereumRpcClient(rpc_url, http=client, timeout_s=settings.rpc_timeout_s)
        use_case = GetOnChainRecord(
            ledger=ContractLedgerGateway(rpc, config.contract_address),
            documents=HttpDocumentGateway(client, timeout_s=settings.document_timeout_s),
            config=config,
        )
        return await use_case.execute()
    finally:
        if owned:
            await client.aclose()


def get_record_config() -> RecordConfig:
    """Return the compiled-in record configuration."""
    return DEFAULT_RECORD_CONFIG


def get_record_retriever(
    request: Request,
    config: RecordConfig = Depends(get_record_config),
) -> RecordRetriever:
    """FastAPI dependency returning a zero-argument retrieval coroutine.

    Uses the settings and shared HTTP client placed on ``app.state`` by the
    lifespan, falling back to ``get_settings()`` outside a lifespan.
    """
    state = request.app.state
    settings = cast(Settings, getattr(state, "settings", None) or get_settings())
    http = cast(httpx.AsyncClient | None, getattr(state, "http_client", None))

    async def _retrieve() -> RetrievalResult:
        return await retrieve_onchain_record(settings=settings, config=config, http=http)

    return _retrieve
