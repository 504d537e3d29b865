# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
JSON-RPC Types.

Purpose:
    Typed fragments of the JSON-RPC 2.0 envelopes exchanged with the ledger
    node. Only the fields this service reads or writes are modelled.

Layer:
    infrastructure
"""

from __future__ import annotations

from typing import Any, Literal, NotRequired, TypedDict


class JsonRpcRequest(TypedDict):
    """Outbound JSON-RPC 2.0 request."""

    jsonrpc: Literal["2.0"]
    id: int
    method: str
    params: list[Any]


class JsonRpcErrorObject(TypedDict):
    """JSON-RPC error member (reverts carry ABI-encoded ``data``)."""

    code: int
    message: str
    data: NotRequired[Any]


class JsonRpcResponse(TypedDict, total=False):
    """Inbound JSON-RPC 2.0 response; exactly one of result/error is present."""

    jsonrpc: str
    id: int | str | None
    result: Any
    error: JsonRpcErrorObject


class EthCallObject(TypedDict):
    """Transaction call object for ``eth_call``."""

    to: str
    data: str
