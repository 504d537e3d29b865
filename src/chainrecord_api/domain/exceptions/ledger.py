# src/chainrecord_api/domain/exceptions/ledger.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Ledger domain exceptions.

Purpose:
    Error types for reads against the ledger node and the record contract.

Layer:
    domain

Notes:
    - The JSON-RPC transport translates httpx and node failures into these
      types; httpx exceptions never cross the infrastructure boundary.
    - ``LedgerCallError`` on a per-period accessor is *not* fatal: the
      retrieval use case converts it into an unavailable period reading.
    - ``NotDeployedError`` and ``LedgerReadError`` are fatal for a retrieval.
"""

from __future__ import annotations

from .base import DomainError


class LedgerError(DomainError):
    """Base class for ledger-related domain errors."""

    code = "LEDGER_ERROR"

    @property
    def reason(self) -> str:
        """Return the best-available underlying reason for this failure.

        Preference order: JSON-RPC ``error.message``, then ``error.data``,
        then the exception message.
        """
        rpc_message = self.details.get("rpc_message")
        if isinstance(rpc_message, str) and rpc_message:
            return rpc_message
        rpc_data = self.details.get("rpc_data")
        if isinstance(rpc_data, str) and rpc_data:
            return rpc_data
        return self.message or "On-chain call failed"


class LedgerUnavailable(LedgerError):
    """The ledger node is unreachable, timed out, or answered with an HTTP error."""

    code = "LEDGER_UNAVAILABLE"


class LedgerCallError(LedgerError):
    """The node answered with a JSON-RPC error object (e.g. an execution revert)."""

    code = "LEDGER_CALL_FAILED"


class LedgerMappingError(LedgerError):
    """The node answered with a payload that cannot be decoded safely."""

    code = "LEDGER_SCHEMA_ERROR"


class NotDeployedError(LedgerError):
    """No contract bytecode exists at the configured address on this network."""

    code = "CONTRACT_NOT_DEPLOYED"


class LedgerReadError(LedgerError):
    """A required metadata read (commitment or timestamp) failed."""

    code = "LEDGER_READ_FAILED"
