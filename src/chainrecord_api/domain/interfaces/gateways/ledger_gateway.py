# src/chainrecord_api/domain/interfaces/gateways/ledger_gateway.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Ledger Gateway Protocol.

Synopsis:
    Domain-level Protocol (PEP 544) over read-only access to one deployed
    record contract. The concrete JSON-RPC implementation lives in the
    adapters layer and must satisfy this contract.

Design:
    * Read-only; there is no write surface.
    * Accessors are addressed by canonical signature (``"timestamp()"``) so
      the use case stays free of ABI encoding concerns.
    * Failures are reported as ``LedgerError`` subclasses; transport types
      never leak through this interface.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from typing import Protocol


class LedgerGatewayProtocol(Protocol):
    """Read-only abstraction over a single record contract."""

    async def ensure_deployed(self) -> None:
        """Confirm that contract bytecode exists at the configured address.

        Raises:
            NotDeployedError: No code at the address on the connected network.
            LedgerUnavailable: The node is unreachable.
        """
        ...

    async def read_uint(self, accessor: str) -> int:
        """Invoke a zero-argument view returning ``uint256``.

        Args:
            accessor: Canonical function signature, e.g. ``"gdp_q2_2025()"``.

        Raises:
            LedgerError: On node, call, or decoding failure.
        """
        ...

    async def read_bytes32(self, accessor: str) -> str:
        """Invoke a zero-argument view returning ``bytes32`` as ``0x``-prefixed hex.

        Args:
            accessor: Canonical function signature, e.g. ``"gdp_pdf_hash()"``.

        Raises:
            LedgerError: On node, call, or decoding failure.
        """
        ...
