# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Adapter Gateway: record contract → domain reads.

Purpose:
    Implement the domain-level ledger gateway on top of the JSON-RPC client:

    * Deployment check via ``eth_getCode``.
    * Zero-argument ``uint256`` / ``bytes32`` view calls via ``eth_call``.

Layer:
    adapters
"""

from __future__ import annotations

import logging

from chainrecord_api.domain.exceptions.ledger import NotDeployedError
from chainrecord_api.domain.interfaces.gateways.ledger_gateway import LedgerGatewayProtocol
from chainrecord_api.infrastructure.external_apis.ethereum.abi import (
    decode_bytes32,
    decode_uint256,
    encode_call,
)
from chainrecord_api.infrastructure.external_apis.ethereum.client import EthereumRpcClient

logger = logging.getLogger(__name__)

_EMPTY_CODE = frozenset({"", "0x", "0X"})


class ContractLedgerGateway(LedgerGatewayProtocol):
    """JSON-RPC backed gateway for one deployed record contract."""

    def __init__(self, client: EthereumRpcClient, contract_address: str) -> None:
        """Initialize the gateway.

        Args:
            client: JSON-RPC transport client.
            contract_address: Address of the record contract.
        """
        self._client = client
        self._address = contract_address

    @property
    def contract_address(self) -> str:
        """Return the contract address this gateway reads from."""
        return self._address

    async def ensure_deployed(self) -> None:
        """Raise ``NotDeployedError`` when no bytecode exists at the address."""
        code = await self._client.get_code(self._address)
        if code.strip() in _EMPTY_CODE:
            logger.warning(
                "ledger.ensure_deployed.no_code",
                extra={"contract_address": self._address},
            )
            raise NotDeployedError(
                "No contract bytecode found at address on this chain. "
                "Verify CONTRACT_ADDRESS and RPC_URL (Ethereum mainnet).",
                details={"contract_address": self._address},
            )

    async def read_uint(self, accessor: str) -> int:
        """Call a zero-argument ``uint256`` view."""
        raw = await self._client.call(self._address, encode_call(accessor))
        return decode_uint256(raw, accessor=accessor)

    async def read_bytes32(self, accessor: str) -> str:
        """Call a zero-argument ``bytes32`` view."""
        raw = await self._client.call(self._address, encode_call(accessor))
        return decode_bytes32(raw, accessor=accessor)
