# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Document Gateway Protocol.

Synopsis:
    Retrieves the reference document as raw bytes. Unavailability is a data
    state (``None``), not an exception.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from typing import Protocol


class DocumentGatewayProtocol(Protocol):
    """Single-attempt binary document retrieval."""

    async def fetch(self, url: str) -> bytes | None:
        """Return the document body, or ``None`` when it cannot be retrieved.

        Implementations must never raise for network failures, timeouts, or
        non-200 responses.
        """
        ...
