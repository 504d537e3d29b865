"""Domain gateway protocols."""

from __future__ import annotations

from .document_gateway import DocumentGatewayProtocol
from .ledger_gateway import LedgerGatewayProtocol

__all__ = ["DocumentGatewayProtocol", "LedgerGatewayProtocol"]
