"""Domain exception exports."""

from __future__ import annotations

from .base import DomainError
from .configuration import ConfigurationError
from .ledger import (
    LedgerCallError,
    LedgerError,
    LedgerMappingError,
    LedgerReadError,
    LedgerUnavailable,
    NotDeployedError,
)

__all__ = [
    "ConfigurationError",
    "DomainError",
    "LedgerCallError",
    "LedgerError",
    "LedgerMappingError",
    "LedgerReadError",
    "LedgerUnavailable",
    "NotDeployedError",
]
