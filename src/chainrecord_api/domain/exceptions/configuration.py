# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Configuration Exceptions

Purpose:
    Raised when required runtime configuration is absent. Surfaced verbatim to
    callers; raised before any network I/O is attempted.

Layer: domain/exceptions
"""
from __future__ import annotations

from .base import DomainError


class ConfigurationError(DomainError):
    """A required configuration value (e.g. the ledger endpoint) is missing."""

    code = "CONFIGURATION_ERROR"
