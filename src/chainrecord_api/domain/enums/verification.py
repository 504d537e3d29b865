# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Verification enums.

Layer:
    domain/enums
"""

from __future__ import annotations

from enum import Enum


class VerificationStatus(str, Enum):
    """Terminal outcome of comparing the source document against its commitment."""

    VERIFIED = "VERIFIED"
    MISMATCH = "MISMATCH"
    SOURCE_MISSING = "SOURCE_MISSING"


__all__ = ["VerificationStatus"]
