# src/chainrecord_api/domain/services/integrity_verifier.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Document integrity verifier.

Purpose:
    Compare the SHA-256 digest of a fetched reference document against the
    commitment stored on-chain and classify the result:

        * payload absent            -> SOURCE_MISSING (no digest)
        * digest == commitment      -> VERIFIED
        * digest != commitment      -> MISMATCH

Design:
    * Pure domain logic: no logging, no HTTP.
    * The commitment is normalized (whitespace, optional ``0x`` prefix,
      case) before an exact string comparison; there is no partial matching.

Layer:
    domain/services
"""

from __future__ import annotations

import hashlib
from typing import Final

from chainrecord_api.domain.entities.verification import VerificationOutcome
from chainrecord_api.domain.enums.verification import VerificationStatus

DIGEST_ALGORITHM: Final[str] = "sha256"


def normalize_commitment(value: str) -> str:
    """Return the commitment as bare lower-case hex.

    Examples:
        >>> normalize_commitment("0xABCD")
        'abcd'
    """
    text = value.strip()
    if text[:2] in ("0x", "0X"):
        text = text[2:]
    return text.lower()


def compute_digest(payload: bytes) -> str:
    """Return the lower-case hex digest of ``payload``."""
    return hashlib.new(DIGEST_ALGORITHM, payload).hexdigest()


def verify_document(payload: bytes | None, commitment: str) -> VerificationOutcome:
    """Classify a document payload against an on-chain commitment.

    Args:
        payload: Raw document bytes, or ``None`` when the fetch failed.
        commitment: Commitment hex string as read from the ledger.

    Returns:
        The verification outcome. ``computed_digest`` is ``None`` only for
        ``SOURCE_MISSING``.
    """
    if payload is None:
        return VerificationOutcome(status=VerificationStatus.SOURCE_MISSING)

    digest = compute_digest(payload)
    status = (
        VerificationStatus.VERIFIED
        if digest == normalize_commitment(commitment)
        else VerificationStatus.MISMATCH
    )
    return VerificationOutcome(status=status, computed_digest=digest)


__all__ = ["DIGEST_ALGORITHM", "compute_digest", "normalize_commitment", "verify_document"]
