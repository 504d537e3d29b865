# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Verification Outcome Entity

Purpose:
    Result of comparing the reference document digest against the on-chain
    commitment.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass

from chainrecord_api.domain.enums.verification import VerificationStatus

from .base import BaseEntity


@dataclass(frozen=True, slots=True)
class VerificationOutcome(BaseEntity):
    """Tri-state verification outcome.

    Args:
        status: Terminal verification status.
        computed_digest: Lower-case hex digest of the fetched document, or
            ``None`` when the document could not be fetched.

    Raises:
        ValueError: If the digest presence does not match the status.
    """

    status: VerificationStatus
    computed_digest: str | None = None

    def __post_init__(self) -> None:
        if self.status is VerificationStatus.SOURCE_MISSING:
            if self.computed_digest is not None:
                raise ValueError("SOURCE_MISSING must not carry a computed digest")
        elif not self.computed_digest:
            raise ValueError(f"{self.status.value} requires a computed digest")

    @property
    def is_verified(self) -> bool:
        """Return True when the document matches the commitment."""
        return self.status is VerificationStatus.VERIFIED
