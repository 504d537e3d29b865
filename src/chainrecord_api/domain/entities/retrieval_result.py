# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Retrieval Result Entity

Purpose:
    Immutable aggregate returned by the record retrieval use case and consumed
    read-only by presenters for one render.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from .base import BaseEntity
from .period_record import PeriodRecord
from .verification import VerificationOutcome


@dataclass(frozen=True, slots=True)
class RecordMetadata(BaseEntity):
    """Descriptive metadata for a retrieval.

    Args:
        last_updated: On-chain record timestamp (UTC).
        contract_address: Address the figures were read from.
        source_name: Publisher of the reference document.
        interpretation: Rule for reading the raw integers.
    """

    last_updated: datetime
    contract_address: str
    source_name: str
    interpretation: str

    def __post_init__(self) -> None:
        if self.last_updated.tzinfo is None:
            object.__setattr__(self, "last_updated", self.last_updated.replace(tzinfo=UTC))


@dataclass(frozen=True, slots=True)
class RetrievalResult(BaseEntity):
    """Aggregate result of one read-and-verify run.

    Args:
        current_period: Most recent available period, or the first configured
            period when none are available.
        periods: Available periods in configured order.
        all_periods: Every configured period (available or not) in configured order.
        on_chain_commitment: Commitment hex string exactly as read from the ledger.
        source_url: Reference document URL.
        verification: Document verification outcome.
        metadata: Timestamp, contract address and source labels.
    """

    current_period: PeriodRecord
    periods: tuple[PeriodRecord, ...]
    all_periods: tuple[PeriodRecord, ...]
    on_chain_commitment: str
    source_url: str
    verification: VerificationOutcome
    metadata: RecordMetadata

    def __post_init__(self) -> None:
        if any(not p.is_available for p in self.periods):
            raise ValueError("periods must contain available records only")
        labels = [p.label for p in self.all_periods]
        if len(set(labels)) != len(labels):
            raise ValueError("period labels must be unique")
