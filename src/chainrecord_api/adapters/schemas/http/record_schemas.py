# src/chainrecord_api/adapters/schemas/http/record_schemas.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
HTTP Schemas: On-Chain Record

Purpose:
    Transport contracts for ``GET /v1/record``: the assembled retrieval result
    plus a ready-to-render view (headline, badge, grid, chart).

Layer: adapters/schemas/http
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from chainrecord_api.adapters.schemas.http.base import BaseHTTPSchema

HeadlineTier = Literal["strong", "moderate", "weak", "negative", "unavailable"]
BadgeTone = Literal["success", "danger", "warning"]
VerificationStatusHTTP = Literal["VERIFIED", "MISMATCH", "SOURCE_MISSING"]


class PeriodHTTP(BaseHTTPSchema):
    """One configured period."""

    label: str = Field(..., description="Period label, e.g. 'Q2 2025'.")
    available: bool = Field(..., description="False when the on-chain read failed.")
    raw_value: int | None = Field(default=None, description="Integer as stored on-chain.")
    value: str | None = Field(
        default=None,
        description="Scaled figure (raw / 10) with one decimal digit, e.g. '3.3'.",
    )
    unavailable_reason: str | None = Field(default=None, description="Why the read failed.")
    recorded_at: datetime | None = Field(
        default=None,
        description="Record timestamp (UTC); present on the current period only.",
    )


class VerificationHTTP(BaseHTTPSchema):
    """Document verification outcome."""

    status: VerificationStatusHTTP
    computed_digest: str | None = Field(
        default=None,
        description="SHA-256 of the fetched document; null when the source was unavailable.",
    )
    on_chain_commitment: str = Field(..., description="Commitment exactly as read on-chain.")
    source_url: str = Field(..., description="Reference document URL.")


class RecordMetadataHTTP(BaseHTTPSchema):
    """Descriptive metadata."""

    last_updated: datetime
    last_updated_display: str = Field(..., description="RFC 1123 date, e.g. 'Tue, 19 Aug 2025 12:00:00 GMT'.")
    contract_address: str
    explorer_url: str
    source_name: str
    interpretation: str


class HeadlineHTTP(BaseHTTPSchema):
    """Headline figure for the current period."""

    label: str
    value: str | None = None
    tier: HeadlineTier
    record_date: str | None = Field(default=None, description="RFC 1123 record date.")


class BadgeHTTP(BaseHTTPSchema):
    """Verification badge."""

    status: VerificationStatusHTTP
    tone: BadgeTone
    text: str


class ChartBarHTTP(BaseHTTPSchema):
    """One bar of the period chart."""

    label: str
    value: str
    ratio: float = Field(..., ge=-1.0, le=1.0, description="value / scale.")


class ChartHTTP(BaseHTTPSchema):
    """Bar chart over available periods."""

    scale: str = Field(..., description="Denominator: max(4, max |value|).")
    bars: list[ChartBarHTTP] = Field(default_factory=list)


class RecordViewHTTP(BaseHTTPSchema):
    """Presentation view derived from the retrieval result."""

    headline: HeadlineHTTP
    badge: BadgeHTTP
    grid: list[PeriodHTTP]
    chart: ChartHTTP


class OnChainRecordHTTP(BaseHTTPSchema):
    """Response payload for ``GET /v1/record``."""

    current_period: PeriodHTTP
    periods: list[PeriodHTTP] = Field(..., description="Available periods in configured order.")
    all_periods: list[PeriodHTTP] = Field(..., description="Every configured period.")
    verification: VerificationHTTP
    metadata: RecordMetadataHTTP
    view: RecordViewHTTP


__all__ = [
    "BadgeHTTP",
    "BadgeTone",
    "ChartBarHTTP",
    "ChartHTTP",
    "HeadlineHTTP",
    "HeadlineTier",
    "OnChainRecordHTTP",
    "PeriodHTTP",
    "RecordMetadataHTTP",
    "RecordViewHTTP",
    "VerificationHTTP",
]
