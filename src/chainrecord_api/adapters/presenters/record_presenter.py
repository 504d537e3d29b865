# src/chainrecord_api/adapters/presenters/record_presenter.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Presenter: RetrievalResult → HTTP SuccessEnvelope.

Synopsis:
    Renders the immutable retrieval result into the ``/v1/record`` contract
    and derives the display view:

    * Headline tier ladder on the current scaled value:
      ``> 3`` strong, ``> 1`` moderate, ``> 0`` weak, otherwise negative.
    * Verification badge: VERIFIED → success, MISMATCH → danger,
      SOURCE_MISSING → warning.
    * Bar chart scaled to ``max(4, max |value|)`` over available periods.
    * Record dates in RFC 1123 form (``Tue, 19 Aug 2025 12:00:00 GMT``).

    Fatal retrieval failures are rendered as an error envelope carrying the
    raw error message and a configuration hint; partial data is never shown.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal
from email.utils import format_datetime
from typing import Final

from chainrecord_api.adapters.presenters.base_presenter import BasePresenter, PresentResult
from chainrecord_api.adapters.schemas.http.envelopes import ErrorEnvelope, SuccessEnvelope
from chainrecord_api.adapters.schemas.http.record_schemas import (
    BadgeHTTP,
    BadgeTone,
    ChartBarHTTP,
    ChartHTTP,
    HeadlineHTTP,
    HeadlineTier,
    OnChainRecordHTTP,
    PeriodHTTP,
    RecordMetadataHTTP,
    RecordViewHTTP,
    VerificationHTTP,
)
from chainrecord_api.domain.entities.period_record import PeriodRecord, UnavailableReading
from chainrecord_api.domain.entities.retrieval_result import RetrievalResult
from chainrecord_api.domain.enums.verification import VerificationStatus
from chainrecord_api.domain.exceptions.base import DomainError
from chainrecord_api.domain.exceptions.configuration import ConfigurationError
from chainrecord_api.domain.exceptions.ledger import LedgerError

FAILURE_HINT: Final[str] = (
    "Check your RPC_URL and that the address is a deployed contract on Ethereum mainnet."
)
MIN_CHART_SCALE: Final[Decimal] = Decimal("4.0")

_BADGES: Final[dict[VerificationStatus, tuple[BadgeTone, str]]] = {
    VerificationStatus.VERIFIED: ("success", "Verified against source document"),
    VerificationStatus.MISMATCH: ("danger", "Source document does not match on-chain hash"),
    VerificationStatus.SOURCE_MISSING: ("warning", "Source document unavailable"),
}


def headline_tier(value: Decimal | None) -> HeadlineTier:
    """Classify a scaled figure on the headline ladder.

    Examples:
        >>> headline_tier(Decimal("3.3"))
        'strong'
        >>> headline_tier(Decimal("0.0"))
        'negative'
    """
    if value is None:
        return "unavailable"
    if value > 3:
        return "strong"
    if value > 1:
        return "moderate"
    if value > 0:
        return "weak"
    return "negative"


def badge_for(status: VerificationStatus) -> BadgeHTTP:
    """Return the badge for a verification status."""
    tone, text = _BADGES[status]
    return BadgeHTTP(status=status.value, tone=tone, text=text)


def chart_scale(values: Iterable[Decimal]) -> Decimal:
    """Return ``max(4, max |v|)``; an empty input yields the minimum scale."""
    return max([MIN_CHART_SCALE, *(abs(v) for v in values)])


def build_chart(periods: Iterable[PeriodRecord]) -> ChartHTTP:
    """Build one bar per available period."""
    points = [(p.label, p.scaled_value) for p in periods if p.scaled_value is not None]
    scale = chart_scale(v for _, v in points)
    bars = [
        ChartBarHTTP(label=label, value=str(value), ratio=float(value / scale))
        for label, value in points
    ]
    return ChartHTTP(scale=str(scale), bars=bars)


def format_record_date(value: datetime) -> str:
    """Return ``value`` in RFC 1123 form, e.g. ``Tue, 19 Aug 2025 12:00:00 GMT``."""
    return format_datetime(value.astimezone(UTC), usegmt=True)


def period_to_http(record: PeriodRecord) -> PeriodHTTP:
    """Render one period record."""
    scaled = record.scaled_value
    return PeriodHTTP(
        label=record.label,
        available=record.is_available,
        raw_value=record.raw_value,
        value=str(scaled) if scaled is not None else None,
        unavailable_reason=(
            record.reading.reason if isinstance(record.reading, UnavailableReading) else None
        ),
        recorded_at=record.recorded_at,
    )


def http_status_for(exc: DomainError) -> int:
    """Map a fatal retrieval failure to an HTTP status."""
    if isinstance(exc, ConfigurationError):
        return 500
    if isinstance(exc, LedgerError):
        return 502
    return 500


class RecordPresenter(BasePresenter):
    """Presenter for ``/v1/record`` responses.

    Args:
        explorer_url: Block-explorer base URL for address links.
    """

    def __init__(self, explorer_url: str = "https://etherscan.io/address/") -> None:
        self._explorer_url = explorer_url.rstrip("/")

    def present_record(
        self,
        result: RetrievalResult,
        *,
        trace_id: str | None = None,
    ) -> PresentResult[SuccessEnvelope[OnChainRecordHTTP]]:
        """Build a SuccessEnvelope[OnChainRecordHTTP] with headers."""
        return self.present_success(data=self.to_http(result), trace_id=trace_id)

    def present_failure(
        self,
        exc: DomainError,
        *,
        trace_id: str | None = None,
    ) -> PresentResult[ErrorEnvelope]:
        """Render a fatal failure with its raw message and a configuration hint."""
        details = {k: v for k, v in exc.details.items() if isinstance(v, str | int | float | bool)}
        details["hint"] = FAILURE_HINT
        return self.present_error(
            code=exc.code,
            http_status=http_status_for(exc),
            message=exc.message or "Failed to load contract data.",
            trace_id=trace_id,
            details=details,
        )

    def to_http(self, result: RetrievalResult) -> OnChainRecordHTTP:
        """Render the retrieval result and its display view."""
        current = result.current_period
        grid = [period_to_http(p) for p in result.all_periods]
        record_date = (
            format_record_date(current.recorded_at) if current.recorded_at is not None else None
        )
        headline = HeadlineHTTP(
            label=current.label,
            value=str(current.scaled_value) if current.scaled_value is not None else None,
            tier=headline_tier(current.scaled_value),
            record_date=record_date,
        )
        meta = result.metadata
        return OnChainRecordHTTP(
            current_period=period_to_http(current),
            periods=[period_to_http(p) for p in result.periods],
            all_periods=grid,
            verification=VerificationHTTP(
                status=result.verification.status.value,
                computed_digest=result.verification.computed_digest,
                on_chain_commitment=result.on_chain_commitment,
                source_url=result.source_url,
            ),
            metadata=RecordMetadataHTTP(
                last_updated=meta.last_updated,
                last_updated_display=format_record_date(meta.last_updated),
                contract_address=meta.contract_address,
                explorer_url=f"{self._explorer_url}/{meta.contract_address}",
                source_name=meta.source_name,
                interpretation=meta.interpretation,
            ),
            view=RecordViewHTTP(
                headline=headline,
                badge=badge_for(result.verification.status),
                grid=grid,
                chart=build_chart(result.periods),
            ),
        )
