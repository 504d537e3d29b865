# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Period selection and record-date helpers.

Purpose:
    Pick the "current" period from the configured sequence and convert the
    ledger timestamp into an aware UTC datetime.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime

from chainrecord_api.domain.entities.period_record import PeriodRecord


def select_current_period(records: Sequence[PeriodRecord]) -> PeriodRecord:
    """Return the last available record in configured order.

    Falls back to the first configured record, even when it is unavailable,
    if no record is available.

    Raises:
        ValueError: If ``records`` is empty.
    """
    if not records:
        raise ValueError("select_current_period() requires at least one record.")
    for record in reversed(records):
        if record.is_available:
            return record
    return records[0]


def timestamp_to_datetime(seconds: int) -> datetime:
    """Convert Unix seconds to an aware UTC datetime.

    Raises:
        ValueError: If the value is outside the platform's datetime range.
    """
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"timestamp out of range: {seconds}") from exc


def attach_record_date(
    records: Sequence[PeriodRecord],
    current: PeriodRecord,
    recorded_at: datetime,
) -> tuple[tuple[PeriodRecord, ...], PeriodRecord]:
    """Attach ``recorded_at`` to the current record only.

    Returns:
        The records with the current one replaced, and the dated current record.
    """
    dated = replace(current, recorded_at=recorded_at)
    updated = tuple(dated if r.label == current.label else r for r in records)
    return updated, dated


__all__ = ["attach_record_date", "select_current_period", "timestamp_to_datetime"]
