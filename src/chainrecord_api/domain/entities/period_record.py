# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Period Record Entity

Purpose:
    One reporting period's on-chain figure. The reading is a tagged variant:
    either an exact integer as reported on-chain, or an explicit "unavailable"
    marker carrying the reason. A genuine zero reading and a failed read are
    therefore never confused.

Layer: domain/entities
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

from .base import BaseEntity


def scale_tenths(raw: int) -> Decimal:
    """Return ``raw / 10`` as an exact Decimal with one fractional digit.

    Built from a string so the result does not depend on the decimal context
    precision (uint256 values can exceed it).

    Examples:
        >>> scale_tenths(33)
        Decimal('3.3')
        >>> scale_tenths(30)
        Decimal('3.0')
    """
    sign = "-" if raw < 0 else ""
    whole, tenth = divmod(abs(raw), 10)
    return Decimal(f"{sign}{whole}.{tenth}")


@dataclass(frozen=True, slots=True)
class AvailableReading(BaseEntity):
    """A successful on-chain read.

    Args:
        raw_value: Integer exactly as reported by the contract.
    """

    raw_value: int

    @property
    def scaled_value(self) -> Decimal:
        """Return the figure in display units (tenths)."""
        return scale_tenths(self.raw_value)


@dataclass(frozen=True, slots=True)
class UnavailableReading(BaseEntity):
    """A failed or empty on-chain read.

    Args:
        reason: Best-available description of why the read failed.
    """

    reason: str


type PeriodReading = AvailableReading | UnavailableReading


@dataclass(frozen=True, slots=True)
class PeriodRecord(BaseEntity):
    """One reporting period's figure.

    Args:
        label: Period identifier, unique within a result set.
        reading: Available or unavailable reading.
        recorded_at: Record timestamp (UTC); attached only to the current period.
    """

    label: str
    reading: PeriodReading
    recorded_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("label must be non-empty")
        if self.recorded_at is not None and self.recorded_at.tzinfo is None:
            object.__setattr__(self, "recorded_at", self.recorded_at.replace(tzinfo=UTC))

    @property
    def is_available(self) -> bool:
        """Return True when the on-chain read succeeded."""
        return isinstance(self.reading, AvailableReading)

    @property
    def raw_value(self) -> int | None:
        """Return the raw integer, or ``None`` when unavailable."""
        if isinstance(self.reading, AvailableReading):
            return self.reading.raw_value
        return None

    @property
    def scaled_value(self) -> Decimal | None:
        """Return ``raw_value / 10``, or ``None`` when unavailable."""
        if isinstance(self.reading, AvailableReading):
            return self.reading.scaled_value
        return None

    @classmethod
    def available(cls, label: str, raw_value: int) -> PeriodRecord:
        """Build a record for a successful read."""
        return cls(label=label, reading=AvailableReading(raw_value=raw_value))

    @classmethod
    def unavailable(cls, label: str, reason: str) -> PeriodRecord:
        """Build a record for a failed read."""
        return cls(label=label, reading=UnavailableReading(reason=reason))
