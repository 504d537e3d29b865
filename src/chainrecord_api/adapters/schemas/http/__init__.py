# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. Re-exports the canonical
    envelopes and the record resource schemas used by routers and presenters.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from chainrecord_api.adapters.schemas.http.envelopes import (
    ErrorEnvelope,
    ErrorObject,
    SuccessEnvelope,
)
from chainrecord_api.adapters.schemas.http.record_schemas import (
    BadgeHTTP,
    ChartBarHTTP,
    ChartHTTP,
    HeadlineHTTP,
    OnChainRecordHTTP,
    PeriodHTTP,
    RecordMetadataHTTP,
    RecordViewHTTP,
    VerificationHTTP,
)

__all__ = [
    "BadgeHTTP",
    "ChartBarHTTP",
    "ChartHTTP",
    "ErrorEnvelope",
    "ErrorObject",
    "HeadlineHTTP",
    "OnChainRecordHTTP",
    "PeriodHTTP",
    "RecordMetadataHTTP",
    "RecordViewHTTP",
    "SuccessEnvelope",
    "VerificationHTTP",
]
