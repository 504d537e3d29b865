# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Shared presenter helpers.

Presenters turn domain results into pydantic envelopes plus the headers a
router should set. They make no business decisions.

Headers:
    * ``X-Request-ID`` echoes the correlation id when one is known.
    * ``ETag`` is a quoted SHA-256 of the canonical JSON body (success only).

Layer:
    adapters/presenters
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from fastapi import Response

from chainrecord_api.adapters.schemas.http.envelopes import (
    ErrorEnvelope,
    ErrorObject,
    SuccessEnvelope,
)


def compute_quoted_etag(payload: Mapping[str, Any]) -> str:
    """Return ``'"<sha256>"'`` over the key-sorted compact JSON of ``payload``."""
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return '"' + hashlib.sha256(canonical.encode("utf-8")).hexdigest() + '"'


@dataclass(slots=True)
class PresentResult[T]:
    """Envelope body with the headers and status a router should apply.

    Attributes:
        body: Pydantic envelope instance.
        headers: Headers to copy onto the response.
        status_code: HTTP status override, if any.
    """

    body: T | None
    headers: dict[str, str] = field(default_factory=dict)
    status_code: int | None = None


def _correlation_headers(trace_id: str | None) -> dict[str, str]:
    return {"X-Request-ID": trace_id} if trace_id else {}


class BasePresenter:
    """Common envelope and header shaping for presenters."""

    def present_success(
        self,
        *,
        data: Any,
        trace_id: str | None = None,
    ) -> PresentResult[SuccessEnvelope[Any]]:
        """Wrap ``data`` in a SuccessEnvelope tagged with an ETag."""
        body = SuccessEnvelope[Any](data=data)
        headers = _correlation_headers(trace_id)
        headers["ETag"] = compute_quoted_etag(body.model_dump_http())
        return PresentResult(body=body, headers=headers)

    def present_error(
        self,
        *,
        code: str,
        http_status: int,
        message: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> PresentResult[ErrorEnvelope]:
        """Build an ErrorEnvelope; errors carry no ETag."""
        error = ErrorObject(
            code=code,
            http_status=http_status,
            message=message,
            details=details or {},
            trace_id=trace_id,
        )
        return PresentResult(
            body=ErrorEnvelope(error=error),
            headers=_correlation_headers(trace_id),
            status_code=http_status,
        )

    @staticmethod
    def apply_headers(result: PresentResult[Any], response: Response) -> None:
        """Copy headers and the optional status override onto ``response``."""
        for name, value in result.headers.items():
            response.headers[name] = value
        if result.status_code is not None:
            response.status_code = result.status_code
