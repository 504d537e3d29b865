# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Base Router (Adapters Layer)

Purpose:
    Provide a canonical APIRouter wrapper and shared utilities for HTTP endpoints:
      - Versioned routing with stable prefixes (e.g., "/v1/record").
      - Standard error response mapping using ErrorEnvelope.
      - Helpers to emit presenter results with headers (ETag, X-Request-ID).

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from chainrecord_api.adapters.presenters.base_presenter import PresentResult
from chainrecord_api.adapters.schemas.http.envelopes import ErrorEnvelope
from chainrecord_api.infrastructure.logging.logger import get_json_logger

_LOGGER = get_json_logger(__name__)

# Tag type accepted by FastAPI for APIRouter.tags
TagType = str | Enum


class BaseRouter(APIRouter):
    """Canonical router wrapper for versioned HTTP endpoints.

    Args:
        version: API version segment (e.g., "v1").
        resource: Resource segment (e.g., "record").
        prefix: Optional explicit prefix (overrides version/resource).
        tags: Default tags applied to all routes mounted on this router.
        **kwargs: Additional APIRouter kwargs.
    """

    def __init__(
        self,
        *,
        version: str,
        resource: str,
        prefix: str | None = None,
        tags: Sequence[TagType] | None = None,
        **kwargs: Any,
    ) -> None:
        computed_prefix = prefix or f"/{version}/{resource}"
        super().__init__(
            prefix=computed_prefix,
            tags=list(tags) if tags is not None else None,
            **kwargs,
        )
        _LOGGER.debug(
            "router_initialized",
            extra={"prefix": computed_prefix, "tags": [str(t) for t in tags or []]},
        )

    @staticmethod
    def send_error(result: PresentResult[ErrorEnvelope]) -> JSONResponse:
        """Render an error presenter result as a JSON response.

        A concrete ``JSONResponse`` is returned so the route's success
        ``response_model`` is not applied to the error body.
        """
        body = result.body
        content = body.model_dump_http() if body is not None else {}
        return JSONResponse(
            status_code=result.status_code or 500,
            content=content,
            headers=dict(result.headers),
        )

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        """Return the canonical error response mapping for endpoints.

        Use in routes via ``responses=BaseRouter.std_error_responses()``.
        """
        return {
            500: {"model": ErrorEnvelope, "description": "Configuration error or internal failure."},
            502: {"model": ErrorEnvelope, "description": "Ledger node or contract read failed."},
        }
