# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Record Router.

Summary:
    Public endpoint returning the on-chain economic record, its verification
    status against the official source document, and a render-ready view.

Layer:
    adapters/routers
"""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request, Response, status
from fastapi.responses import JSONResponse

from chainrecord_api.adapters.presenters.record_presenter import RecordPresenter
from chainrecord_api.adapters.routers.base_router import BaseRouter
from chainrecord_api.adapters.schemas.http.envelopes import SuccessEnvelope
from chainrecord_api.adapters.schemas.http.record_schemas import OnChainRecordHTTP
from chainrecord_api.config.record import RecordConfig
from chainrecord_api.dependencies.record import (
    RecordRetriever,
    get_record_config,
    get_record_retriever,
)
from chainrecord_api.domain.exceptions.base import DomainError
from chainrecord_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

router = BaseRouter(version="v1", resource="record", tags=["Record"])


@router.get(
    "",
    response_model=SuccessEnvelope[OnChainRecordHTTP],
    status_code=status.HTTP_200_OK,
    responses=BaseRouter.std_error_responses(),
    summary="Read and verify the on-chain economic record",
)
async def get_record(
    request: Request,
    response: Response,
    retrieve: Annotated[RecordRetriever, Depends(get_record_retriever)],
    config: Annotated[RecordConfig, Depends(get_record_config)],
) -> SuccessEnvelope[OnChainRecordHTTP] | JSONResponse:
    """Return the record, or an error envelope on a fatal retrieval failure.

    Per-period read failures and an unavailable source document are not
    errors: they appear as unavailable periods and ``SOURCE_MISSING``.
    """
    trace_id = getattr(request.state, "request_id", None)
    presenter = RecordPresenter(explorer_url=config.explorer_url)

    try:
        result = await retrieve()
    except DomainError as exc:
        logger.warning(
            "record.retrieve.failed",
            extra={"code": exc.code, "error": exc.message},
        )
        return BaseRouter.send_error(presenter.present_failure(exc, trace_id=trace_id))

    presented = presenter.present_record(result, trace_id=trace_id)
    presenter.apply_headers(presented, response)
    body = presented.body
    if body is None:  # pragma: no cover
        raise RuntimeError("RecordPresenter returned no body for a successful response")
    return body
