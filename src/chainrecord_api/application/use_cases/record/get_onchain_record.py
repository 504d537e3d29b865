# src/chainrecord_api/application/use_cases/record/get_onchain_record.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""
Use Case: Get On-Chain Record

Purpose:
    Orchestrate one read-and-verify run:

        1. Confirm the record contract is deployed (fatal if not).
        2. Read every configured period concurrently; a failed read degrades
           to an "unavailable" period instead of failing the run.
        3. Read the document commitment and the record timestamp while the
           reference document downloads (metadata failures are fatal).
        4. Select the current period, attach the record date, verify the
           document, and assemble an immutable :class:`RetrievalResult`.

Layer: application/use_cases
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import cast

from chainrecord_api.config.record import PeriodSpec, RecordConfig
from chainrecord_api.domain.entities.period_record import PeriodRecord
from chainrecord_api.domain.entities.retrieval_result import RecordMetadata, RetrievalResult
from chainrecord_api.domain.exceptions.ledger import LedgerError, LedgerReadError
from chainrecord_api.domain.interfaces.gateways.document_gateway import DocumentGatewayProtocol
from chainrecord_api.domain.interfaces.gateways.ledger_gateway import LedgerGatewayProtocol
from chainrecord_api.domain.services.integrity_verifier import verify_document
from chainrecord_api.domain.services.period_selection import (
    attach_record_date,
    select_current_period,
    timestamp_to_datetime,
)
from chainrecord_api.infrastructure.logging.logger import get_json_logger
from chainrecord_api.infrastructure.observability.metrics_record import (
    get_verification_outcomes_total,
)

logger = get_json_logger(__name__)


class GetOnChainRecord:
    """Use case to read the on-chain record and verify its reference document.

    Args:
        ledger: Ledger gateway bound to the record contract.
        documents: Reference document gateway.
        config: Static description of the record and its document.

    Raises:
        NotDeployedError: If no contract code exists at the configured address.
        LedgerReadError: If the commitment or timestamp cannot be read.
        LedgerUnavailable: If the node is unreachable during the deployment check.
    """

    def __init__(
        self,
        ledger: LedgerGatewayProtocol,
        documents: DocumentGatewayProtocol,
        config: RecordConfig,
    ) -> None:
        self._ledger = ledger
        self._documents = documents
        self._config = config

    async def execute(self) -> RetrievalResult:
        """Run one retrieval.

        Returns:
            RetrievalResult: Periods, commitment, verification and metadata.
        """
        cfg = self._config
        logger.info(
            "record.retrieve.start",
            extra={"contract_address": cfg.contract_address, "periods": len(cfg.periods)},
        )

        await self._ledger.ensure_deployed()

        all_periods: tuple[PeriodRecord, ...] = tuple(
            await asyncio.gather(*(self._read_period(spec) for spec in cfg.periods))
        )

        # The group is always joined in full; the first failure is raised after.
        gathered = await asyncio.gather(
            self._read_metadata(self._ledger.read_bytes32, cfg.commitment_accessor),
            self._read_metadata(self._ledger.read_uint, cfg.timestamp_accessor),
            self._documents.fetch(cfg.document_url),
            return_exceptions=True,
        )
        for outcome in gathered:
            if isinstance(outcome, BaseException):
                raise outcome
        commitment, raw_timestamp, payload = cast(tuple[str, int, bytes | None], tuple(gathered))

        try:
            recorded_at = timestamp_to_datetime(raw_timestamp)
        except ValueError as exc:
            raise LedgerReadError(
                f"On-chain read failed: {exc}",
                details={"accessor": cfg.timestamp_accessor, "value": str(raw_timestamp)},
            ) from exc

        current = select_current_period(all_periods)
        all_periods, current = attach_record_date(all_periods, current, recorded_at)
        periods = tuple(p for p in all_periods if p.is_available)

        verification = verify_document(payload, commitment)
        with suppress(Exception):
            get_verification_outcomes_total().labels(status=verification.status.value).inc()

        logger.info(
            "record.retrieve.success",
            extra={
                "current_period": current.label,
                "available": len(periods),
                "unavailable": len(all_periods) - len(periods),
                "verification": verification.status.value,
            },
        )

        return RetrievalResult(
            current_period=current,
            periods=periods,
            all_periods=all_periods,
            on_chain_commitment=commitment,
            source_url=cfg.document_url,
            verification=verification,
            metadata=RecordMetadata(
                last_updated=recorded_at,
                contract_address=cfg.contract_address,
                source_name=cfg.source_name,
                interpretation=cfg.interpretation,
            ),
        )

    async def _read_period(self, spec: PeriodSpec) -> PeriodRecord:
        """Read one period; ledger failures become an unavailable record."""
        try:
            raw = await self._ledger.read_uint(spec.accessor)
        except LedgerError as exc:
            logger.warning(
                "record.ledger.period_unavailable",
                extra={"period": spec.label, "accessor": spec.accessor, "reason": exc.reason},
            )
            return PeriodRecord.unavailable(spec.label, exc.reason)
        return PeriodRecord.available(spec.label, raw)

    @staticmethod
    async def _read_metadata[T](read: Callable[[str], Awaitable[T]], accessor: str) -> T:
        """Run a required metadata read; any ledger failure is fatal."""
        try:
            return await read(accessor)
        except LedgerError as exc:
            raise LedgerReadError(
                f"On-chain read failed: {exc.reason}",
                details={"accessor": accessor, "cause": exc.code},
            ) from exc
