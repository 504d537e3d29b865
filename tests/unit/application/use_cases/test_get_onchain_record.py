from __future__ import annotations

import asyncio
import hashlib
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from chainrecord_api.application.use_cases.record.get_onchain_record import GetOnChainRecord
from chainrecord_api.config.record import PeriodSpec, RecordConfig
from chainrecord_api.domain.enums.verification import VerificationStatus
from chainrecord_api.domain.exceptions.ledger import (
    LedgerCallError,
    LedgerError,
    LedgerReadError,
    LedgerUnavailable,
    NotDeployedError,
)
from chainrecord_api.domain.interfaces.gateways.document_gateway import DocumentGatewayProtocol
from chainrecord_api.domain.interfaces.gateways.ledger_gateway import LedgerGatewayProtocol

PAYLOAD = b"%PDF-1.7 estimate"
DIGEST = hashlib.sha256(PAYLOAD).hexdigest()
TS = 1755604800

CONFIG = RecordConfig(
    contract_address="0x36ccdF11044f60F196e981970d592a7DE567ed7b",
    document_url="https://docs.example.test/record.pdf",
    source_name="Test Statistics Office",
    interpretation="Increments of tenths",
    periods=(
        PeriodSpec(label="Q4 2024", accessor="gdp_q4_2024()"),
        PeriodSpec(label="Q1 2025", accessor="gdp_q1_2025()"),
        PeriodSpec(label="Q2 2025", accessor="gdp_q2_2025()"),
    ),
)


class FakeLedger(LedgerGatewayProtocol):
    def __init__(
        self,
        uints: dict[str, int | LedgerError],
        *,
        commitment: str | LedgerError = "0x" + DIGEST,
        deployed: bool = True,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._uints = uints
        self._commitment = commitment
        self._deployed = deployed
        self._delays = delays or {}
        self.reads: list[str] = []

    async def ensure_deployed(self) -> None:
        if not self._deployed:
            raise NotDeployedError("No contract bytecode found at address on this chain.")

    async def read_uint(self, accessor: str) -> int:
        self.reads.append(accessor)
        await asyncio.sleep(self._delays.get(accessor, 0))
        value = self._uints[accessor]
        if isinstance(value, LedgerError):
            raise value
        return value

    async def read_bytes32(self, accessor: str) -> str:
        self.reads.append(accessor)
        if isinstance(self._commitment, LedgerError):
            raise self._commitment
        return self._commitment


class FakeDocuments(DocumentGatewayProtocol):
    def __init__(self, payload: bytes | None = PAYLOAD) -> None:
        self._payload = payload
        self.urls: list[str] = []

    async def fetch(self, url: str) -> bytes | None:
        self.urls.append(url)
        return self._payload


def _uints(**overrides: int | LedgerError) -> dict[str, int | LedgerError]:
    values: dict[str, int | LedgerError] = {
        "gdp_q4_2024()": 24,
        "gdp_q1_2025()": 5,
        "gdp_q2_2025()": 33,
        "timestamp()": TS,
    }
    values.update(overrides)
    return values


@pytest.mark.asyncio
async def test_verified_scenario() -> None:
    docs = FakeDocuments()
    uc = GetOnChainRecord(FakeLedger(_uints()), docs, CONFIG)

    result = await uc.execute()

    assert result.current_period.label == "Q2 2025"
    assert result.current_period.scaled_value == Decimal("3.3")
    assert result.current_period.recorded_at == datetime(2025, 8, 19, 12, tzinfo=UTC)
    assert result.verification.status is VerificationStatus.VERIFIED
    assert result.verification.computed_digest == DIGEST
    assert result.on_chain_commitment == "0x" + DIGEST
    assert result.source_url == CONFIG.document_url
    assert result.metadata.contract_address == CONFIG.contract_address
    assert result.metadata.last_updated == datetime(2025, 8, 19, 12, tzinfo=UTC)
    assert docs.urls == [CONFIG.document_url]


@pytest.mark.asyncio
async def test_order_follows_configuration_not_completion() -> None:
    ledger = FakeLedger(_uints(), delays={"gdp_q4_2024()": 0.02, "gdp_q1_2025()": 0.01})
    result = await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()

    assert [p.label for p in result.periods] == ["Q4 2024", "Q1 2025", "Q2 2025"]
    assert [p.label for p in result.all_periods] == ["Q4 2024", "Q1 2025", "Q2 2025"]


@pytest.mark.asyncio
async def test_failed_period_degrades_without_aborting() -> None:
    ledger = FakeLedger(
        _uints(**{"gdp_q2_2025()": LedgerCallError("JSON-RPC error 3: execution reverted",
                                                   details={"rpc_message": "execution reverted"})})
    )
    result = await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()

    assert [p.label for p in result.periods] == ["Q4 2024", "Q1 2025"]
    missing = result.all_periods[2]
    assert not missing.is_available
    assert missing.reading.reason == "execution reverted"  # type: ignore[union-attr]
    assert result.current_period.label == "Q1 2025"
    assert result.current_period.recorded_at is not None
    assert result.verification.status is VerificationStatus.VERIFIED


@pytest.mark.asyncio
async def test_all_periods_failed_falls_back_to_first() -> None:
    err = LedgerUnavailable("Ledger node timed out.")
    ledger = FakeLedger(
        _uints(**{"gdp_q4_2024()": err, "gdp_q1_2025()": err, "gdp_q2_2025()": err})
    )
    result = await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()

    assert result.periods == ()
    assert result.current_period.label == "Q4 2024"
    assert not result.current_period.is_available
    assert result.current_period.recorded_at is not None


@pytest.mark.asyncio
async def test_document_unavailable_is_source_missing() -> None:
    result = await GetOnChainRecord(FakeLedger(_uints()), FakeDocuments(None), CONFIG).execute()

    assert result.verification.status is VerificationStatus.SOURCE_MISSING
    assert result.verification.computed_digest is None
    assert result.current_period.scaled_value == Decimal("3.3")
    assert result.on_chain_commitment == "0x" + DIGEST


@pytest.mark.asyncio
async def test_wrong_document_is_mismatch() -> None:
    uc = GetOnChainRecord(FakeLedger(_uints()), FakeDocuments(b"tampered"), CONFIG)
    result = await uc.execute()
    assert result.verification.status is VerificationStatus.MISMATCH
    assert result.verification.computed_digest == hashlib.sha256(b"tampered").hexdigest()


@pytest.mark.asyncio
async def test_not_deployed_is_fatal_before_any_read() -> None:
    ledger = FakeLedger(_uints(), deployed=False)
    docs = FakeDocuments()
    with pytest.raises(NotDeployedError):
        await GetOnChainRecord(ledger, docs, CONFIG).execute()
    assert ledger.reads == []
    assert docs.urls == []


@pytest.mark.asyncio
async def test_commitment_failure_is_fatal() -> None:
    ledger = FakeLedger(_uints(), commitment=LedgerCallError("x", details={"rpc_message": "reverted"}))
    with pytest.raises(LedgerReadError) as ei:
        await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()
    assert str(ei.value) == "On-chain read failed: reverted"
    assert isinstance(ei.value.__cause__, LedgerCallError)


@pytest.mark.asyncio
async def test_timestamp_failure_is_fatal() -> None:
    ledger = FakeLedger(_uints(**{"timestamp()": LedgerUnavailable("Ledger node unreachable.")}))
    with pytest.raises(LedgerReadError, match="Ledger node unreachable"):
        await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()


@pytest.mark.asyncio
async def test_unrepresentable_timestamp_is_fatal() -> None:
    ledger = FakeLedger(_uints(**{"timestamp()": 2**255}))
    with pytest.raises(LedgerReadError):
        await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()


@pytest.mark.asyncio
async def test_each_run_is_independent() -> None:
    uc = GetOnChainRecord(FakeLedger(_uints()), FakeDocuments(), CONFIG)
    first = await uc.execute()
    second = await uc.execute()
    assert first == second
    assert first is not second


class TrackingLedger(FakeLedger):
    """Ledger that records how many uint reads are in flight at once."""

    def __init__(self, uints: dict[str, int | LedgerError]) -> None:
        super().__init__(uints)
        self.in_flight = 0
        self.peak = 0

    async def read_uint(self, accessor: str) -> int:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(0.01)
            return await super().read_uint(accessor)
        finally:
            self.in_flight -= 1


class SignallingDocuments(FakeDocuments):
    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()

    async def fetch(self, url: str) -> bytes | None:
        self.started.set()
        return await super().fetch(url)


class CommitmentAfterFetchLedger(FakeLedger):
    """Commitment read resolves only once the document fetch has started."""

    def __init__(self, docs: SignallingDocuments) -> None:
        super().__init__(_uints())
        self._docs = docs

    async def read_bytes32(self, accessor: str) -> str:
        await asyncio.wait_for(self._docs.started.wait(), timeout=1.0)
        return await super().read_bytes32(accessor)


@pytest.mark.asyncio
async def test_period_reads_run_as_one_concurrent_group() -> None:
    ledger = TrackingLedger(_uints())
    await GetOnChainRecord(ledger, FakeDocuments(), CONFIG).execute()

    assert ledger.peak == len(CONFIG.periods)


@pytest.mark.asyncio
async def test_document_fetch_overlaps_commitment_read() -> None:
    docs = SignallingDocuments()
    result = await GetOnChainRecord(CommitmentAfterFetchLedger(docs), docs, CONFIG).execute()

    assert docs.urls == [CONFIG.document_url]
    assert result.verification.status is VerificationStatus.VERIFIED
