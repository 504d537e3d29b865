# tests/conftest.py
from __future__ import annotations

import hashlib
import json
from collections.abc import Callable, Generator, Mapping
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from chainrecord_api.config.record import PeriodSpec, RecordConfig
from chainrecord_api.config.settings import Settings, get_settings
from chainrecord_api.domain.entities.period_record import PeriodRecord
from chainrecord_api.domain.entities.retrieval_result import RecordMetadata, RetrievalResult
from chainrecord_api.domain.entities.verification import VerificationOutcome
from chainrecord_api.domain.enums.verification import VerificationStatus
from chainrecord_api.infrastructure.external_apis.ethereum.abi import function_selector

RPC_URL = "https://rpc.example.test/v1/secret-key"
DOCUMENT_URL = "https://docs.example.test/record.pdf"
CONTRACT_ADDRESS = "0x36ccdF11044f60F196e981970d592a7DE567ed7b"
DOCUMENT_BYTES = b"%PDF-1.7\nquarterly estimate\n%%EOF"
DOCUMENT_DIGEST = hashlib.sha256(DOCUMENT_BYTES).hexdigest()
# 2025-08-19T12:00:00Z
RECORD_TS = 1755604800

type RpcHandler = Callable[[httpx.Request], httpx.Response]


def uint_word(value: int) -> str:
    """ABI-encode a single uint256 return value."""
    return "0x" + format(value, "064x")


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(RPC_URL=RPC_URL, RPC_TIMEOUT_S=2.0, DOCUMENT_TIMEOUT_S=2.0)


@pytest.fixture
def record_config() -> RecordConfig:
    return RecordConfig(
        contract_address=CONTRACT_ADDRESS,
        document_url=DOCUMENT_URL,
        source_name="Test Statistics Office",
        interpretation="Increments of tenths",
        periods=(
            PeriodSpec(label="Q1 2025", accessor="gdp_q1_2025()"),
            PeriodSpec(label="Q2 2025", accessor="gdp_q2_2025()"),
        ),
    )


@pytest.fixture
def rpc_responder() -> Callable[..., RpcHandler]:
    """Return a factory for respx side effects emulating a JSON-RPC node.

    ``calls`` maps a canonical accessor signature to either a raw ``result``
    string or an ``{"error": {...}}`` mapping. Unknown accessors return ``0x``.
    """

    def _factory(
        *,
        code: str = "0x6080604052",
        calls: Mapping[str, str | Mapping[str, Any]] | None = None,
    ) -> RpcHandler:
        by_selector = {function_selector(sig): v for sig, v in (calls or {}).items()}

        def _handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            envelope: dict[str, Any] = {"jsonrpc": "2.0", "id": body["id"]}
            if body["method"] == "eth_getCode":
                envelope["result"] = code
            elif body["method"] == "eth_call":
                entry = by_selector.get(body["params"][0]["data"], "0x")
                if isinstance(entry, Mapping):
                    envelope.update(entry)
                else:
                    envelope["result"] = entry
            else:
                envelope["error"] = {"code": -32601, "message": "method not found"}
            return httpx.Response(200, json=envelope)

        return _handler

    return _factory


@pytest.fixture
def make_result() -> Callable[..., RetrievalResult]:
    """Return a factory for assembled retrieval results."""

    def _factory(
        *,
        raws: Mapping[str, int | None] | None = None,
        status: VerificationStatus = VerificationStatus.VERIFIED,
        commitment: str = "0x" + DOCUMENT_DIGEST,
    ) -> RetrievalResult:
        recorded_at = datetime.fromtimestamp(RECORD_TS, tz=UTC)
        raws = raws if raws is not None else {"Q1 2025": 5, "Q2 2025": 33}
        all_periods = [
            PeriodRecord.available(label, raw)
            if raw is not None
            else PeriodRecord.unavailable(label, "execution reverted")
            for label, raw in raws.items()
        ]
        available = [p for p in all_periods if p.is_available]
        current = available[-1] if available else all_periods[0]
        dated = PeriodRecord(label=current.label, reading=current.reading, recorded_at=recorded_at)
        all_periods = [dated if p.label == current.label else p for p in all_periods]
        digest = None if status is VerificationStatus.SOURCE_MISSING else DOCUMENT_DIGEST
        if status is VerificationStatus.MISMATCH:
            digest = "f" * 64
        return RetrievalResult(
            current_period=dated,
            periods=tuple(p for p in all_periods if p.is_available),
            all_periods=tuple(all_periods),
            on_chain_commitment=commitment,
            source_url=DOCUMENT_URL,
            verification=VerificationOutcome(status=status, computed_digest=digest),
            metadata=RecordMetadata(
                last_updated=recorded_at,
                contract_address=CONTRACT_ADDRESS,
                source_name="Test Statistics Office",
                interpretation="Increments of tenths",
            ),
        )

    return _factory


@pytest.fixture
def rpc_url() -> str:
    return RPC_URL


@pytest.fixture
def document_url() -> str:
    return DOCUMENT_URL


@pytest.fixture
def document_bytes() -> bytes:
    return DOCUMENT_BYTES


@pytest.fixture
def document_digest() -> str:
    return DOCUMENT_DIGEST


@pytest.fixture
def record_ts() -> int:
    return RECORD_TS


@pytest.fixture
def encode_uint() -> Callable[[int], str]:
    return uint_word
