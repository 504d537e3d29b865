from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from chainrecord_api.adapters.presenters.record_presenter import (
    FAILURE_HINT,
    RecordPresenter,
    badge_for,
    build_chart,
    chart_scale,
    format_record_date,
    headline_tier,
)
from chainrecord_api.domain.entities.period_record import PeriodRecord
from chainrecord_api.domain.entities.retrieval_result import RetrievalResult
from chainrecord_api.domain.enums.verification import VerificationStatus
from chainrecord_api.domain.exceptions.configuration import ConfigurationError
from chainrecord_api.domain.exceptions.ledger import LedgerReadError, NotDeployedError


@pytest.mark.parametrize(
    ("value", "tier"),
    [
        ("3.3", "strong"),
        ("3.0", "moderate"),
        ("1.1", "moderate"),
        ("1.0", "weak"),
        ("0.1", "weak"),
        ("0.0", "negative"),
        ("-0.5", "negative"),
    ],
)
def test_headline_tier_ladder(value: str, tier: str) -> None:
    assert headline_tier(Decimal(value)) == tier


def test_headline_tier_unavailable() -> None:
    assert headline_tier(None) == "unavailable"


@pytest.mark.parametrize(
    ("status", "tone"),
    [
        (VerificationStatus.VERIFIED, "success"),
        (VerificationStatus.MISMATCH, "danger"),
        (VerificationStatus.SOURCE_MISSING, "warning"),
    ],
)
def test_badge_tones(status: VerificationStatus, tone: str) -> None:
    badge = badge_for(status)
    assert badge.status == status.value
    assert badge.tone == tone


def test_chart_scale_has_minimum_of_four() -> None:
    assert chart_scale([Decimal("0.1"), Decimal("0.2")]) == Decimal("4.0")
    assert chart_scale([]) == Decimal("4.0")
    assert chart_scale([Decimal("1.0"), Decimal("-6.5")]) == Decimal("6.5")


def test_chart_bars_skip_unavailable_periods() -> None:
    chart = build_chart(
        [
            PeriodRecord.available("Q1", 20),
            PeriodRecord.unavailable("Q2", "reverted"),
            PeriodRecord.available("Q3", 80),
        ]
    )
    assert chart.scale == "8.0"
    assert [(b.label, b.value, b.ratio) for b in chart.bars] == [("Q1", "2.0", 0.25), ("Q3", "8.0", 1.0)]


def test_record_date_is_rfc1123_gmt() -> None:
    when = datetime(2025, 8, 19, 12, 0, tzinfo=UTC)
    assert format_record_date(when) == "Tue, 19 Aug 2025 12:00:00 GMT"


def test_present_record(make_result: Callable[..., RetrievalResult]) -> None:
    result = make_result()
    presented = RecordPresenter().present_record(result, trace_id="req-1")

    assert presented.headers["X-Request-ID"] == "req-1"
    assert presented.headers["ETag"].startswith('"')
    body = presented.body
    assert body is not None
    data = body.model_dump_http()["data"]
    assert data["current_period"]["label"] == "Q2 2025"
    assert data["current_period"]["value"] == "3.3"
    assert data["current_period"]["raw_value"] == 33
    assert data["view"]["headline"] == {
        "label": "Q2 2025",
        "value": "3.3",
        "tier": "strong",
        "record_date": "Tue, 19 Aug 2025 12:00:00 GMT",
    }
    assert data["view"]["badge"]["tone"] == "success"
    assert data["verification"]["status"] == "VERIFIED"
    assert data["metadata"]["explorer_url"].startswith("https://etherscan.io/address/0x")
    assert data["metadata"]["last_updated_display"] == "Tue, 19 Aug 2025 12:00:00 GMT"
    assert [p["label"] for p in data["view"]["grid"]] == ["Q1 2025", "Q2 2025"]


def test_present_partial_record(make_result: Callable[..., RetrievalResult]) -> None:
    result = make_result(raws={"Q1 2025": 5, "Q2 2025": None}, status=VerificationStatus.SOURCE_MISSING)
    data = RecordPresenter().to_http(result)

    assert data.current_period.label == "Q1 2025"
    assert data.view.headline.tier == "weak"
    assert data.view.badge.tone == "warning"
    assert data.verification.computed_digest is None
    assert [p.available for p in data.all_periods] == [True, False]
    assert data.all_periods[1].unavailable_reason == "execution reverted"
    assert data.all_periods[1].value is None
    assert len(data.view.chart.bars) == 1


def test_nothing_available_headline(make_result: Callable[..., RetrievalResult]) -> None:
    result = make_result(raws={"Q1 2025": None, "Q2 2025": None})
    data = RecordPresenter().to_http(result)
    assert data.view.headline.label == "Q1 2025"
    assert data.view.headline.tier == "unavailable"
    assert data.view.headline.value is None
    assert data.view.chart.bars == []


def test_explorer_url_is_configurable(make_result: Callable[..., RetrievalResult]) -> None:
    data = RecordPresenter(explorer_url="https://explorer.example/addr/").to_http(make_result())
    assert data.metadata.explorer_url.startswith("https://explorer.example/addr/0x")


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ConfigurationError("Missing required environment variable: RPC_URL"), 500),
        (NotDeployedError("No contract bytecode found at address on this chain."), 502),
        (LedgerReadError("On-chain read failed: execution reverted"), 502),
    ],
)
def test_present_failure(exc: Exception, status: int) -> None:
    presented = RecordPresenter().present_failure(exc, trace_id="req-9")  # type: ignore[arg-type]
    assert presented.status_code == status
    assert presented.body is not None
    err = presented.body.error
    assert err.http_status == status
    assert err.message == str(exc)
    assert err.details is not None and err.details["hint"] == FAILURE_HINT
    assert err.trace_id == "req-9"
