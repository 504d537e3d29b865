# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Record retrieval metrics.

Purpose:
    Provide Prometheus metrics for the read-and-verify path:
      * JSON-RPC latency histogram by method and outcome.
      * Ledger error counter by method and reason.
      * Reference document fetch counter by outcome.
      * Verification outcome counter by status.

Design:
    - Functions return lazily created singleton metric instances so repeated
      imports (tests, reloads) never register a collector twice.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

_ledger_rpc_latency_seconds: Histogram | None = None
_ledger_errors_total: Counter | None = None
_document_fetch_total: Counter | None = None
_verification_outcomes_total: Counter | None = None


def get_ledger_rpc_latency_seconds() -> Histogram:
    """Return (and lazily create) the JSON-RPC latency histogram."""
    global _ledger_rpc_latency_seconds
    if _ledger_rpc_latency_seconds is None:
        _ledger_rpc_latency_seconds = Histogram(
            "ledger_rpc_latency_seconds",
            "Latency of ledger JSON-RPC calls in seconds.",
            ["method", "outcome"],
        )
    return _ledger_rpc_latency_seconds


def get_ledger_errors_total() -> Counter:
    """Return (and lazily create) the ledger error counter."""
    global _ledger_errors_total
    if _ledger_errors_total is None:
        _ledger_errors_total = Counter(
            "ledger_errors_total",
            "Total number of ledger JSON-RPC errors.",
            ["method", "reason"],
        )
    return _ledger_errors_total


def get_document_fetch_total() -> Counter:
    """Return (and lazily create) the reference document fetch counter."""
    global _document_fetch_total
    if _document_fetch_total is None:
        _document_fetch_total = Counter(
            "record_document_fetch_total",
            "Reference document fetch attempts by outcome.",
            ["outcome"],
        )
    return _document_fetch_total


def get_verification_outcomes_total() -> Counter:
    """Return (and lazily create) the verification outcome counter."""
    global _verification_outcomes_total
    if _verification_outcomes_total is None:
        _verification_outcomes_total = Counter(
            "record_verification_outcomes_total",
            "Document verification outcomes by status.",
            ["status"],
        )
    return _verification_outcomes_total
