# src/chainrecord_api/config/record.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Static record configuration.

Purpose:
    Describe *what* is read and verified: the contract address, the tracked
    periods and their accessor functions, the commitment and timestamp
    accessors, and the reference document. These values are compiled in and
    never user-supplied; they are bundled into an immutable
    :class:`RecordConfig` and passed into the retrieval use case so tests can
    point it at a mock ledger and a mock document server.

Layer:
    config
"""

from __future__ import annotations

from dataclasses import dataclass, field

from chainrecord_api.infrastructure.external_apis.ethereum.abi import function_selector


@dataclass(frozen=True, slots=True)
class PeriodSpec:
    """One tracked reporting period.

    Attributes:
        label: Display label, unique within a configuration (e.g. ``"Q2 2025"``).
        accessor: Canonical zero-argument view signature (e.g. ``"gdp_q2_2025()"``).
    """

    label: str
    accessor: str


@dataclass(frozen=True, slots=True)
class RecordConfig:
    """Immutable description of the on-chain record and its source document.

    Attributes:
        contract_address: Checksummed hex address of the record contract.
        document_url: URL of the official reference document.
        source_name: Human-readable publisher of the reference document.
        interpretation: Human-readable rule for reading the raw integers.
        periods: Tracked periods in chronological order.
        commitment_accessor: View returning the ``bytes32`` document hash.
        timestamp_accessor: View returning the record timestamp (Unix seconds).
        explorer_url: Block-explorer base URL for address links.
    """

    contract_address: str
    document_url: str
    source_name: str
    interpretation: str
    periods: tuple[PeriodSpec, ...]
    commitment_accessor: str = "gdp_pdf_hash()"
    timestamp_accessor: str = "timestamp()"
    explorer_url: str = field(default="https://etherscan.io/address/")

    def __post_init__(self) -> None:
        if not self.periods:
            raise ValueError("at least one period must be configured")
        labels = [p.label for p in self.periods]
        if len(set(labels)) != len(labels):
            raise ValueError("period labels must be unique")
        accessors = [
            *(p.accessor for p in self.periods),
            self.commitment_accessor,
            self.timestamp_accessor,
        ]
        for accessor in accessors:
            # Raises ValueError for a non-canonical signature.
            function_selector(accessor)

    @property
    def contract_explorer_url(self) -> str:
        """Return the block-explorer link for the configured contract."""
        return f"{self.explorer_url.rstrip('/')}/{self.contract_address}"


DEFAULT_RECORD_CONFIG = RecordConfig(
    contract_address="0x36ccdF11044f60F196e981970d592a7DE567ed7b",
    document_url="https://www.bea.gov/sites/default/files/2025-08/gdp2q25-2nd.pdf",
    source_name="U.S. Bureau of Economic Analysis",
    interpretation="Increments of tenths",
    periods=(
        PeriodSpec(label="Q1 2025", accessor="gdp_q1_2025()"),
        PeriodSpec(label="Q2 2025", accessor="gdp_q2_2025()"),
    ),
)

__all__ = ["DEFAULT_RECORD_CONFIG", "PeriodSpec", "RecordConfig"]
