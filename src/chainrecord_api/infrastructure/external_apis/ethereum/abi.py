# src/chainrecord_api/infrastructure/external_apis/ethereum/abi.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Minimal ABI helpers for zero-argument view calls.

Purpose:
    * Derive the 4-byte function selector from a canonical signature
      (first 4 bytes of Keccak-256, not NIST SHA3-256).
    * Decode single ``uint256`` / ``bytes32`` return values.

Notes:
    Only the static, single-word return types read by this service are
    supported. Decoding failures raise ``LedgerMappingError``.
"""

from __future__ import annotations

import re
from typing import Final

from Crypto.Hash import keccak

from chainrecord_api.domain.exceptions.ledger import LedgerMappingError

_WORD_HEX_LEN: Final[int] = 64
_SIGNATURE_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*\([A-Za-z0-9_,\[\]]*\)$")
_HEX_RE: Final[re.Pattern[str]] = re.compile(r"^[0-9a-fA-F]*$")


def keccak256_hex(data: bytes) -> str:
    """Return the lower-case hex Keccak-256 digest of ``data``."""
    return keccak.new(digest_bits=256, data=data).hexdigest()


def function_selector(signature: str) -> str:
    """Return the ``0x``-prefixed 4-byte selector for ``signature``.

    Args:
        signature: Canonical signature without spaces, e.g. ``"timestamp()"``.

    Raises:
        ValueError: If the signature is not in canonical form.

    Examples:
        >>> function_selector("transfer(address,uint256)")
        '0xa9059cbb'
    """
    if not _SIGNATURE_RE.match(signature):
        raise ValueError(f"not a canonical function signature: {signature!r}")
    return "0x" + keccak256_hex(signature.encode("ascii"))[:8]


def encode_call(signature: str) -> str:
    """Return call data for a zero-argument function."""
    return function_selector(signature)


def _first_word(result: str, *, accessor: str) -> str:
    """Return the first 32-byte word of an ABI-encoded return value as hex."""
    body = result[2:] if result[:2] in ("0x", "0X") else result
    if not _HEX_RE.match(body):
        raise LedgerMappingError(
            "Call result is not hex encoded.",
            details={"accessor": accessor, "result": result[:80]},
        )
    if len(body) < _WORD_HEX_LEN:
        raise LedgerMappingError(
            "Call returned no data (empty or truncated result).",
            details={"accessor": accessor, "length": len(body) // 2},
        )
    return body[:_WORD_HEX_LEN]


def decode_uint256(result: str, *, accessor: str = "") -> int:
    """Decode a single ``uint256`` return value."""
    return int(_first_word(result, accessor=accessor), 16)


def decode_bytes32(result: str, *, accessor: str = "") -> str:
    """Decode a single ``bytes32`` return value as ``0x``-prefixed lower-case hex."""
    return "0x" + _first_word(result, accessor=accessor).lower()


__all__ = [
    "decode_bytes32",
    "decode_uint256",
    "encode_call",
    "function_selector",
    "keccak256_hex",
]
