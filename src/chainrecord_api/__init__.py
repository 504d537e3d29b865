# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Chainrecord API.

Reads economic figures published on a public ledger and verifies them against
the official source document they commit to.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
