# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Ethereum external API package.

Purpose:
    Group ledger-node infrastructure modules:

    * abi: Function selectors and return-value decoding for view calls.
    * client: Async JSON-RPC transport over httpx.
    * types: Typed JSON-RPC envelope fragments.
"""

from __future__ import annotations
