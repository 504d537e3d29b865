"""Routers Package Export (Adapters Layer).

Purpose:
    Re-export the application router aggregator (`api_router`) and the
    metrics router so `main.py` is decoupled from router file layout.
"""

from __future__ import annotations

from .api_router import router as api_router
from .metrics_router import router as metrics_router

__all__ = ["api_router", "metrics_router"]
