"""
Config package export.

Keeps import sites clean and stable:
    from chainrecord_api.config import get_settings, Settings, RecordConfig
"""

from __future__ import annotations

from .record import DEFAULT_RECORD_CONFIG, PeriodSpec, RecordConfig
from .settings import Settings, get_settings

__all__ = ["DEFAULT_RECORD_CONFIG", "PeriodSpec", "RecordConfig", "Settings", "get_settings"]
