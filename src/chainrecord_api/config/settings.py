# src/chainrecord_api/config/settings.py
# Copyright (c) Chainrecord.
# SPDX-License-Identifier: MIT
"""Chainrecord Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated process configuration. Only adapters, dependencies and
    tasks read the process environment; the use case receives the resolved
    ledger endpoint and a :class:`~chainrecord_api.config.record.RecordConfig`
    explicitly.

Design:
    - Pydantic v2 BaseSettings with explicit aliases per variable.
    - ``RPC_URL`` is modelled as optional so that its absence can be reported
      as a domain ``ConfigurationError`` (fail fast, before any network I/O)
      instead of a generic validation failure at import time.
    - Singleton accessor ``get_settings()`` with LRU cache.
    - Safe, structured logging (no endpoint credentials).
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from urllib.parse import urlsplit

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chainrecord_api.domain.exceptions.configuration import ConfigurationError

logger = logging.getLogger(__name__)

RPC_URL_ENV = "RPC_URL"


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed process configuration for the Chainrecord service."""

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    # ---------------------------
    # Ledger node
    # ---------------------------
    rpc_url: str | None = Field(
        default=None,
        description="JSON-RPC endpoint of an Ethereum mainnet node (required at retrieval time).",
        validation_alias=RPC_URL_ENV,
    )
    rpc_timeout_s: float = Field(
        default=10.0,
        ge=0.1,
        le=120.0,
        description="Per-request timeout in seconds for JSON-RPC calls.",
        validation_alias="RPC_TIMEOUT_S",
    )

    # ---------------------------
    # Source document
    # ---------------------------
    document_timeout_s: float = Field(
        default=20.0,
        ge=0.1,
        le=300.0,
        description="Timeout in seconds for the reference document download.",
        validation_alias="DOCUMENT_TIMEOUT_S",
    )

    # ---------------------------
    # Service identity / HTTP
    # ---------------------------
    service_name: str = Field(
        default="chainrecord-api",
        description="Logical service name for logging.",
        validation_alias="SERVICE_NAME",
    )
    service_version: str | None = Field(
        default=None,
        description="Service version reported by the app factory.",
        validation_alias="SERVICE_VERSION",
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        description="Raw env for allowed CORS origins (comma-separated).",
        validation_alias="ALLOWED_ORIGINS",
    )
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Allowed CORS origins. Derived from ALLOWED_ORIGINS.",
    )

    # ---------------------------
    # Logging
    # ---------------------------
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO').",
        validation_alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _compute_cors(self) -> Settings:
        """Parse ``ALLOWED_ORIGINS`` into a list.

        Raises:
            ValueError: If ``*`` is used outside development/test.
        """
        raw = (self.cors_allow_origins_raw or "").strip()
        entries = [e.strip() for e in raw.split(",") if e.strip()]
        if "*" in entries and self.environment not in (Environment.DEVELOPMENT, Environment.TEST):
            raise ValueError("'*' CORS origin is only allowed in development/test environments.")
        self.cors_allow_origins = entries
        return self

    @property
    def rpc_configured(self) -> bool:
        """Return True when a non-blank ledger endpoint is configured."""
        return bool((self.rpc_url or "").strip())

    def require_rpc_url(self) -> str:
        """Return the ledger endpoint or fail fast.

        Returns:
            The stripped ``RPC_URL`` value.

        Raises:
            ConfigurationError: If ``RPC_URL`` is missing or blank.
        """
        value = (self.rpc_url or "").strip()
        if not value:
            raise ConfigurationError(
                f"Missing required environment variable: {RPC_URL_ENV}",
                details={"variable": RPC_URL_ENV},
            )
        return value


def redact_url(url: str | None) -> str | None:
    """Return ``scheme://host`` for logging; node URLs often embed API keys."""
    if not url:
        return None
    parts = urlsplit(url)
    if not parts.scheme or not parts.hostname:
        return "<unparseable>"
    return f"{parts.scheme}://{parts.hostname}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.exception("Invalid application configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.info(
        "Settings initialized",
        extra={
            "environment": settings.environment.value,
            "rpc_endpoint": redact_url(settings.rpc_url),
            "rpc_timeout_s": settings.rpc_timeout_s,
            "document_timeout_s": settings.document_timeout_s,
            "cors_count": len(settings.cors_allow_origins),
        },
    )
    return settings
