"""Configuration management for the SLS log shipper.

This module provides the immutable connection settings for a client and the
size/timeout limits used when batching, both with environment variable
loaders.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigError

DEFAULT_TIMEOUT_SECONDS = 5.0
MAX_LOG_ITEM_SIZE = 512 * 1024  # Safe value for a 1M server-side log item limit
MAX_LOG_GROUP_SIZE = 4 * 1024 * 1024  # Safe value for a 5M server-side log group limit
MAX_LOG_BATCH_SIZE = 1024  # Records accepted per send call


class ClientConfig(BaseModel):
    """Connection settings for one SLS log store."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True, extra="forbid")

    endpoint: str = Field(..., min_length=1, description="SLS endpoint host, optionally with http:// or https://")
    access_key_id: str = Field(..., min_length=1, description="Access key ID")
    access_key_secret: str = Field(..., min_length=1, repr=False, description="Access key secret used for signing")
    log_store: str = Field(..., min_length=1, description="Target log store name")

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            error = e.errors()[0]
            config_field = str(error["loc"][0]) if error["loc"] else "config"
            if error["type"] in ("missing", "string_too_short"):
                raise ConfigError(config_field) from e
            raise ConfigError(config_field, reason=error["msg"]) from e

    @classmethod
    def from_env(cls) -> ClientConfig:
        """Load connection settings from SLS_* environment variables."""
        return cls(
            endpoint=os.getenv("SLS_ENDPOINT", ""),
            access_key_id=os.getenv("SLS_ACCESS_KEY_ID", ""),
            access_key_secret=os.getenv("SLS_ACCESS_KEY_SECRET", ""),
            log_store=os.getenv("SLS_LOG_STORE", ""),
        )


@dataclass(frozen=True)
class ShipperLimits:
    """Size and timeout limits used when batching and sending."""

    max_log_item_size: int = MAX_LOG_ITEM_SIZE  # Bytes, single log estimate ceiling
    max_log_group_size: int = MAX_LOG_GROUP_SIZE  # Bytes, encoded group ceiling
    max_log_batch_size: int = MAX_LOG_BATCH_SIZE  # Records per send call
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS  # Request timeout

    @classmethod
    def from_env(cls) -> ShipperLimits:
        """Build limits with overrides from environment variables."""
        return cls(**cls._apply_env_overrides())

    @staticmethod
    def _apply_env_overrides() -> dict:
        """Collect limit overrides from environment variables."""
        overrides: dict = {}

        for env_name, field_name in (
            ("SLS_MAX_LOG_ITEM_SIZE", "max_log_item_size"),
            ("SLS_MAX_LOG_GROUP_SIZE", "max_log_group_size"),
            ("SLS_MAX_LOG_BATCH_SIZE", "max_log_batch_size"),
        ):
            if value := os.getenv(env_name):
                try:
                    overrides[field_name] = int(value)
                except ValueError:
                    logger.warning(f"Invalid {env_name}: {value}")

        if timeout := os.getenv("SLS_TIMEOUT_SECONDS"):
            try:
                overrides["timeout_seconds"] = float(timeout)
            except ValueError:
                logger.warning(f"Invalid SLS_TIMEOUT_SECONDS: {timeout}")

        return overrides

    def validate(self) -> tuple[bool, list[str]]:
        """Validate the limits.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if self.max_log_item_size <= 0:
            errors.append("Max log item size must be positive")

        if self.max_log_group_size <= 0:
            errors.append("Max log group size must be positive")

        if self.max_log_item_size > self.max_log_group_size:
            errors.append("Max log item size must not exceed max log group size")

        if self.max_log_batch_size <= 0:
            errors.append("Max log batch size must be positive")

        if self.timeout_seconds <= 0:
            errors.append("Timeout must be positive")

        return len(errors) == 0, errors
