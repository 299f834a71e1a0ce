"""Configuration module for the SLS log shipper."""

from .logger_config import setup_logging
from .settings import DEFAULT_TIMEOUT_SECONDS, MAX_LOG_BATCH_SIZE, MAX_LOG_GROUP_SIZE, MAX_LOG_ITEM_SIZE, ClientConfig, ShipperLimits

__all__ = [
    "ClientConfig",
    "ShipperLimits",
    "setup_logging",
    "DEFAULT_TIMEOUT_SECONDS",
    "MAX_LOG_ITEM_SIZE",
    "MAX_LOG_GROUP_SIZE",
    "MAX_LOG_BATCH_SIZE",
]
