"""SLS Log Shipper - batch, sign and send structured logs to Aliyun Log Service."""

from .client import SlsClient, create_client, create_client_from_env
from .config import ClientConfig, ShipperLimits, setup_logging
from .core import Log, LogContent, LogGroup
from .exceptions import (
    BatchTooLargeError,
    ConfigError,
    SendLogsError,
    SerializationError,
    ServerError,
    ShipperError,
    SigningError,
    TransportError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    "SlsClient",
    "create_client",
    "create_client_from_env",
    "ClientConfig",
    "ShipperLimits",
    "setup_logging",
    "Log",
    "LogContent",
    "LogGroup",
    "ShipperError",
    "ConfigError",
    "ValidationError",
    "BatchTooLargeError",
    "SerializationError",
    "SigningError",
    "TransportError",
    "ServerError",
    "SendLogsError",
]
