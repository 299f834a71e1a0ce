"""Exceptions raised by the SLS log shipper.

Exception hierarchy:
- ShipperError (base)
  - ConfigError
  - ValidationError
    - BatchTooLargeError
  - SerializationError
  - SigningError
  - TransportError
  - ServerError
  - SendLogsError (aggregate of per-group failures)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class ShipperError(Exception):
    """Base exception for all log shipper errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = dict(context) if context else {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class ConfigError(ShipperError):
    """Raised when a required client setting is missing or invalid."""

    def __init__(self, config_field: str, reason: str = "should not be empty", **kwargs):
        message = f"Sls {config_field} {reason}"
        super().__init__(message, error_code="CONFIG_ERROR", context={"config_field": config_field}, **kwargs)
        self.config_field = config_field


class ValidationError(ShipperError):
    """Base class for caller input that is rejected before any send."""

    pass


class BatchTooLargeError(ValidationError):
    """Raised when a single call carries more records than allowed."""

    def __init__(self, batch_size: int, limit: int, **kwargs):
        message = f"Log batch size should not exceed {limit}, got {batch_size}"
        context = {"batch_size": batch_size, "limit": limit}
        super().__init__(message, error_code="BATCH_TOO_LARGE", context=context, **kwargs)


class SerializationError(ShipperError):
    """Raised when a log group cannot be encoded to the wire format."""

    def __init__(self, reason: str, **kwargs):
        super().__init__(f"Fail to serialize log group: {reason}", error_code="SERIALIZATION_ERROR", **kwargs)


class SigningError(ShipperError):
    """Raised when a request cannot be signed."""

    def __init__(self, reason: str, **kwargs):
        super().__init__(f"Fail to create sign for sls: {reason}", error_code="SIGNING_ERROR", **kwargs)


class TransportError(ShipperError):
    """Raised when the HTTP request could not be delivered."""

    def __init__(self, url: str, reason: Any, **kwargs):
        message = f"Error sending log with http client: {reason}"
        super().__init__(message, error_code="TRANSPORT_ERROR", context={"url": url, "reason": str(reason)}, **kwargs)
        self.url = url


class ServerError(ShipperError):
    """Raised when the server answers with anything but HTTP 200.

    The response body is the server's diagnostic and is kept verbatim.
    """

    def __init__(self, status_code: int, body: str, **kwargs):
        super().__init__(body or f"HTTP {status_code} with empty body", error_code="SERVER_ERROR", context={"status_code": status_code}, **kwargs)
        self.status_code = status_code
        self.body = body


class SendLogsError(ShipperError):
    """Aggregate of every group-level failure from one split send."""

    def __init__(self, errors: List[ShipperError]):
        self.errors = list(errors)
        details = "; ".join(f"[{error.error_code}] {error.message}" for error in self.errors)
        message = f"Fail to send logs due to the following {len(self.errors)} errors: {details}"
        super().__init__(message, error_code="SEND_LOGS_FAILED", context={"error_count": len(self.errors)})

    def __iter__(self):
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)
