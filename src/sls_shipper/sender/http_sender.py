"""HTTP sender for transmitting log groups to SLS.

This module turns an encoded log group into a signed POST against the log
store's load-balanced shard endpoint and classifies the response.

A sender holds only immutable settings. Every request goes through
``urlopen``, which opens its own connection, so one sender may be shared by
many threads.
"""

from __future__ import annotations

import hashlib
import http.client
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Callable, Dict, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from loguru import logger

from ..config.settings import DEFAULT_TIMEOUT_SECONDS, ClientConfig
from ..core.records import LogGroup
from ..core.wire import CONTENT_TYPE, encode_log_group
from ..exceptions import ServerError, TransportError
from ..signer.request_signer import (
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_LENGTH,
    HEADER_CONTENT_MD5,
    HEADER_CONTENT_TYPE,
    HEADER_DATE,
    HEADER_HOST,
    HEADER_LOG_BODY_RAW_SIZE,
    HEADER_LOG_SIGNATURE_METHOD,
    HEADER_LOG_VERSION,
    SLS_API_VERSION,
    SLS_SIGNATURE_METHOD,
    api_sign,
    authorization_header,
)

HTTP_METHOD = "POST"
SECURE_SCHEME = "https://"
INSECURE_SCHEME = "http://"


def content_md5(payload: bytes) -> str:
    """Get the uppercase hex MD5 digest of a payload."""
    return hashlib.md5(payload).hexdigest().upper()


def http_date(moment: Optional[datetime] = None) -> str:
    """Format a moment (default now) as an RFC 7231 HTTP-date in GMT."""
    return format_datetime(moment or datetime.now(timezone.utc), usegmt=True)


def has_scheme(endpoint: str) -> bool:
    return endpoint.startswith((INSECURE_SCHEME, SECURE_SCHEME))


def endpoint_host(endpoint: str) -> str:
    """Strip any scheme and trailing slash from an endpoint."""
    for scheme in (SECURE_SCHEME, INSECURE_SCHEME):
        if endpoint.startswith(scheme):
            endpoint = endpoint[len(scheme) :]
            break
    return endpoint.rstrip("/")


def resolve_url(endpoint: str, resource: str) -> str:
    """Join an endpoint and a resource path into a request URL.

    Endpoints that already declare http:// or https:// are used as-is,
    bare hosts get http://.
    """
    base = endpoint.rstrip("/") if has_scheme(endpoint) else INSECURE_SCHEME + endpoint.rstrip("/")
    return f"{base}/{resource.lstrip('/')}"


class HTTPSender:
    """HTTP sender for transmitting encoded log groups."""

    def __init__(
        self,
        config: ClientConfig,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        opener: Callable[..., Any] = urlopen,
    ):
        """Initialize the HTTP sender.

        Args:
            config: Connection settings
            timeout_seconds: Request timeout
            opener: Callable with the urlopen(request, timeout=...) signature
        """
        self.config = config
        self.timeout_seconds = timeout_seconds
        self._opener = opener

    @property
    def resource(self) -> str:
        """Resource path of the log store's load-balanced shard."""
        return f"/logstores/{self.config.log_store}/shards/lb"

    @property
    def url(self) -> str:
        return resolve_url(self.config.endpoint, self.resource)

    def build_headers(self, payload: bytes, date: Optional[str] = None) -> Dict[str, str]:
        """Build the signed header set for a payload.

        Args:
            payload: Encoded log group
            date: HTTP-date to send, defaults to now

        Returns:
            Request headers including Authorization
        """
        headers = {
            HEADER_LOG_VERSION: SLS_API_VERSION,
            HEADER_CONTENT_TYPE: CONTENT_TYPE,
            HEADER_CONTENT_MD5: content_md5(payload),
            HEADER_LOG_SIGNATURE_METHOD: SLS_SIGNATURE_METHOD,
            HEADER_CONTENT_LENGTH: str(len(payload)),
            HEADER_LOG_BODY_RAW_SIZE: "0",
            HEADER_HOST: endpoint_host(self.config.endpoint),
            HEADER_DATE: date or http_date(),
        }

        signature = api_sign(self.config.access_key_secret, HTTP_METHOD, headers, self.resource)
        headers[HEADER_AUTHORIZATION] = authorization_header(self.config.access_key_id, signature)
        return headers

    def send_log_group(self, group: LogGroup) -> None:
        """Encode and send a log group."""
        self.send_payload(encode_log_group(group))

    def send_payload(self, payload: bytes) -> None:
        """Send an encoded log group.

        Args:
            payload: Encoded log group

        Raises:
            SigningError: If the request cannot be signed
            ServerError: If the server answers with a status other than 200
            TransportError: If the request could not be delivered
        """
        url = self.url
        req = Request(url, data=payload, headers=self.build_headers(payload), method=HTTP_METHOD)

        try:
            with self._opener(req, timeout=self.timeout_seconds) as response:
                if response.status != 200:
                    body = response.read().decode("utf-8", errors="replace")
                    logger.error(f"SLS rejected log group with HTTP {response.status}: {body}")
                    raise ServerError(response.status, body)

                logger.debug(f"Sent {len(payload)} bytes to {url}")

        except HTTPError as e:
            try:
                body = e.read().decode("utf-8", errors="replace")
            except (http.client.HTTPException, OSError) as read_error:
                logger.error(f"Failed to read HTTP {e.code} error body from {url}: {read_error!r}")
                raise TransportError(url, repr(read_error)) from read_error
            logger.error(f"SLS rejected log group with HTTP {e.code}: {body}")
            raise ServerError(e.code, body) from e

        except URLError as e:
            logger.error(f"Network error sending logs to {url}: {e.reason}")
            raise TransportError(url, e.reason) from e

        except http.client.HTTPException as e:
            logger.error(f"Protocol error sending logs to {url}: {e!r}")
            raise TransportError(url, repr(e)) from e

        except OSError as e:
            logger.error(f"Connection error sending logs to {url}: {e}")
            raise TransportError(url, e) from e
