"""Request signing for the SLS HTTP API.

The signature is base64(HMAC-SHA1(secret, sign_string)) where sign_string is::

    METHOD\\n
    Content-MD5\\n
    Content-Type\\n
    Date\\n
    CanonicalizedHeaders\\n
    CanonicalizedResource

CanonicalizedHeaders are the x-log-* and x-acs-* headers, lowercased and
sorted by name, one ``name:value`` per line. CanonicalizedResource is the
request path followed by its query parameters sorted by key.
"""

from __future__ import annotations

import base64
import hmac
from hashlib import sha1
from typing import Dict, Mapping
from urllib.parse import parse_qsl, urlsplit

from ..exceptions import SigningError

HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_LENGTH = "Content-Length"
HEADER_CONTENT_MD5 = "Content-MD5"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_DATE = "Date"
HEADER_HOST = "Host"
HEADER_LOG_VERSION = "x-log-apiversion"
HEADER_LOG_SIGNATURE_METHOD = "x-log-signaturemethod"
HEADER_LOG_BODY_RAW_SIZE = "x-log-bodyrawsize"

SLS_API_VERSION = "0.6.0"
SLS_SIGNATURE_METHOD = "hmac-sha1"
AUTHORIZATION_SCHEME = "LOG"

SIGNED_HEADER_PREFIXES = ("x-log-", "x-acs-")


def _lower_keys(headers: Mapping[str, str]) -> Dict[str, str]:
    return {key.strip().lower(): value for key, value in headers.items()}


def canonicalize_headers(headers: Mapping[str, str]) -> str:
    """Render provider headers as sorted ``name:value`` lines."""
    provider_headers = {key: value.strip() for key, value in _lower_keys(headers).items() if key.startswith(SIGNED_HEADER_PREFIXES)}
    return "\n".join(f"{key}:{provider_headers[key]}" for key in sorted(provider_headers))


def canonicalize_resource(resource: str) -> str:
    """Render a resource path with its query parameters sorted by key."""
    parts = urlsplit(resource)
    if not parts.query:
        return parts.path

    params: Dict[str, str] = {}
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        params.setdefault(key, value)
    return parts.path + "?" + "&".join(f"{key}={params[key]}" for key in sorted(params))


def build_sign_string(method: str, headers: Mapping[str, str], resource: str) -> str:
    """Build the canonical string that gets signed.

    Args:
        method: HTTP method
        headers: Request headers; names are matched case-insensitively
        resource: Request path, optionally with a query string

    Returns:
        The canonical string

    Raises:
        SigningError: If the Date header is missing
    """
    lowered = _lower_keys(headers)
    date = lowered.get(HEADER_DATE.lower())
    if date is None:
        raise SigningError(f"Can't find '{HEADER_DATE}' header")

    return "\n".join(
        [
            method.upper(),
            lowered.get(HEADER_CONTENT_MD5.lower(), ""),
            lowered.get(HEADER_CONTENT_TYPE.lower(), ""),
            date,
            canonicalize_headers(headers),
            canonicalize_resource(resource),
        ]
    )


def api_sign(secret: str, method: str, headers: Mapping[str, str], resource: str) -> str:
    """Sign a request with an access key secret.

    Args:
        secret: Access key secret
        method: HTTP method
        headers: Request headers including Date
        resource: Request path, optionally with a query string

    Returns:
        Base64 encoded HMAC-SHA1 signature
    """
    if not secret:
        raise SigningError("access key secret is required")

    sign_string = build_sign_string(method, headers, resource)
    digest = hmac.new(secret.encode("utf-8"), sign_string.encode("utf-8"), sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def authorization_header(access_key_id: str, signature: str) -> str:
    """Get the Authorization header value for a signature."""
    return f"{AUTHORIZATION_SCHEME} {access_key_id}:{signature}"
