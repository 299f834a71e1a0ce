"""Request signing module for the SLS HTTP API."""

from .request_signer import api_sign, authorization_header, build_sign_string, canonicalize_headers, canonicalize_resource

__all__ = ["api_sign", "authorization_header", "build_sign_string", "canonicalize_headers", "canonicalize_resource"]
