"""HTTP transport module for sending log groups to SLS."""

from .http_sender import HTTPSender, content_md5, endpoint_host, http_date, resolve_url

__all__ = ["HTTPSender", "content_md5", "endpoint_host", "http_date", "resolve_url"]
