"""Shared fixtures for log shipper tests."""

from __future__ import annotations

import io
from typing import Callable, List, Optional
from urllib.error import HTTPError

import pytest
from loguru import logger

from sls_shipper.config import ClientConfig, ShipperLimits
from sls_shipper.core import Log, LogContent


class FakeResponse:
    """A minimal stand-in for the object urlopen returns."""

    def __init__(self, status: int = 200, body: bytes = b""):
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info) -> bool:
        return False


class RecordingOpener:
    """Records every request and answers with a fixed response or error."""

    def __init__(self, status: int = 200, body: bytes = b"", error_factory: Optional[Callable[[str], Exception]] = None):
        self.status = status
        self.body = body
        self.error_factory = error_factory
        self.requests: List = []
        self.timeouts: List = []

    def __call__(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error_factory is not None:
            raise self.error_factory(request.full_url)
        return FakeResponse(self.status, self.body)


def http_error(status: int, body: bytes) -> Callable[[str], HTTPError]:
    """Build an error factory raising urllib's HTTPError with a body."""

    def factory(url: str) -> HTTPError:
        return HTTPError(url, status, "error", None, io.BytesIO(body))

    return factory


def make_log(value_size: int = 1, key: str = "k", time_: int = 1700000000) -> Log:
    return Log(time=time_, contents=[LogContent(key=key, value="v" * value_size)])


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(endpoint="cn-hangzhou.log.aliyuncs.com", access_key_id="test-key-id", access_key_secret="test-key-secret", log_store="app-logs")


@pytest.fixture
def opener() -> RecordingOpener:
    return RecordingOpener()


@pytest.fixture
def small_limits() -> ShipperLimits:
    """Limits small enough to exercise splitting with tiny logs.

    A log built by make_log(50) estimates at 63 bytes and encodes to 65
    bytes inside a group, so three of them fit an estimated 200 bytes.
    """
    return ShipperLimits(max_log_item_size=100, max_log_group_size=200, max_log_batch_size=1024, timeout_seconds=5.0)


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
