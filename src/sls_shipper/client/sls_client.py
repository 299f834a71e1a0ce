"""SLS client for shipping batches of logs to a log store.

This module coordinates the send path:
Logs → Splitter → LogGroup → Wire encoding → Signed HTTP POST → SLS
"""

from __future__ import annotations

import time
from typing import Any, Callable, List, Optional, Sequence
from urllib.request import urlopen

from loguru import logger

from ..batcher import LogSplitter
from ..config.settings import ClientConfig, ShipperLimits
from ..core.records import Log, LogContent, LogGroup
from ..core.wire import encode_log_group
from ..exceptions import BatchTooLargeError, ConfigError, SendLogsError, ShipperError
from ..sender import HTTPSender

PING_TOPIC = "status"
PING_MESSAGE = "Status check by sls-shipper."


class SlsClient:
    """Client that batches, signs and sends logs to one SLS log store."""

    def __init__(
        self,
        config: ClientConfig,
        limits: Optional[ShipperLimits] = None,
        opener: Callable[..., Any] = urlopen,
    ):
        """Initialize the client.

        Args:
            config: Connection settings
            limits: Size and timeout limits, defaults to ShipperLimits()
            opener: Callable with the urlopen(request, timeout=...) signature
        """
        self.config = config
        self.limits = limits or ShipperLimits()

        is_valid, errors = self.limits.validate()
        if not is_valid:
            raise ConfigError("limits", reason="; ".join(errors))

        self.splitter = LogSplitter(max_log_item_size=self.limits.max_log_item_size, max_log_group_size=self.limits.max_log_group_size)
        self.sender = HTTPSender(config, timeout_seconds=self.limits.timeout_seconds, opener=opener)

    def ping(self) -> None:
        """Send a single status log to check connectivity and credentials."""
        status_log = Log(
            time=int(time.time()),
            contents=[
                LogContent(key="__topic__", value=PING_TOPIC),
                LogContent(key="message", value=PING_MESSAGE),
            ],
        )
        self.sender.send_log_group(LogGroup(logs=[status_log]))

    def send_logs(self, logs: Sequence[Log]) -> None:
        """Send a batch of logs.

        Logs larger than the item size limit are reported and dropped. The
        rest is sent as one group when it encodes within the group size
        limit, otherwise it is split into several groups.

        Args:
            logs: Logs to send

        Raises:
            BatchTooLargeError: If the batch holds more logs than allowed
            SendLogsError: If any group failed after splitting
        """
        if not logs:
            return

        if len(logs) > self.limits.max_log_batch_size:
            raise BatchTooLargeError(len(logs), self.limits.max_log_batch_size)

        logs = self.splitter.drop_oversized(logs)
        if not logs:
            return

        payload = encode_log_group(LogGroup(logs=logs))
        if len(payload) > self.limits.max_log_group_size:
            logger.info(f"Log batch of {len(logs)} logs encodes to {len(payload)} bytes, splitting")
            self._split_send_logs(logs)
            return

        self.sender.send_payload(payload)
        logger.debug(f"Sent {len(logs)} logs in a single group")

    def _split_send_logs(self, logs: Sequence[Log]) -> None:
        """Send logs in size-bounded groups, collecting per-group failures."""
        errors: List[ShipperError] = []
        sent_logs = 0

        for group in self.splitter.split(logs):
            try:
                payload = encode_log_group(group)
                if len(payload) > self.limits.max_log_group_size:
                    logger.warning(f"[HUGE SLS LOG GROUP] dropping group of {group.size()} logs encoded to {len(payload)} bytes (limit {self.limits.max_log_group_size})")
                    continue

                self.sender.send_payload(payload)
                sent_logs += group.size()

            except ShipperError as e:
                logger.error(f"Failed to send log group of {group.size()} logs: {e}")
                errors.append(e)

        if errors:
            raise SendLogsError(errors)

        logger.debug(f"Sent {sent_logs} of {len(logs)} logs after splitting")


def create_client(
    endpoint: str,
    access_key_id: str,
    access_key_secret: str,
    log_store: str,
    limits: Optional[ShipperLimits] = None,
) -> SlsClient:
    """Create a client from plain connection strings.

    Args:
        endpoint: SLS endpoint host, optionally with http:// or https://
        access_key_id: Access key ID
        access_key_secret: Access key secret
        log_store: Target log store name
        limits: Optional size and timeout limits

    Returns:
        Configured client

    Raises:
        ConfigError: If any connection string is empty
    """
    config = ClientConfig(
        endpoint=endpoint,
        access_key_id=access_key_id,
        access_key_secret=access_key_secret,
        log_store=log_store,
    )
    return SlsClient(config, limits=limits)


def create_client_from_env() -> SlsClient:
    """Create a client from SLS_* environment variables."""
    return SlsClient(ClientConfig.from_env(), limits=ShipperLimits.from_env())
