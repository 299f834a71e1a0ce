"""Log record models for the SLS log shipper.

Records flow through the shipper as: Producer → Log → Splitter → LogGroup → Sender → SLS
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

LOG_OVERHEAD_BYTES = 4  # Per-log framing allowance
CONTENT_OVERHEAD_BYTES = 8  # Per key/value framing allowance


def _byte_length(text: Optional[str]) -> int:
    if text is None:
        return 0
    return len(text.encode("utf-8"))


@dataclass(frozen=True)
class LogContent:
    """A single key/value field of a log."""

    key: str
    value: str


@dataclass
class Log:
    """A timestamped list of key/value fields."""

    time: int
    contents: List[LogContent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, fields: Mapping[str, Any], time_: Optional[int] = None) -> Log:
        """Build a log from a mapping, keeping the mapping's order.

        Args:
            fields: Field names and values; values are converted with str()
            time_: Unix seconds, defaults to now

        Returns:
            A new Log
        """
        contents = [LogContent(key=str(key), value=str(value)) for key, value in fields.items()]
        return cls(time=int(time.time()) if time_ is None else time_, contents=contents)


def estimate_log_size(log: Log) -> int:
    """Estimate the encoded size of a log without encoding it."""
    size = LOG_OVERHEAD_BYTES
    for content in log.contents:
        size += _byte_length(content.key) + _byte_length(content.value) + CONTENT_OVERHEAD_BYTES
    return size


@dataclass
class LogGroup:
    """A batch of logs sent to SLS in one request."""

    logs: List[Log] = field(default_factory=list)

    def add_log(self, log: Log) -> None:
        """Add a log to this group."""
        self.logs.append(log)

    def size(self) -> int:
        """Return the number of logs in this group."""
        return len(self.logs)

    def estimated_size(self) -> int:
        """Return the sum of the estimated sizes of all logs."""
        return sum(estimate_log_size(log) for log in self.logs)
