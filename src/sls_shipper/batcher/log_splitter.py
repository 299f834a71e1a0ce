"""Log splitter for partitioning oversized batches into sendable groups.

Grouping is driven by the estimated size of each log. The estimate is
advisory: callers must still check the encoded length of every group
against the group limit before sending it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from loguru import logger

from ..config.settings import MAX_LOG_GROUP_SIZE, MAX_LOG_ITEM_SIZE
from ..core.records import Log, LogGroup, estimate_log_size

DIAGNOSTIC_PREVIEW_CHARS = 1024


@dataclass
class PendingGroup:
    """A log group that is being built."""

    group: LogGroup = field(default_factory=LogGroup)
    estimated_size: int = 0

    def add_log(self, log: Log, size: int) -> None:
        """Add a log and its estimated size to this group."""
        self.group.add_log(log)
        self.estimated_size += size

    def fits(self, size: int, max_group_size: int) -> bool:
        """Check if a log of the given size can join this group."""
        return self.estimated_size + size <= max_group_size

    def is_empty(self) -> bool:
        return self.group.size() == 0


class LogSplitter:
    """Splits logs into groups that respect item and group size limits."""

    def __init__(self, max_log_item_size: int = MAX_LOG_ITEM_SIZE, max_log_group_size: int = MAX_LOG_GROUP_SIZE):
        """Initialize the splitter.

        Args:
            max_log_item_size: Largest estimated size of a single log, in bytes
            max_log_group_size: Largest estimated size of a group, in bytes
        """
        self.max_log_item_size = max_log_item_size
        self.max_log_group_size = max_log_group_size

    def drop_oversized(self, logs: Sequence[Log]) -> List[Log]:
        """Report and drop logs whose estimate exceeds the item limit.

        Args:
            logs: Logs to check

        Returns:
            The remaining logs in input order
        """
        kept: List[Log] = []
        for log in logs:
            size = estimate_log_size(log)
            if size > self.max_log_item_size:
                logger.warning(f"[HUGE SLS LOG] dropping log of estimated size {size} bytes (limit {self.max_log_item_size}): {repr(log)[:DIAGNOSTIC_PREVIEW_CHARS]}")
                continue
            kept.append(log)
        return kept

    def split(self, logs: Sequence[Log]) -> List[LogGroup]:
        """Partition logs into groups, preserving input order.

        Logs larger than the item limit are reported and dropped. A log that
        does not fit the current group seals it and starts the next one.

        Args:
            logs: Logs to partition

        Returns:
            Non-empty log groups in input order
        """
        groups: List[LogGroup] = []
        pending = PendingGroup()

        for log in self.drop_oversized(logs):
            size = estimate_log_size(log)
            if not pending.is_empty() and not pending.fits(size, self.max_log_group_size):
                groups.append(pending.group)
                logger.debug(f"Sealed log group with {pending.group.size()} logs, estimated {pending.estimated_size} bytes")
                pending = PendingGroup()

            pending.add_log(log, size)

        if not pending.is_empty():
            groups.append(pending.group)

        return groups
