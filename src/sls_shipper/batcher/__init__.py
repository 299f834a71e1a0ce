"""Log batching module for size-bounded transmission."""

from .log_splitter import LogSplitter, PendingGroup

__all__ = ["LogSplitter", "PendingGroup"]
