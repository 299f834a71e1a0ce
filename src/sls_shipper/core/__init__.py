"""Core log record models and wire format."""

from .records import Log, LogContent, LogGroup, estimate_log_size
from .wire import CONTENT_TYPE, decode_log_group, encode_log_group

__all__ = [
    # Records
    "Log",
    "LogContent",
    "LogGroup",
    "estimate_log_size",
    # Wire format
    "CONTENT_TYPE",
    "encode_log_group",
    "decode_log_group",
]
