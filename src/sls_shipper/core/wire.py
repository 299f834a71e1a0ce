"""Protobuf wire format for SLS log groups.

The message classes are built at import time from a descriptor equivalent to:

    syntax = "proto2";
    package sls;
    message LogContent { required string Key = 1; required string Value = 2; }
    message Log { required uint32 Time = 1; repeated LogContent Contents = 2; }
    message LogGroup { repeated Log Logs = 1; }
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import DecodeError, EncodeError

from ..exceptions import SerializationError
from .records import Log, LogContent, LogGroup

CONTENT_TYPE = "application/x-protobuf"


def _build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    field_proto = descriptor_pb2.FieldDescriptorProto
    file_proto = descriptor_pb2.FileDescriptorProto(name="sls_logs.proto", package="sls", syntax="proto2")

    content = file_proto.message_type.add(name="LogContent")
    content.field.add(name="Key", number=1, label=field_proto.LABEL_REQUIRED, type=field_proto.TYPE_STRING)
    content.field.add(name="Value", number=2, label=field_proto.LABEL_REQUIRED, type=field_proto.TYPE_STRING)

    log = file_proto.message_type.add(name="Log")
    log.field.add(name="Time", number=1, label=field_proto.LABEL_REQUIRED, type=field_proto.TYPE_UINT32)
    log.field.add(name="Contents", number=2, label=field_proto.LABEL_REPEATED, type=field_proto.TYPE_MESSAGE, type_name=".sls.LogContent")

    group = file_proto.message_type.add(name="LogGroup")
    group.field.add(name="Logs", number=1, label=field_proto.LABEL_REPEATED, type=field_proto.TYPE_MESSAGE, type_name=".sls.Log")

    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file_descriptor().SerializeToString())
LogGroupMessage = message_factory.GetMessageClass(_pool.FindMessageTypeByName("sls.LogGroup"))


def encode_log_group(group: LogGroup) -> bytes:
    """Encode a log group to protobuf bytes.

    Args:
        group: Log group to encode

    Returns:
        Encoded payload

    Raises:
        SerializationError: If a field is missing or out of range
    """
    message = LogGroupMessage()
    try:
        for log in group.logs:
            log_message = message.Logs.add()
            log_message.Time = log.time
            for content in log.contents:
                if content.key is None or content.value is None:
                    raise SerializationError(f"log content must have both key and value, got {content!r}")
                log_message.Contents.add(Key=content.key, Value=content.value)
        return message.SerializeToString()
    except (EncodeError, TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e


def decode_log_group(payload: bytes) -> LogGroup:
    """Decode protobuf bytes back into a log group."""
    message = LogGroupMessage()
    try:
        message.ParseFromString(payload)
    except DecodeError as e:
        raise SerializationError(str(e)) from e

    return LogGroup(
        logs=[
            Log(time=log_message.Time, contents=[LogContent(key=content.Key, value=content.Value) for content in log_message.Contents])
            for log_message in message.Logs
        ]
    )
