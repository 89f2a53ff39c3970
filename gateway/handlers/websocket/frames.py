"""Frame construction and encoding for the client protocol."""

from __future__ import annotations

import uuid
from datetime import datetime

import orjson

from gateway.state import Frame, FrameKind
from gateway.config.websocket import (
    WS_KEY_MSG,
    WS_KEY_KIND,
    WS_KEY_MSG_ID,
    WS_CONTROL_PING,
    WS_CONTROL_PONG,
    WS_KEY_CREATE_TIME,
    WS_CREATE_TIME_FORMAT,
)


def new_msg_id() -> str:
    return str(uuid.uuid4())


def format_create_time(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime(WS_CREATE_TIME_FORMAT)


def build_frame(
    kind: FrameKind,
    msg: str,
    *,
    msg_id: str | None = None,
    now: datetime | None = None,
) -> Frame:
    return Frame(kind=kind, msg=msg, msg_id=msg_id or new_msg_id(), create_time=format_create_time(now))


def frame_to_dict(frame: Frame) -> dict[str, str]:
    return {
        WS_KEY_MSG: frame.msg,
        WS_KEY_MSG_ID: frame.msg_id,
        WS_KEY_KIND: frame.kind.value,
        WS_KEY_CREATE_TIME: frame.create_time,
    }


def encode_frame(frame: Frame) -> str:
    return orjson.dumps(frame_to_dict(frame)).decode("utf-8")


def encode_control(kind: str) -> str:
    return orjson.dumps({WS_KEY_KIND: kind}).decode("utf-8")


PROBE_TEXT = encode_control(WS_CONTROL_PING)
PONG_TEXT = encode_control(WS_CONTROL_PONG)

__all__ = [
    "PONG_TEXT",
    "PROBE_TEXT",
    "build_frame",
    "encode_control",
    "encode_frame",
    "format_create_time",
    "frame_to_dict",
    "new_msg_id",
]
