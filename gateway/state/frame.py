"""Client-visible frames and inbound message kinds (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class FrameKind(str, Enum):
    RECEIVE = "receive"
    CHAT = "chat"
    ERROR = "error"
    RETRY = "retry"
    IMAGE = "image"


@dataclass(frozen=True, slots=True)
class Frame:
    kind: FrameKind
    msg: str
    msg_id: str
    create_time: str


class InboundKind(str, Enum):
    TEXT = "text"
    CLOSE = "close"
    PING = "ping"
    PONG = "pong"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class InboundMessage:
    kind: InboundKind
    text: str = ""


__all__ = ["Frame", "FrameKind", "InboundKind", "InboundMessage"]
