"""Classification of raw ASGI websocket messages."""

from __future__ import annotations

from typing import Any
from collections.abc import Mapping

import orjson

from gateway.state import InboundKind, InboundMessage
from gateway.config.websocket import (
    WS_KEY_KIND,
    WS_CONTROL_PING,
    WS_CONTROL_PONG,
    WS_CONTROL_CLOSE,
    WS_CONTROL_KINDS,
)

_CONTROL_TO_KIND = {
    WS_CONTROL_PING: InboundKind.PING,
    WS_CONTROL_PONG: InboundKind.PONG,
    WS_CONTROL_CLOSE: InboundKind.CLOSE,
}


def _parse_control(text: str) -> InboundKind | None:
    stripped = text.strip()
    if not stripped.startswith("{"):
        return None
    try:
        doc = orjson.loads(stripped)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(doc, dict) or set(doc) != {WS_KEY_KIND}:
        return None
    kind = doc[WS_KEY_KIND]
    if not isinstance(kind, str) or kind not in WS_CONTROL_KINDS:
        return None
    return _CONTROL_TO_KIND[kind]


def parse_inbound(message: Mapping[str, Any]) -> InboundMessage:
    msg_type = message.get("type")
    if msg_type == "websocket.disconnect":
        return InboundMessage(kind=InboundKind.CLOSE)
    if msg_type != "websocket.receive":
        return InboundMessage(kind=InboundKind.UNSUPPORTED)

    text = message.get("text")
    if text is None:
        # Binary frames are not part of the protocol.
        return InboundMessage(kind=InboundKind.UNSUPPORTED)

    control = _parse_control(text)
    if control is not None:
        return InboundMessage(kind=control)
    return InboundMessage(kind=InboundKind.TEXT, text=text)


__all__ = ["parse_inbound"]
