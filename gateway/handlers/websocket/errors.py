"""Error helpers for the websocket frame protocol."""

from __future__ import annotations

import time
import logging
from typing import Any

from gateway.state import FrameKind
from gateway.errors import TransportWriteError
from gateway.config.server import STATUS_FAIL

from .frames import build_frame
from .dispatcher import OutboundDispatcher

logger = logging.getLogger(__name__)


def format_duration(seconds: float) -> str:
    seconds = max(0.0, float(seconds))
    if seconds < 1.0:
        return f"{seconds * 1000:.3f}ms"
    return f"{seconds:.3f}s"


def build_failure_envelope(
    started_at: float,
    msg: str,
    *,
    status: str = STATUS_FAIL,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "status": status,
        "msg": msg,
        "duration": format_duration(time.monotonic() - started_at),
        "data": data or {},
    }


async def safe_send_text(dispatcher: OutboundDispatcher, text: str) -> bool:
    try:
        await dispatcher.send_text(text)
    except TransportWriteError:
        logger.debug("dropping outbound text: connection is gone")
        return False
    return True


async def safe_send_frame(
    dispatcher: OutboundDispatcher,
    kind: FrameKind,
    msg: str,
    *,
    msg_id: str | None = None,
) -> bool:
    try:
        await dispatcher.send_frame(build_frame(kind, msg, msg_id=msg_id))
    except TransportWriteError:
        logger.debug("dropping %s frame: connection is gone", kind.value)
        return False
    return True


async def send_error_frame(dispatcher: OutboundDispatcher, message: str, *, msg_id: str | None = None) -> bool:
    logger.error(message)
    return await safe_send_frame(dispatcher, FrameKind.ERROR, message, msg_id=msg_id)


__all__ = [
    "build_failure_envelope",
    "format_duration",
    "safe_send_frame",
    "safe_send_text",
    "send_error_frame",
]
