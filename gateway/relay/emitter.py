"""Frame emission shared by the relays."""

from __future__ import annotations

import asyncio

from gateway.state import FrameKind
from gateway.handlers.websocket.frames import build_frame, new_msg_id
from gateway.handlers.websocket.dispatcher import OutboundDispatcher


class RelayCancelledError(Exception):
    """The session asked outstanding relays to stop before their next write."""


class FrameEmitter:
    """Writes one relay's frames, all tagged with the relay's id."""

    def __init__(
        self,
        dispatcher: OutboundDispatcher,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._relay_id = new_msg_id()
        self._cancel_event = cancel_event

    @property
    def relay_id(self) -> str:
        return self._relay_id

    async def emit(self, kind: FrameKind, msg: str) -> None:
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise RelayCancelledError(self._relay_id)
        await self._dispatcher.send_frame(build_frame(kind, msg, msg_id=self._relay_id))


__all__ = ["FrameEmitter", "RelayCancelledError"]
