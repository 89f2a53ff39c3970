"""Single-writer outbound path for one websocket connection."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from gateway.state import Frame
from gateway.errors import TransportWriteError
from gateway.config.websocket import WS_DISPATCHER_CLOSE_TIMEOUT_S

from .frames import encode_frame

logger = logging.getLogger(__name__)

_Outbound = tuple[str, "asyncio.Future[None]"]


class OutboundDispatcher:
    """Owns every write on a connection.

    Producers (keepalive probes, acknowledgements, relays) submit one text
    frame at a time and await the outcome of that write. A background writer
    task performs the writes strictly one after another, so frames from
    concurrent producers never interleave and no producer holds the
    connection across more than one frame.
    """

    def __init__(self, websocket: Any) -> None:
        self._ws = websocket
        self._queue: asyncio.Queue[_Outbound | None] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._writer_loop())
        return self._task

    async def send_text(self, text: str, *, timeout: float | None = None) -> None:
        """Write one text frame; raises TransportWriteError (or TimeoutError past `timeout`)."""
        if self._closed:
            raise TransportWriteError("connection closed")
        self.start()
        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._queue.put_nowait((text, future))
        if timeout is None:
            await future
            return
        await asyncio.wait_for(future, timeout=timeout)

    async def send_frame(self, frame: Frame, *, timeout: float | None = None) -> None:
        await self.send_text(encode_frame(frame), timeout=timeout)

    async def _writer_loop(self) -> None:
        while True:
            item = await self._queue.get()
            if item is None:
                return
            text, future = item
            # Abandoned by its producer (timed out or cancelled) before we got to it.
            if future.done():
                continue
            try:
                await self._ws.send_text(text)
            except asyncio.CancelledError:
                if not future.done():
                    future.set_exception(TransportWriteError("connection closed"))
                raise
            except Exception as exc:
                logger.debug("websocket write failed", exc_info=True)
                if not future.done():
                    future.set_exception(TransportWriteError(str(exc) or type(exc).__name__))
                continue
            if not future.done():
                future.set_result(None)

    def _fail_pending(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            if item is None:
                continue
            _text, future = item
            if not future.done():
                future.set_exception(TransportWriteError("connection closed"))

    async def close(self, *, timeout_s: float = WS_DISPATCHER_CLOSE_TIMEOUT_S) -> None:
        """Flush already-queued frames, then refuse new ones."""
        if self._closed:
            return
        self._closed = True
        task = self._task
        if task is None:
            return
        self._queue.put_nowait(None)
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=timeout_s)
        except TimeoutError:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError, Exception):
                await task
        finally:
            self._fail_pending()
            self._task = None


__all__ = ["OutboundDispatcher"]
