"""Per-connection keepalive: periodic liveness probes and connection teardown."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from gateway.errors import TransportWriteError
from gateway.config.websocket import (
    WS_PING_PERIOD_S,
    WS_WRITE_WAIT_S,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_KEEPALIVE_CODE,
    WS_CLOSE_NORMAL_REASON,
    WS_CLOSE_KEEPALIVE_REASON,
    WS_KEEPALIVE_STOP_TIMEOUT_S,
)

from .frames import PROBE_TEXT
from .dispatcher import OutboundDispatcher

logger = logging.getLogger(__name__)


class KeepaliveMonitor:
    """Sends a probe every `ping_period_s` and owns closing the connection.

    Each probe that is written calls `on_probe`, which the session uses to
    extend its read deadline; peer liveness itself is checked by the
    server's protocol-level ping/pong, whose failure arrives as a disconnect.

    The monitor stops either because a probe could not be written or because
    `stop()` asked it to. Either way it closes the websocket exactly once and
    then sets the `stopped` acknowledgement that the session watches.
    """

    def __init__(
        self,
        websocket: Any,
        dispatcher: OutboundDispatcher,
        *,
        ping_period_s: float | None = None,
        write_wait_s: float | None = None,
        on_probe: Callable[[], None] | None = None,
    ) -> None:
        self._ws = websocket
        self._dispatcher = dispatcher
        self._ping_period_s = float(WS_PING_PERIOD_S if ping_period_s is None else ping_period_s)
        self._write_wait_s = float(WS_WRITE_WAIT_S if write_wait_s is None else write_wait_s)
        self._on_probe = on_probe
        self._stop_event = asyncio.Event()
        self._stopped = asyncio.Event()
        self._connection_closed = False
        self._probe_failed = False
        self._task: asyncio.Task | None = None

    @property
    def probe_failed(self) -> bool:
        return self._probe_failed

    def is_stopped(self) -> bool:
        return self._stopped.is_set()

    async def wait_stopped(self) -> None:
        await self._stopped.wait()

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self._probe_loop())
        return self._task

    async def stop(self, *, timeout_s: float = WS_KEEPALIVE_STOP_TIMEOUT_S) -> None:
        """Signal shutdown and wait for the monitor to acknowledge it."""
        self._stop_event.set()
        task = self._task
        if task is None:
            await self._close_connection(WS_CLOSE_NORMAL_CODE, WS_CLOSE_NORMAL_REASON)
            self._stopped.set()
            return
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._stopped.wait(), timeout=timeout_s)
        if not task.done():
            task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task
        self._task = None

    async def _close_connection(self, code: int, reason: str) -> None:
        if self._connection_closed:
            return
        self._connection_closed = True
        with contextlib.suppress(Exception):
            await self._ws.close(code=code, reason=reason)

    async def _probe_loop(self) -> None:
        code, reason = WS_CLOSE_NORMAL_CODE, WS_CLOSE_NORMAL_REASON
        try:
            while not self._stop_event.is_set():
                with contextlib.suppress(TimeoutError):
                    await asyncio.wait_for(self._stop_event.wait(), timeout=self._ping_period_s)
                if self._stop_event.is_set():
                    logger.info("# websocket connection closed")
                    break
                try:
                    await self._dispatcher.send_text(PROBE_TEXT, timeout=self._write_wait_s)
                except (TransportWriteError, TimeoutError) as exc:
                    logger.info("keepalive probe failed (%s); closing connection", exc or type(exc).__name__)
                    self._probe_failed = True
                    code, reason = WS_CLOSE_KEEPALIVE_CODE, WS_CLOSE_KEEPALIVE_REASON
                    break
                if self._on_probe is not None:
                    self._on_probe()
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("keepalive monitor exiting due to unexpected error", exc_info=True)
        finally:
            await self._close_connection(code, reason)
            self._stopped.set()


__all__ = ["KeepaliveMonitor"]
