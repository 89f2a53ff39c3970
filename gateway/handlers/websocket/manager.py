"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import uuid
import asyncio
import logging
import contextlib
from functools import partial

from fastapi import WebSocket

from gateway.state import RuntimeDeps, SessionState
from gateway.handlers.limits import RequestIntervalLimiter

from .relays import RelayTracker
from .keepalive import KeepaliveMonitor
from .dispatcher import OutboundDispatcher
from .message_loop import run_message_loop, refresh_read_deadline

logger = logging.getLogger(__name__)


def _create_rate_limiter(runtime_deps: RuntimeDeps) -> RequestIntervalLimiter:
    return RequestIntervalLimiter(interval_seconds=runtime_deps.settings.limits.interval_seconds)


async def _watch_keepalive(monitor: KeepaliveMonitor, state: SessionState) -> None:
    await monitor.wait_stopped()
    state.closed = True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    try:
        await ws.accept()
    except Exception as exc:
        logger.error("[ERROR] failed to upgrade websocket: %s", exc)
        return

    ws_settings = runtime_deps.settings.websocket
    state = SessionState(session_id=str(uuid.uuid4()))
    refresh_read_deadline(state, ws_settings.ping_wait_s)

    dispatcher = OutboundDispatcher(ws)
    dispatcher.start()
    monitor = KeepaliveMonitor(
        ws,
        dispatcher,
        ping_period_s=ws_settings.ping_period_s,
        write_wait_s=ws_settings.write_wait_s,
        on_probe=partial(refresh_read_deadline, state, ws_settings.ping_wait_s),
    )
    monitor.start()
    watcher = asyncio.create_task(_watch_keepalive(monitor, state))
    relays = RelayTracker()

    logger.info("websocket session opened session_id=%s", state.session_id)
    try:
        await run_message_loop(ws, state, dispatcher, _create_rate_limiter(runtime_deps), relays, runtime_deps)
    finally:
        state.closed = True
        if ws_settings.cancel_relays_on_close:
            relays.cancel_all()
        await dispatcher.close()
        await monitor.stop()
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher
        logger.info(
            "websocket session closed session_id=%s keepalive_failed=%s pending_relays=%d",
            state.session_id,
            monitor.probe_failed,
            relays.pending,
        )


__all__ = ["handle_websocket_connection"]
