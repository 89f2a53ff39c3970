"""Helpers for waiting on detached relay tasks."""

from __future__ import annotations

import time
import asyncio

from gateway.handlers.websocket.relays import RelayTracker


async def wait_for_relays(tracker: RelayTracker, timeout_s: float = 1.0) -> None:
    deadline = time.monotonic() + timeout_s
    while tracker.pending:
        if time.monotonic() >= deadline:
            raise TimeoutError(f"{tracker.pending} relay(s) still running")
        await asyncio.sleep(0.005)


__all__ = ["wait_for_relays"]
