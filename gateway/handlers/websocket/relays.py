"""Bookkeeping for relay tasks spawned by one session."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections import deque
from collections.abc import Coroutine

from gateway.state import ChatTurn, RelayResult, RelayOutcome

logger = logging.getLogger(__name__)

_ChatEntry = tuple[ChatTurn, "asyncio.Task[RelayResult]"]


class RelayTracker:
    """Holds strong references to in-flight relays and collects finished chat replies.

    Relays run detached from the read loop. Chat relays are also queued in
    spawn order, paired with the user turn that started them, so the read
    loop (the only writer of history) can place each reply after its prompt.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[RelayResult]] = set()
        self._chat_order: deque[_ChatEntry] = deque()
        self.cancel_event = asyncio.Event()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def spawn(
        self,
        coro: Coroutine[Any, Any, RelayResult],
        *,
        prompt_turn: ChatTurn | None = None,
    ) -> asyncio.Task[RelayResult]:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        if prompt_turn is not None:
            self._chat_order.append((prompt_turn, task))
        return task

    def _on_done(self, task: asyncio.Task[RelayResult]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("relay task failed", exc_info=exc)

    def harvest(self) -> list[tuple[ChatTurn, str]]:
        """(prompt turn, reply) for chat relays that ended normally, oldest first.

        Stops at the first chat relay still running so replies are never
        reordered relative to each other.
        """
        replies: list[tuple[ChatTurn, str]] = []
        while self._chat_order and self._chat_order[0][1].done():
            turn, task = self._chat_order.popleft()
            if task.cancelled() or task.exception() is not None:
                continue
            result = task.result()
            if result.outcome is RelayOutcome.END and result.reply:
                replies.append((turn, result.reply))
        return replies

    def cancel_all(self) -> None:
        """Ask every outstanding relay to stop before its next write."""
        self.cancel_event.set()


__all__ = ["RelayTracker"]
