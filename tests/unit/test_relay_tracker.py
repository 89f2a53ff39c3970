from __future__ import annotations

import asyncio

import pytest

from tests.utils import wait_for_relays
from gateway.handlers.websocket.relays import RelayTracker
from gateway.state import ChatRole, ChatTurn, RelayResult, RelayOutcome


async def _finish(gate: asyncio.Event, result: RelayResult) -> RelayResult:
    await gate.wait()
    return result


def _turn(text: str) -> ChatTurn:
    return ChatTurn(role=ChatRole.USER, content=text)


@pytest.mark.asyncio
async def test_harvest_returns_finished_replies_in_spawn_order() -> None:
    tracker = RelayTracker()
    first_gate, second_gate = asyncio.Event(), asyncio.Event()
    first_turn, second_turn = _turn("one?"), _turn("two?")
    tracker.spawn(_finish(first_gate, RelayResult("r1", RelayOutcome.END, "one")), prompt_turn=first_turn)
    tracker.spawn(_finish(second_gate, RelayResult("r2", RelayOutcome.END, "two")), prompt_turn=second_turn)

    second_gate.set()
    await asyncio.sleep(0.01)
    # r1 still running: r2 must wait behind it.
    assert tracker.harvest() == []

    first_gate.set()
    await wait_for_relays(tracker)
    harvested = tracker.harvest()
    assert [reply for _prompt, reply in harvested] == ["one", "two"]
    assert harvested[0][0] is first_turn
    assert harvested[1][0] is second_turn
    assert tracker.harvest() == []
    assert tracker.pending == 0


@pytest.mark.asyncio
async def test_harvest_skips_unfinished_outcomes() -> None:
    tracker = RelayTracker()
    gate = asyncio.Event()
    gate.set()
    tracker.spawn(_finish(gate, RelayResult("r1", RelayOutcome.RETRY)), prompt_turn=_turn("a?"))
    tracker.spawn(_finish(gate, RelayResult("r2", RelayOutcome.ABORTED, "partial")), prompt_turn=_turn("b?"))
    tracker.spawn(_finish(gate, RelayResult("r3", RelayOutcome.IMAGE)))
    await wait_for_relays(tracker)
    assert tracker.harvest() == []


@pytest.mark.asyncio
async def test_cancel_all_sets_shared_event() -> None:
    tracker = RelayTracker()
    assert not tracker.cancel_event.is_set()
    tracker.cancel_all()
    assert tracker.cancel_event.is_set()
