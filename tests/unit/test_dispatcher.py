from __future__ import annotations

import asyncio

import pytest

from tests.utils import FakeWebSocket
from gateway.state import FrameKind
from gateway.errors import TransportWriteError
from gateway.handlers.websocket.frames import build_frame
from gateway.handlers.websocket.dispatcher import OutboundDispatcher


@pytest.mark.asyncio
async def test_concurrent_producers_never_interleave() -> None:
    ws = FakeWebSocket(yield_during_send=True)
    dispatcher = OutboundDispatcher(ws)
    dispatcher.start()

    async def produce(prefix: str) -> None:
        for i in range(5):
            await dispatcher.send_text(f"{prefix}{i}")

    await asyncio.gather(produce("a"), produce("b"), produce("c"))
    await dispatcher.close()

    assert len(ws.sent) == 15
    for begin, end in zip(ws.events[::2], ws.events[1::2]):
        assert begin.startswith("begin:")
        assert end == "end:" + begin.removeprefix("begin:")


@pytest.mark.asyncio
async def test_frames_from_one_producer_keep_order() -> None:
    ws = FakeWebSocket()
    dispatcher = OutboundDispatcher(ws)
    for i in range(3):
        await dispatcher.send_frame(build_frame(FrameKind.CHAT, str(i), msg_id="r1"))
    await dispatcher.close()

    assert [frame["msg"] for frame in ws.frames()] == ["0", "1", "2"]


@pytest.mark.asyncio
async def test_write_failure_surfaces_to_caller() -> None:
    ws = FakeWebSocket(fail_after=1)
    dispatcher = OutboundDispatcher(ws)
    await dispatcher.send_text("ok")
    with pytest.raises(TransportWriteError):
        await dispatcher.send_text("boom")
    await dispatcher.close()


@pytest.mark.asyncio
async def test_send_after_close_is_refused() -> None:
    dispatcher = OutboundDispatcher(FakeWebSocket())
    dispatcher.start()
    await dispatcher.close()
    assert dispatcher.closed
    with pytest.raises(TransportWriteError):
        await dispatcher.send_text("late")


@pytest.mark.asyncio
async def test_close_flushes_queued_frames() -> None:
    ws = FakeWebSocket(yield_during_send=True)
    dispatcher = OutboundDispatcher(ws)
    dispatcher.start()
    pending = [asyncio.create_task(dispatcher.send_text(f"m{i}")) for i in range(3)]
    await asyncio.sleep(0)
    await dispatcher.close()
    await asyncio.gather(*pending)
    assert ws.sent == ["m0", "m1", "m2"]
