from __future__ import annotations

import base64
from datetime import date

import pytest

from gateway.relay import relay_image
from gateway.state import RelayOutcome
from tests.utils import FakeProvider, FakeWebSocket, make_settings
from gateway.handlers.websocket.dispatcher import OutboundDispatcher

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")


async def _run(provider: FakeProvider, assets_dir, request_text: str = "/image a red fox"):
    ws = FakeWebSocket()
    dispatcher = OutboundDispatcher(ws)
    result = await relay_image(
        dispatcher,
        provider,
        request_text=request_text,
        assets=make_settings(assets_dir).assets,
        today_fn=lambda: date(2024, 3, 5),
    )
    await dispatcher.close()
    return result, ws.frames()


@pytest.mark.asyncio
async def test_image_is_stored_and_announced(tmp_path) -> None:
    provider = FakeProvider(images=[PNG_B64])
    result, frames = await _run(provider, tmp_path)

    assert provider.image_calls == [{"prompt": "a red fox", "size": "256x256"}]
    assert result.outcome is RelayOutcome.IMAGE
    assert len(frames) == 1
    frame = frames[0]
    assert frame["kind"] == "image"
    assert frame["msgId"] == result.relay_id
    assert frame["msg"].startswith("api/assets/images/2024-03-05/")
    assert frame["msg"].endswith(".png")

    name = frame["msg"].rsplit("/", 1)[-1].removesuffix(".png")
    assert len(name) == 16
    assert name.isalnum() and name == name.lower()

    stored = tmp_path / "images" / "2024-03-05" / f"{name}.png"
    assert stored.read_bytes() == PNG_BYTES
    assert stored.stat().st_mode & 0o777 == 0o600
    assert stored.parent.stat().st_mode & 0o777 == 0o700


@pytest.mark.asyncio
async def test_image_request_failure(tmp_path) -> None:
    result, frames = await _run(FakeProvider(image_error="billing hard limit"), tmp_path)
    assert [(f["kind"], f["msg"]) for f in frames] == [("error", "[ERROR] generate image error: billing hard limit")]
    assert result.outcome is RelayOutcome.ERROR


@pytest.mark.asyncio
async def test_empty_image_result(tmp_path) -> None:
    _result, frames = await _run(FakeProvider(images=[]), tmp_path)
    assert frames[0]["msg"] == "[ERROR] generate image error: result is empty"


@pytest.mark.asyncio
async def test_undecodable_image(tmp_path) -> None:
    _result, frames = await _run(FakeProvider(images=["not base64!!"]), tmp_path)
    assert frames[0]["kind"] == "error"
    assert frames[0]["msg"].startswith("[ERROR] image base64 decode error")
    assert not (tmp_path / "images").exists()


@pytest.mark.asyncio
async def test_image_directory_failure(tmp_path) -> None:
    blocker = tmp_path / "assets"
    blocker.write_text("not a directory")
    _result, frames = await _run(FakeProvider(images=[PNG_B64]), blocker)
    assert frames[0]["kind"] == "error"
    assert frames[0]["msg"].startswith("[ERROR] create image directory error")
