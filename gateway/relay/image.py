"""One-shot image relay: prompt in, one stored image (or one error) out."""

from __future__ import annotations

import base64
import asyncio
import binascii
import logging
from datetime import date
from collections.abc import Callable

from gateway.state.settings import AssetSettings
from gateway.config.assets import IMAGE_COMMAND_PREFIX
from gateway.upstream.provider import CompletionProvider
from gateway.state import FrameKind, RelayResult, RelayOutcome
from gateway.errors import UpstreamError, TransportWriteError
from gateway.handlers.websocket.dispatcher import OutboundDispatcher

from .emitter import FrameEmitter, RelayCancelledError
from .assets import served_path, write_image, ensure_image_dir

logger = logging.getLogger(__name__)

TodayFn = Callable[[], date]


def strip_image_command(request_text: str) -> str:
    return request_text.removeprefix(IMAGE_COMMAND_PREFIX)


class ImageRelay:
    def __init__(
        self,
        dispatcher: OutboundDispatcher,
        provider: CompletionProvider,
        *,
        request_text: str,
        assets: AssetSettings,
        cancel_event: asyncio.Event | None = None,
        today_fn: TodayFn | None = None,
    ) -> None:
        self._provider = provider
        self._request_text = request_text
        self._assets = assets
        self._today = today_fn or date.today
        self._emitter = FrameEmitter(dispatcher, cancel_event=cancel_event)

    @property
    def relay_id(self) -> str:
        return self._emitter.relay_id

    async def run(self) -> RelayResult:
        try:
            return await self._run()
        except (TransportWriteError, RelayCancelledError) as exc:
            logger.debug("image relay %s aborted: %s", self.relay_id, type(exc).__name__)
            return RelayResult(relay_id=self.relay_id, outcome=RelayOutcome.ABORTED)

    async def _fail(self, message: str) -> RelayResult:
        logger.error(message)
        await self._emitter.emit(FrameKind.ERROR, message)
        return RelayResult(relay_id=self.relay_id, outcome=RelayOutcome.ERROR)

    async def _run(self) -> RelayResult:
        prompt = strip_image_command(self._request_text)
        try:
            result = await self._provider.generate_image(prompt=prompt, size=self._assets.image_size)
        except UpstreamError as exc:
            return await self._fail(f"[ERROR] generate image error: {exc}")
        if not result.b64_images or not result.b64_images[0]:
            return await self._fail("[ERROR] generate image error: result is empty")

        try:
            data = base64.b64decode(result.b64_images[0], validate=True)
        except (binascii.Error, ValueError) as exc:
            return await self._fail(f"[ERROR] image base64 decode error: {exc}")

        try:
            image_dir = await asyncio.to_thread(ensure_image_dir, self._assets, self._today())
        except OSError as exc:
            return await self._fail(f"[ERROR] create image directory error: {exc}")

        try:
            path = await asyncio.to_thread(write_image, image_dir, data)
        except OSError as exc:
            return await self._fail(f"[ERROR] write png image error: {exc}")

        url = served_path(self._assets, path)
        await self._emitter.emit(FrameKind.IMAGE, url)
        logger.info("[IMAGE] # %s\n%s", self._request_text, url)
        return RelayResult(relay_id=self.relay_id, outcome=RelayOutcome.IMAGE)


async def relay_image(
    dispatcher: OutboundDispatcher,
    provider: CompletionProvider,
    *,
    request_text: str,
    assets: AssetSettings,
    cancel_event: asyncio.Event | None = None,
    today_fn: TodayFn | None = None,
) -> RelayResult:
    relay = ImageRelay(
        dispatcher,
        provider,
        request_text=request_text,
        assets=assets,
        cancel_event=cancel_event,
        today_fn=today_fn,
    )
    return await relay.run()


__all__ = ["ImageRelay", "relay_image", "strip_image_command"]
