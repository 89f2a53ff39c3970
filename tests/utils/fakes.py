"""In-memory stand-ins for the websocket and the completion provider."""

from __future__ import annotations

import asyncio
from typing import Any
from collections.abc import Sequence, AsyncGenerator

import orjson

from gateway.upstream import Increment, ImageResult
from gateway.state import ChatTurn, SamplingParams
from gateway.errors import UpstreamStreamError, UpstreamEstablishError


class FakeWebSocket:
    """Records outbound text; optionally fails or yields mid-write."""

    def __init__(self, *, fail_after: int | None = None, yield_during_send: bool = False) -> None:
        self.sent: list[str] = []
        self.events: list[str] = []
        self.closed = asyncio.Event()
        self.close_calls = 0
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self._fail_after = fail_after
        self._yield_during_send = yield_during_send

    async def send_text(self, text: str) -> None:
        if self._fail_after is not None and len(self.sent) >= self._fail_after:
            raise RuntimeError("connection reset by peer")
        self.events.append(f"begin:{text}")
        if self._yield_during_send:
            await asyncio.sleep(0)
        self.events.append(f"end:{text}")
        self.sent.append(text)

    async def close(self, *, code: int = 1000, reason: str | None = None) -> None:
        self.close_calls += 1
        self.close_code = code
        self.close_reason = reason or ""
        self.closed.set()

    def frames(self) -> list[dict[str, Any]]:
        return [orjson.loads(text) for text in self.sent]


class FakeProvider:
    """Scripted provider; every call is recorded for assertions."""

    def __init__(
        self,
        *,
        increments: Sequence[Increment] = (),
        establish_error: str | None = None,
        stream_error: str | None = None,
        images: Sequence[str] = (),
        image_error: str | None = None,
    ) -> None:
        self.increments = list(increments)
        self.establish_error = establish_error
        self.stream_error = stream_error
        self.images = tuple(images)
        self.image_error = image_error
        self.chat_calls: list[dict[str, Any]] = []
        self.completion_calls: list[dict[str, Any]] = []
        self.image_calls: list[dict[str, Any]] = []
        self.closed = False

    async def _stream(self) -> AsyncGenerator[Increment, None]:
        for increment in self.increments:
            await asyncio.sleep(0)
            yield increment
        if self.stream_error is not None:
            raise UpstreamStreamError(self.stream_error)

    async def open_chat_stream(
        self,
        *,
        model: str,
        messages: Sequence[ChatTurn],
        max_tokens: int,
        sampling: SamplingParams,
    ) -> AsyncGenerator[Increment, None]:
        self.chat_calls.append(
            {"model": model, "messages": list(messages), "max_tokens": max_tokens, "sampling": sampling}
        )
        if self.establish_error is not None:
            raise UpstreamEstablishError(self.establish_error)
        return self._stream()

    async def open_completion_stream(
        self,
        *,
        model: str,
        prompt: str,
        max_tokens: int,
        sampling: SamplingParams,
    ) -> AsyncGenerator[Increment, None]:
        self.completion_calls.append({"model": model, "prompt": prompt, "max_tokens": max_tokens, "sampling": sampling})
        if self.establish_error is not None:
            raise UpstreamEstablishError(self.establish_error)
        return self._stream()

    async def generate_image(self, *, prompt: str, size: str) -> ImageResult:
        self.image_calls.append({"prompt": prompt, "size": size})
        if self.image_error is not None:
            raise UpstreamEstablishError(self.image_error)
        return ImageResult(b64_images=self.images)

    async def aclose(self) -> None:
        self.closed = True


__all__ = ["FakeProvider", "FakeWebSocket"]
