"""Streaming completion relay: one request in, an ordered run of frames out."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from collections.abc import Sequence, AsyncGenerator

from gateway.upstream.provider import Increment, CompletionProvider
from gateway.errors import TransportWriteError, UpstreamStreamError, UpstreamEstablishError
from gateway.state import (
    ChatTurn,
    FrameKind,
    ModelFamily,
    RelayResult,
    ModelProfile,
    RelayOutcome,
)
from gateway.handlers.websocket.dispatcher import OutboundDispatcher

from .emitter import FrameEmitter, RelayCancelledError

logger = logging.getLogger(__name__)

END_OF_REPLY = "\n\n###### [END] ######"
NO_RESPONSE_MESSAGE = "[ERROR] NO RESPONSE, PLEASE RETRY"


def prompt_header(prompt: str) -> str:
    return f"# {prompt}\n\n"


class CompletionRelay:
    """Drive one completion request and translate its stream into frames.

    Start -> Streaming -> {End, Retry, Error}. Every frame carries the same
    relay id. A failed write (connection gone) or a cancellation request ends
    the relay quietly with an ABORTED result.
    """

    def __init__(
        self,
        dispatcher: OutboundDispatcher,
        provider: CompletionProvider,
        *,
        profile: ModelProfile,
        history: Sequence[ChatTurn],
        max_tokens: int,
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        if not history:
            raise ValueError("completion relay needs at least one turn")
        self._provider = provider
        self._profile = profile
        self._history = tuple(history)
        self._max_tokens = int(max_tokens)
        self._emitter = FrameEmitter(dispatcher, cancel_event=cancel_event)
        self._increments = 0
        self._reply_parts: list[str] = []

    @property
    def relay_id(self) -> str:
        return self._emitter.relay_id

    @property
    def prompt(self) -> str:
        return self._history[-1].content

    def _result(self, outcome: RelayOutcome) -> RelayResult:
        return RelayResult(relay_id=self.relay_id, outcome=outcome, reply="".join(self._reply_parts))

    async def _open_stream(self) -> AsyncGenerator[Increment, None]:
        if self._profile.family is ModelFamily.CHAT:
            return await self._provider.open_chat_stream(
                model=self._profile.model_id,
                messages=self._history,
                max_tokens=self._max_tokens,
                sampling=self._profile.sampling,
            )
        return await self._provider.open_completion_stream(
            model=self._profile.model_id,
            prompt=self.prompt,
            max_tokens=self._max_tokens,
            sampling=self._profile.sampling,
        )

    async def run(self) -> RelayResult:
        try:
            return await self._run()
        except (TransportWriteError, RelayCancelledError) as exc:
            logger.debug("relay %s aborted: %s", self.relay_id, type(exc).__name__)
            return self._result(RelayOutcome.ABORTED)

    async def _run(self) -> RelayResult:
        try:
            stream = await self._open_stream()
        except UpstreamEstablishError as exc:
            message = f"[ERROR] create ChatGPT stream model={self._profile.model_id} error: {exc}"
            logger.error(message)
            await self._emitter.emit(FrameKind.ERROR, message)
            return self._result(RelayOutcome.ERROR)

        logged_parts: list[str] = []
        try:
            async with contextlib.aclosing(stream):
                async for increment in stream:
                    content = "".join(increment)
                    # Role-only and empty chunks carry no text.
                    if not content:
                        continue
                    text = content
                    if self._increments == 0:
                        text = prompt_header(self.prompt) + content
                    self._increments += 1
                    self._reply_parts.append(content)
                    logged_parts.append(text)
                    await self._emitter.emit(FrameKind.CHAT, text)
        except UpstreamStreamError as exc:
            await self._emitter.emit(FrameKind.ERROR, f"[ERROR] {exc}")
            return self._result(RelayOutcome.ERROR)
        finally:
            if logged_parts:
                logger.info("[RESPONSE] %s\n", "".join(logged_parts))

        if self._increments == 0:
            logger.error(NO_RESPONSE_MESSAGE)
            await self._emitter.emit(FrameKind.RETRY, NO_RESPONSE_MESSAGE)
            return self._result(RelayOutcome.RETRY)

        await self._emitter.emit(FrameKind.CHAT, END_OF_REPLY)
        return self._result(RelayOutcome.END)


async def relay_completion(
    dispatcher: OutboundDispatcher,
    provider: CompletionProvider,
    *,
    profile: ModelProfile,
    history: Sequence[ChatTurn],
    max_tokens: int,
    cancel_event: asyncio.Event | None = None,
) -> RelayResult:
    relay = CompletionRelay(
        dispatcher,
        provider,
        profile=profile,
        history=history,
        max_tokens=max_tokens,
        cancel_event=cancel_event,
    )
    return await relay.run()


__all__ = [
    "END_OF_REPLY",
    "NO_RESPONSE_MESSAGE",
    "CompletionRelay",
    "prompt_header",
    "relay_completion",
]
