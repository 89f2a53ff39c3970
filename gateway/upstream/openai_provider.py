"""OpenAI-backed implementation of the provider capabilities."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Sequence, AsyncGenerator

import httpx
from openai import AsyncOpenAI, OpenAIError

from gateway.config.models import IMAGE_MODEL_ID
from gateway.state import ChatTurn, SamplingParams
from gateway.state.settings import ProviderSettings
from gateway.errors import UpstreamStreamError, UpstreamEstablishError

from .provider import Increment, ImageResult

logger = logging.getLogger(__name__)


def _sampling_kwargs(sampling: SamplingParams) -> dict[str, float]:
    return {
        "temperature": sampling.temperature,
        "top_p": sampling.top_p,
        "frequency_penalty": sampling.frequency_penalty,
        "presence_penalty": sampling.presence_penalty,
    }


async def _iter_chat_chunks(stream: Any) -> AsyncGenerator[Increment, None]:
    try:
        async for chunk in stream:
            yield tuple((choice.delta.content or "") for choice in chunk.choices)
    except (OpenAIError, httpx.HTTPError) as exc:
        raise UpstreamStreamError(str(exc)) from exc
    finally:
        await stream.close()


async def _iter_completion_chunks(stream: Any) -> AsyncGenerator[Increment, None]:
    try:
        async for chunk in stream:
            yield tuple((choice.text or "") for choice in chunk.choices)
    except (OpenAIError, httpx.HTTPError) as exc:
        raise UpstreamStreamError(str(exc)) from exc
    finally:
        await stream.close()


class OpenAIProvider:
    def __init__(self, client: AsyncOpenAI) -> None:
        self._client = client

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> OpenAIProvider:
        return cls(AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url))

    async def open_chat_stream(
        self,
        *,
        model: str,
        messages: Sequence[ChatTurn],
        max_tokens: int,
        sampling: SamplingParams,
    ) -> AsyncGenerator[Increment, None]:
        logger.debug("openai: chat stream model=%s turns=%d", model, len(messages))
        try:
            stream = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": turn.role.value, "content": turn.content} for turn in messages],
                max_tokens=max_tokens,
                stream=True,
                **_sampling_kwargs(sampling),
            )
        except OpenAIError as exc:
            raise UpstreamEstablishError(str(exc)) from exc
        return _iter_chat_chunks(stream)

    async def open_completion_stream(
        self,
        *,
        model: str,
        prompt: str,
        max_tokens: int,
        sampling: SamplingParams,
    ) -> AsyncGenerator[Increment, None]:
        logger.debug("openai: completion stream model=%s", model)
        try:
            stream = await self._client.completions.create(
                model=model,
                prompt=prompt,
                max_tokens=max_tokens,
                stream=True,
                **_sampling_kwargs(sampling),
            )
        except OpenAIError as exc:
            raise UpstreamEstablishError(str(exc)) from exc
        return _iter_completion_chunks(stream)

    async def generate_image(self, *, prompt: str, size: str) -> ImageResult:
        try:
            response = await self._client.images.generate(
                model=IMAGE_MODEL_ID,
                prompt=prompt,
                n=1,
                size=size,
                response_format="b64_json",
            )
        except OpenAIError as exc:
            raise UpstreamEstablishError(str(exc)) from exc
        return ImageResult(b64_images=tuple((item.b64_json or "") for item in (response.data or [])))

    async def aclose(self) -> None:
        await self._client.close()


__all__ = ["OpenAIProvider"]
