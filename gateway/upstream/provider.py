"""Capabilities the gateway consumes from a completion provider."""

from __future__ import annotations

from typing import Protocol
from dataclasses import dataclass
from collections.abc import Sequence, AsyncGenerator

from gateway.state import ChatTurn, SamplingParams

# One streamed chunk: the text fragment of every choice it carried (possibly none).
Increment = tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ImageResult:
    # Base64 payloads as returned by the provider, one per generated image.
    b64_images: tuple[str, ...]


class CompletionProvider(Protocol):
    """Opening a stream raises UpstreamEstablishError; iterating raises UpstreamStreamError."""

    async def open_chat_stream(
        self,
        *,
        model: str,
        messages: Sequence[ChatTurn],
        max_tokens: int,
        sampling: SamplingParams,
    ) -> AsyncGenerator[Increment, None]: ...

    async def open_completion_stream(
        self,
        *,
        model: str,
        prompt: str,
        max_tokens: int,
        sampling: SamplingParams,
    ) -> AsyncGenerator[Increment, None]: ...

    async def generate_image(self, *, prompt: str, size: str) -> ImageResult: ...

    async def aclose(self) -> None: ...


__all__ = ["CompletionProvider", "ImageResult", "Increment"]
