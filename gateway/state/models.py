"""Model capability descriptors (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class ModelFamily(str, Enum):
    # Full conversation history through the chat completions endpoint.
    CHAT = "chat"
    # Latest prompt only through the legacy completions endpoint.
    LEGACY = "legacy"


@dataclass(frozen=True, slots=True)
class SamplingParams:
    temperature: float
    top_p: float = 1.0
    frequency_penalty: float = 0.1
    presence_penalty: float = 0.1


@dataclass(frozen=True, slots=True)
class ModelProfile:
    model_id: str
    family: ModelFamily
    sampling: SamplingParams


__all__ = ["ModelFamily", "ModelProfile", "SamplingParams"]
