"""Supported completion models.

The table is built once at import and never mutated; startup validation and
the relays only ever read from it.
"""

from __future__ import annotations

from types import MappingProxyType
from collections.abc import Mapping

from gateway.errors import UnknownModelError
from gateway.state.models import ModelFamily, ModelProfile, SamplingParams

CHAT_SAMPLING = SamplingParams(temperature=1.0)
LEGACY_SAMPLING = SamplingParams(temperature=0.6)

CHAT_MODEL_IDS: tuple[str, ...] = (
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4-turbo",
    "gpt-4-32k-0314",
    "gpt-4-32k",
    "gpt-4-0314",
    "gpt-4",
    "gpt-3.5-turbo-0301",
    "gpt-3.5-turbo",
)

LEGACY_MODEL_IDS: tuple[str, ...] = (
    "gpt-3.5-turbo-instruct",
    "davinci-002",
    "babbage-002",
    "text-davinci-003",
    "text-davinci-002",
    "text-curie-001",
    "text-babbage-001",
    "text-ada-001",
    "text-davinci-001",
    "davinci-instruct-beta",
    "davinci",
    "curie-instruct-beta",
    "curie",
    "ada",
    "babbage",
)

IMAGE_MODEL_ID = "dall-e-2"


def _build_profiles() -> Mapping[str, ModelProfile]:
    profiles: dict[str, ModelProfile] = {}
    for model_id in CHAT_MODEL_IDS:
        profiles[model_id] = ModelProfile(model_id=model_id, family=ModelFamily.CHAT, sampling=CHAT_SAMPLING)
    for model_id in LEGACY_MODEL_IDS:
        profiles[model_id] = ModelProfile(model_id=model_id, family=ModelFamily.LEGACY, sampling=LEGACY_SAMPLING)
    return MappingProxyType(profiles)


MODEL_PROFILES: Mapping[str, ModelProfile] = _build_profiles()


def resolve_model_profile(model_id: str) -> ModelProfile:
    profile = MODEL_PROFILES.get((model_id or "").strip())
    if profile is None:
        raise UnknownModelError(model_id)
    return profile


__all__ = [
    "CHAT_MODEL_IDS",
    "CHAT_SAMPLING",
    "IMAGE_MODEL_ID",
    "LEGACY_MODEL_IDS",
    "LEGACY_SAMPLING",
    "MODEL_PROFILES",
    "resolve_model_profile",
]
