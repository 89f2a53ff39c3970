"""Runtime dependency construction (settings + provider client)."""

from __future__ import annotations

import logging

from gateway.state import RuntimeDeps
from gateway.state.settings import AppSettings
from gateway.upstream import OpenAIProvider, CompletionProvider
from gateway.config.models import resolve_model_profile

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings, provider: CompletionProvider | None = None) -> RuntimeDeps:
    profile = resolve_model_profile(settings.provider.model)
    if provider is None:
        provider = OpenAIProvider.from_settings(settings.provider)
    logger.info("runtime: model=%s family=%s", profile.model_id, profile.family.value)
    return RuntimeDeps(settings=settings, model_profile=profile, provider=provider)


__all__ = ["RuntimeDeps", "build_runtime_deps"]
