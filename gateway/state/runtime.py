"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from gateway.state.models import ModelProfile
    from gateway.state.settings import AppSettings
    from gateway.upstream.provider import CompletionProvider


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    model_profile: ModelProfile
    provider: CompletionProvider

    async def shutdown(self) -> None:
        try:
            await self.provider.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
