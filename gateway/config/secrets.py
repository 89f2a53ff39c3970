"""Secrets and provider credential configuration."""

from __future__ import annotations

ENV_OPENAI_API_KEY = "OPENAI_API_KEY"
ENV_OPENAI_BASE_URL = "OPENAI_BASE_URL"

__all__ = ["ENV_OPENAI_API_KEY", "ENV_OPENAI_BASE_URL"]
