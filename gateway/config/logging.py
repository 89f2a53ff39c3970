"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL: str = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Set to 1/true to see openai/httpx request logs.
ENV_SHOW_PROVIDER_LOGS = "SHOW_PROVIDER_LOGS"
NOISY_PROVIDER_LOGGERS: tuple[str, ...] = ("openai", "httpx", "httpcore")

__all__ = ["ENV_SHOW_PROVIDER_LOGS", "LOG_FORMAT", "LOG_LEVEL", "NOISY_PROVIDER_LOGGERS"]
