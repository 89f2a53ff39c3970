"""Logging initialization."""

from __future__ import annotations

import os
import logging

from gateway.config.logging import LOG_LEVEL, LOG_FORMAT, ENV_SHOW_PROVIDER_LOGS, NOISY_PROVIDER_LOGGERS


def configure_logging() -> None:
    # The OpenAI client logs every HTTP request at INFO. Keep it tame unless explicitly enabled.
    if (os.getenv(ENV_SHOW_PROVIDER_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in NOISY_PROVIDER_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)


__all__ = ["configure_logging"]
