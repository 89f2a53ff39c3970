"""Request pacing configuration (env names and defaults only)."""

from __future__ import annotations

ENV_GATEWAY_INTERVAL_SECONDS = "GATEWAY_INTERVAL_SECONDS"

# Minimum spacing between two accepted requests on one session.
DEFAULT_INTERVAL_SECONDS: float = 2.0

# Payloads shorter than this (after stripping whitespace) are rejected.
MIN_PAYLOAD_CHARS: int = 2

__all__ = [
    "DEFAULT_INTERVAL_SECONDS",
    "ENV_GATEWAY_INTERVAL_SECONDS",
    "MIN_PAYLOAD_CHARS",
]
