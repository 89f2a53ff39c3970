"""Shared error types for the chat gateway."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitError(Exception):
    """Raised when a request arrives before the session's minimum interval elapsed."""

    retry_in: float
    interval_seconds: float


@dataclass(frozen=True, slots=True)
class PayloadTooShortError(Exception):
    """Raised when a stripped text payload is shorter than the allowed minimum."""

    length: int
    minimum: int


class ConfigError(Exception):
    """Configuration could not be loaded or failed validation."""


class UnknownModelError(ConfigError):
    def __init__(self, model: str) -> None:
        super().__init__(f"model not exists: {model!r}")
        self.model = model


class TransportReadError(Exception):
    """Reading from the client connection failed or its read deadline elapsed."""


class TransportWriteError(Exception):
    """Writing a frame to the client connection failed."""


class UpstreamError(Exception):
    """Base class for provider failures surfaced to a relay."""


class UpstreamEstablishError(UpstreamError):
    """The provider rejected or failed to start a request."""


class UpstreamStreamError(UpstreamError):
    """An established provider stream failed before finishing normally."""


__all__ = [
    "ConfigError",
    "PayloadTooShortError",
    "RateLimitError",
    "TransportReadError",
    "TransportWriteError",
    "UnknownModelError",
    "UpstreamError",
    "UpstreamEstablishError",
    "UpstreamStreamError",
]
