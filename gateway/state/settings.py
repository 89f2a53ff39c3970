"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from pathlib import Path
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProviderSettings:
    api_key: str
    model: str
    max_length: int
    base_url: str | None = None


@dataclass(frozen=True, slots=True)
class ServerSettings:
    host: str
    port: int
    cors: bool


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    interval_seconds: float
    min_payload_chars: int


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    ping_period_s: float
    ping_wait_s: float
    write_wait_s: float
    cancel_relays_on_close: bool


@dataclass(frozen=True, slots=True)
class AssetSettings:
    root_dir: Path
    url_prefix: str
    image_size: str


@dataclass(frozen=True, slots=True)
class AppSettings:
    provider: ProviderSettings
    server: ServerSettings
    limits: LimitsSettings
    websocket: WebSocketSettings
    assets: AssetSettings


__all__ = [
    "AppSettings",
    "AssetSettings",
    "LimitsSettings",
    "ProviderSettings",
    "ServerSettings",
    "WebSocketSettings",
]
