"""Config-file and environment parsing for runtime settings."""

from __future__ import annotations

import os
from typing import Any
from pathlib import Path
from collections.abc import Mapping

import yaml

from gateway.errors import ConfigError
from gateway.config.models import resolve_model_profile
from gateway.config.secrets import ENV_OPENAI_API_KEY, ENV_OPENAI_BASE_URL
from gateway.config.limits import MIN_PAYLOAD_CHARS, DEFAULT_INTERVAL_SECONDS, ENV_GATEWAY_INTERVAL_SECONDS
from gateway.state.settings import (
    AppSettings,
    AssetSettings,
    LimitsSettings,
    ServerSettings,
    ProviderSettings,
    WebSocketSettings,
)
from gateway.config.assets import (
    IMAGE_SIZE,
    ASSETS_URL_PREFIX,
    DEFAULT_ASSETS_DIR,
    ENV_GATEWAY_ASSETS_DIR,
)
from gateway.config.websocket import (
    ENV_WS_PING_WAIT_S,
    ENV_WS_PING_PERIOD_S,
    ENV_WS_WRITE_WAIT_S,
    DEFAULT_WS_PING_WAIT_S,
    DEFAULT_WS_PING_PERIOD_S,
    DEFAULT_WS_WRITE_WAIT_S,
    ENV_WS_CANCEL_RELAYS_ON_CLOSE,
    DEFAULT_WS_CANCEL_RELAYS_ON_CLOSE,
)
from gateway.config.server import (
    DEFAULT_CORS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    CONFIG_KEY_CORS,
    CONFIG_KEY_HOST,
    CONFIG_KEY_PORT,
    ENV_GATEWAY_CORS,
    ENV_GATEWAY_HOST,
    ENV_GATEWAY_PORT,
    CONFIG_KEY_MODEL,
    ENV_GATEWAY_MODEL,
    CONFIG_KEY_API_KEY,
    DEFAULT_MAX_LENGTH,
    CONFIG_KEY_BASE_URL,
    DEFAULT_CONFIG_PATH,
    CONFIG_KEY_ASSETS_DIR,
    CONFIG_KEY_MAX_LENGTH,
    ENV_GATEWAY_MAX_LENGTH,
    ENV_GATEWAY_CONFIG_PATH,
    CONFIG_KEY_INTERVAL_SECONDS,
)

MAX_PORT = 65535
_TRUE_STRINGS = {"1", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "false", "no", "n", "off"}


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_STRINGS


def _env_or(name: str, value: Any) -> Any:
    """Environment value for `name` when set and non-blank, else `value` from the file."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return value
    return raw.strip()


def _as_int(key: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from exc


def _as_float(key: str, value: Any, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc


def _as_bool(key: str, value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    raise ConfigError(f"{key} must be a boolean, got {value!r}")


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path is not None:
        return Path(path).expanduser()
    return Path(_str_env(ENV_GATEWAY_CONFIG_PATH, str(DEFAULT_CONFIG_PATH))).expanduser()


def read_config_file(path: Path) -> Mapping[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(f"config file not found: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"read config file {path} error: {exc}") from exc
    try:
        doc = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"parse config file {path} error: {exc}") from exc
    if doc is None:
        return {}
    if not isinstance(doc, Mapping):
        raise ConfigError(f"config file {path} must contain a mapping at the top level")
    return doc


def _load_provider_settings(doc: Mapping[str, Any]) -> ProviderSettings:
    api_key = str(_env_or(ENV_OPENAI_API_KEY, doc.get(CONFIG_KEY_API_KEY)) or "").strip()
    if not api_key:
        raise ConfigError(f"{CONFIG_KEY_API_KEY} must not be empty")

    model = str(_env_or(ENV_GATEWAY_MODEL, doc.get(CONFIG_KEY_MODEL)) or "").strip()
    # Raises UnknownModelError for anything outside the capability table.
    resolve_model_profile(model)

    max_length = _as_int(
        CONFIG_KEY_MAX_LENGTH, _env_or(ENV_GATEWAY_MAX_LENGTH, doc.get(CONFIG_KEY_MAX_LENGTH)), DEFAULT_MAX_LENGTH
    )
    if max_length <= 0:
        raise ConfigError(f"{CONFIG_KEY_MAX_LENGTH} must be positive, got {max_length}")

    base_url = _env_or(ENV_OPENAI_BASE_URL, doc.get(CONFIG_KEY_BASE_URL))
    return ProviderSettings(
        api_key=api_key,
        model=model,
        max_length=max_length,
        base_url=str(base_url).strip() if base_url else None,
    )


def _load_server_settings(doc: Mapping[str, Any]) -> ServerSettings:
    host = str(_env_or(ENV_GATEWAY_HOST, doc.get(CONFIG_KEY_HOST)) or DEFAULT_HOST).strip()
    port = _as_int(CONFIG_KEY_PORT, _env_or(ENV_GATEWAY_PORT, doc.get(CONFIG_KEY_PORT)), DEFAULT_PORT)
    if port < 1 or port > MAX_PORT:
        raise ConfigError(f"{CONFIG_KEY_PORT} must be between 1 and {MAX_PORT}, got {port}")
    cors = _as_bool(CONFIG_KEY_CORS, _env_or(ENV_GATEWAY_CORS, doc.get(CONFIG_KEY_CORS)), DEFAULT_CORS)
    return ServerSettings(host=host, port=port, cors=cors)


def _load_limits_settings(doc: Mapping[str, Any]) -> LimitsSettings:
    interval = _as_float(
        CONFIG_KEY_INTERVAL_SECONDS,
        _env_or(ENV_GATEWAY_INTERVAL_SECONDS, doc.get(CONFIG_KEY_INTERVAL_SECONDS)),
        DEFAULT_INTERVAL_SECONDS,
    )
    if interval < 0:
        raise ConfigError(f"{CONFIG_KEY_INTERVAL_SECONDS} must not be negative, got {interval:g}")
    return LimitsSettings(interval_seconds=interval, min_payload_chars=MIN_PAYLOAD_CHARS)


def _load_websocket_settings() -> WebSocketSettings:
    ping_period = _float_env(ENV_WS_PING_PERIOD_S, DEFAULT_WS_PING_PERIOD_S)
    ping_wait = _float_env(ENV_WS_PING_WAIT_S, DEFAULT_WS_PING_WAIT_S)
    if ping_period <= 0 or ping_wait <= ping_period:
        raise ConfigError(
            f"{ENV_WS_PING_PERIOD_S} must be positive and shorter than {ENV_WS_PING_WAIT_S}"
            f" (got {ping_period:g} and {ping_wait:g})"
        )
    return WebSocketSettings(
        ping_period_s=ping_period,
        ping_wait_s=ping_wait,
        write_wait_s=_float_env(ENV_WS_WRITE_WAIT_S, DEFAULT_WS_WRITE_WAIT_S),
        cancel_relays_on_close=_bool_env(ENV_WS_CANCEL_RELAYS_ON_CLOSE, DEFAULT_WS_CANCEL_RELAYS_ON_CLOSE),
    )


def _load_asset_settings(doc: Mapping[str, Any]) -> AssetSettings:
    root = _env_or(ENV_GATEWAY_ASSETS_DIR, doc.get(CONFIG_KEY_ASSETS_DIR))
    root_dir = Path(str(root)).expanduser() if root else DEFAULT_ASSETS_DIR
    return AssetSettings(root_dir=root_dir, url_prefix=ASSETS_URL_PREFIX, image_size=IMAGE_SIZE)


def settings_from_mapping(doc: Mapping[str, Any]) -> AppSettings:
    return AppSettings(
        provider=_load_provider_settings(doc),
        server=_load_server_settings(doc),
        limits=_load_limits_settings(doc),
        websocket=_load_websocket_settings(),
        assets=_load_asset_settings(doc),
    )


def load_settings(path: str | Path | None = None) -> AppSettings:
    """Read the YAML config file, apply environment overrides and validate.

    Raises ConfigError (or its UnknownModelError subclass) on any problem;
    callers treat that as fatal before serving a single session.
    """
    return settings_from_mapping(read_config_file(resolve_config_path(path)))


__all__ = ["load_settings", "read_config_file", "resolve_config_path", "settings_from_mapping"]
