"""HTTP server and config-file settings (env names and defaults only)."""

from __future__ import annotations

from pathlib import Path

ENV_GATEWAY_CONFIG_PATH = "GATEWAY_CONFIG_PATH"
DEFAULT_CONFIG_PATH: Path = Path("config.yaml")

ENV_GATEWAY_HOST = "GATEWAY_HOST"
ENV_GATEWAY_PORT = "GATEWAY_PORT"
ENV_GATEWAY_CORS = "GATEWAY_CORS"
ENV_GATEWAY_MODEL = "GATEWAY_MODEL"
ENV_GATEWAY_MAX_LENGTH = "GATEWAY_MAX_LENGTH"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9000
DEFAULT_CORS = False
DEFAULT_MAX_LENGTH = 1024

# Keys accepted in the YAML config file.
CONFIG_KEY_API_KEY = "apiKey"
CONFIG_KEY_BASE_URL = "baseUrl"
CONFIG_KEY_HOST = "host"
CONFIG_KEY_PORT = "port"
CONFIG_KEY_INTERVAL_SECONDS = "intervalSeconds"
CONFIG_KEY_MODEL = "model"
CONFIG_KEY_MAX_LENGTH = "maxLength"
CONFIG_KEY_CORS = "cors"
CONFIG_KEY_ASSETS_DIR = "assetsDir"

# Upgrade failure envelope
STATUS_FAIL = "FAIL"

__all__ = [
    "CONFIG_KEY_API_KEY",
    "CONFIG_KEY_ASSETS_DIR",
    "CONFIG_KEY_BASE_URL",
    "CONFIG_KEY_CORS",
    "CONFIG_KEY_HOST",
    "CONFIG_KEY_INTERVAL_SECONDS",
    "CONFIG_KEY_MAX_LENGTH",
    "CONFIG_KEY_MODEL",
    "CONFIG_KEY_PORT",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_CORS",
    "DEFAULT_HOST",
    "DEFAULT_MAX_LENGTH",
    "DEFAULT_PORT",
    "ENV_GATEWAY_CONFIG_PATH",
    "ENV_GATEWAY_CORS",
    "ENV_GATEWAY_HOST",
    "ENV_GATEWAY_MAX_LENGTH",
    "ENV_GATEWAY_MODEL",
    "ENV_GATEWAY_PORT",
    "STATUS_FAIL",
]
