"""Configuration module exports (constants only)."""

from .models import MODEL_PROFILES
from .websocket import WS_ENDPOINT_PATH
from .assets import IMAGE_COMMAND_PREFIX

__all__ = [
    "IMAGE_COMMAND_PREFIX",
    "MODEL_PROFILES",
    "WS_ENDPOINT_PATH",
]
