"""Generated asset layout (image command, directories, served paths)."""

from __future__ import annotations

from pathlib import Path

# Text frames starting with this prefix are image requests.
IMAGE_COMMAND_PREFIX = "/image "

ENV_GATEWAY_ASSETS_DIR = "GATEWAY_ASSETS_DIR"

DEFAULT_ASSETS_DIR: Path = Path("assets")

# Static mount serving DEFAULT_ASSETS_DIR; frames carry paths without the leading slash.
ASSETS_URL_PREFIX = "api/assets"

IMAGES_SUBDIR = "images"
IMAGE_DATE_FORMAT = "%Y-%m-%d"
IMAGE_FILE_SUFFIX = ".png"
IMAGE_NAME_LENGTH = 16
IMAGE_NAME_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"

IMAGE_SIZE = "256x256"

IMAGE_DIR_MODE = 0o700
IMAGE_FILE_MODE = 0o600

__all__ = [
    "ASSETS_URL_PREFIX",
    "DEFAULT_ASSETS_DIR",
    "ENV_GATEWAY_ASSETS_DIR",
    "IMAGES_SUBDIR",
    "IMAGE_COMMAND_PREFIX",
    "IMAGE_DATE_FORMAT",
    "IMAGE_DIR_MODE",
    "IMAGE_FILE_MODE",
    "IMAGE_FILE_SUFFIX",
    "IMAGE_NAME_ALPHABET",
    "IMAGE_NAME_LENGTH",
    "IMAGE_SIZE",
]
