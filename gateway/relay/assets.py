"""On-disk storage for generated images."""

from __future__ import annotations

import os
import secrets
from pathlib import Path
from datetime import date

from gateway.state.settings import AssetSettings
from gateway.config.assets import (
    IMAGES_SUBDIR,
    IMAGE_DIR_MODE,
    IMAGE_FILE_MODE,
    IMAGE_FILE_SUFFIX,
    IMAGE_DATE_FORMAT,
    IMAGE_NAME_LENGTH,
    IMAGE_NAME_ALPHABET,
)


def random_name(length: int = IMAGE_NAME_LENGTH) -> str:
    return "".join(secrets.choice(IMAGE_NAME_ALPHABET) for _ in range(length))


def image_dir_name(day: date) -> str:
    return day.strftime(IMAGE_DATE_FORMAT)


def ensure_image_dir(settings: AssetSettings, day: date) -> Path:
    """Create <root>/images/<YYYY-MM-DD>; raises OSError."""
    image_dir = settings.root_dir / IMAGES_SUBDIR / image_dir_name(day)
    image_dir.mkdir(mode=IMAGE_DIR_MODE, parents=True, exist_ok=True)
    return image_dir


def write_image(image_dir: Path, data: bytes) -> Path:
    """Write `data` under a fresh random name; raises OSError."""
    path = image_dir / f"{random_name()}{IMAGE_FILE_SUFFIX}"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, IMAGE_FILE_MODE)
    with os.fdopen(fd, "wb") as fh:
        fh.write(data)
    return path


def served_path(settings: AssetSettings, path: Path) -> str:
    """Relative URL (under the static prefix) at which `path` is served."""
    relative = path.relative_to(settings.root_dir).as_posix()
    return f"{settings.url_prefix.strip('/')}/{relative}"


__all__ = ["ensure_image_dir", "image_dir_name", "random_name", "served_path", "write_image"]
