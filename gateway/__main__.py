"""Command-line entrypoint: `python -m gateway` / `chat-gateway`."""

from __future__ import annotations

import sys
import logging
from typing import Any

import uvicorn

from gateway.errors import ConfigError
from gateway.server import create_app
from gateway.state.settings import AppSettings
from gateway.runtime.logging import configure_logging
from gateway.runtime.settings_loader import load_settings

logger = logging.getLogger("gateway")


def uvicorn_options(settings: AppSettings) -> dict[str, Any]:
    """Server options; protocol pings go out every ping period and must be answered within the rest of ping wait."""
    ws = settings.websocket
    return {
        "host": settings.server.host,
        "port": settings.server.port,
        "ws_ping_interval": ws.ping_period_s,
        "ws_ping_timeout": ws.ping_wait_s - ws.ping_period_s,
        "log_config": None,
    }


def main() -> int:
    configure_logging()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("[ERROR] load config error: %s", exc)
        return 1

    logger.info("chat gateway service start host=%s port=%d", settings.server.host, settings.server.port)
    uvicorn.run(create_app(settings), **uvicorn_options(settings))
    return 0


if __name__ == "__main__":
    sys.exit(main())
