"""Main FastAPI server for the chat gateway."""

from __future__ import annotations

import time
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket
from fastapi.staticfiles import StaticFiles
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware

from gateway.state.settings import AppSettings
from gateway.config.websocket import WS_ENDPOINT_PATH
from gateway.upstream.provider import CompletionProvider
from gateway.runtime.settings_loader import load_settings
from gateway.runtime.dependencies import build_runtime_deps
from gateway.handlers.websocket.errors import build_failure_envelope
from gateway.handlers.websocket.manager import handle_websocket_connection

logger = logging.getLogger(__name__)

ASSETS_MOUNT_PATH = "/api/assets"
UPGRADE_FAILURE_MESSAGE = "[ERROR] failed to upgrade websocket: expected a websocket handshake"


def create_app(settings: AppSettings | None = None, *, provider: CompletionProvider | None = None) -> FastAPI:
    """Build the ASGI app. `provider` replaces the OpenAI client (tests, alternative backends)."""
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        runtime_deps = build_runtime_deps(settings, provider=provider)
        app.state.runtime_deps = runtime_deps
        logger.info("runtime: ready")
        try:
            yield
        finally:
            deps = getattr(app.state, "runtime_deps", None)
            if deps is not None:
                await deps.shutdown()

    app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
    app.state.settings = settings

    if settings.server.cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_headers=["content-type"],
        )

    settings.assets.root_dir.mkdir(parents=True, exist_ok=True)
    app.mount(ASSETS_MOUNT_PATH, StaticFiles(directory=settings.assets.root_dir), name="assets")

    @app.get("/")
    async def root() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get(WS_ENDPOINT_PATH)
    async def websocket_upgrade_required() -> ORJSONResponse:
        # Plain HTTP on the websocket path means the upgrade handshake never happened.
        started_at = time.monotonic()
        logger.error(UPGRADE_FAILURE_MESSAGE)
        return ORJSONResponse(build_failure_envelope(started_at, UPGRADE_FAILURE_MESSAGE), status_code=403)

    @app.websocket(WS_ENDPOINT_PATH)
    async def websocket_endpoint(websocket: WebSocket) -> None:
        runtime_deps = getattr(app.state, "runtime_deps", None)
        if runtime_deps is None:
            raise RuntimeError("Runtime dependencies are not initialized")
        await handle_websocket_connection(websocket, runtime_deps)

    return app


__all__ = ["create_app"]
