"""Read loop for chat sessions (/api/ws/chat)."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib

from fastapi import WebSocket

from gateway.errors import TransportReadError
from gateway.relay import relay_image, relay_completion
from gateway.config.assets import IMAGE_COMMAND_PREFIX
from gateway.handlers.limits import RequestIntervalLimiter
from gateway.state import (
    ChatRole,
    ChatTurn,
    FrameKind,
    InboundKind,
    ModelFamily,
    RuntimeDeps,
    SessionState,
    InboundMessage,
)

from .frames import PONG_TEXT
from .parser import parse_inbound
from .relays import RelayTracker
from .dispatcher import OutboundDispatcher
from .limits import check_payload, consume_limiter
from .errors import safe_send_text, safe_send_frame, send_error_frame

logger = logging.getLogger(__name__)


def refresh_read_deadline(state: SessionState, ping_wait_s: float) -> None:
    state.read_deadline = time.monotonic() + ping_wait_s


async def _receive_with_deadline(ws: WebSocket, state: SessionState) -> InboundMessage:
    """Wait for the next frame until `state.read_deadline`, which may move while waiting."""
    receive_task = asyncio.ensure_future(ws.receive())
    try:
        while True:
            remaining = state.read_deadline - time.monotonic()
            if remaining <= 0:
                raise TransportReadError("i/o timeout")
            done, _pending = await asyncio.wait({receive_task}, timeout=remaining)
            if done:
                break
    finally:
        if not receive_task.done():
            receive_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await receive_task
    try:
        message = receive_task.result()
    except RuntimeError as exc:
        # Starlette raises RuntimeError once the connection is no longer readable.
        raise TransportReadError(str(exc)) from exc
    return parse_inbound(message)


def _fold_replies(state: SessionState, relays: RelayTracker) -> None:
    """Place each finished reply directly after the user turn that asked for it."""
    for prompt_turn, reply in relays.harvest():
        index = next((i for i, turn in enumerate(state.history) if turn is prompt_turn), None)
        if index is None:
            continue
        state.history.insert(index + 1, ChatTurn(role=ChatRole.ASSISTANT, content=reply))


def _spawn_relay(
    text: str,
    state: SessionState,
    dispatcher: OutboundDispatcher,
    relays: RelayTracker,
    runtime_deps: RuntimeDeps,
) -> None:
    settings = runtime_deps.settings
    cancel_event = relays.cancel_event if settings.websocket.cancel_relays_on_close else None

    if text.startswith(IMAGE_COMMAND_PREFIX):
        relays.spawn(
            relay_image(
                dispatcher,
                runtime_deps.provider,
                request_text=text,
                assets=settings.assets,
                cancel_event=cancel_event,
            )
        )
        return

    turn = ChatTurn(role=ChatRole.USER, content=text)
    profile = runtime_deps.model_profile
    if profile.family is ModelFamily.CHAT:
        state.history.append(turn)
        history: tuple[ChatTurn, ...] = tuple(state.history)
    else:
        history = (turn,)

    relays.spawn(
        relay_completion(
            dispatcher,
            runtime_deps.provider,
            profile=profile,
            history=history,
            max_tokens=settings.provider.max_length,
            cancel_event=cancel_event,
        ),
        prompt_turn=turn if profile.family is ModelFamily.CHAT else None,
    )


async def _handle_text(
    text: str,
    state: SessionState,
    dispatcher: OutboundDispatcher,
    limiter: RequestIntervalLimiter,
    relays: RelayTracker,
    runtime_deps: RuntimeDeps,
) -> None:
    logger.info("[REQUEST] %s", text)
    if not await consume_limiter(dispatcher, limiter):
        return
    if not await check_payload(dispatcher, text, minimum=runtime_deps.settings.limits.min_payload_chars):
        return

    _fold_replies(state, relays)
    await safe_send_frame(dispatcher, FrameKind.RECEIVE, text)
    _spawn_relay(text, state, dispatcher, relays, runtime_deps)


async def run_message_loop(
    ws: WebSocket,
    state: SessionState,
    dispatcher: OutboundDispatcher,
    limiter: RequestIntervalLimiter,
    relays: RelayTracker,
    runtime_deps: RuntimeDeps,
) -> None:
    ping_wait_s = runtime_deps.settings.websocket.ping_wait_s

    while not state.closed:
        try:
            inbound = await _receive_with_deadline(ws, state)
        except TransportReadError as exc:
            logger.error("[ERROR] read message error: %s", exc)
            return
        refresh_read_deadline(state, ping_wait_s)

        if inbound.kind is InboundKind.TEXT:
            await _handle_text(inbound.text, state, dispatcher, limiter, relays, runtime_deps)
        elif inbound.kind is InboundKind.CLOSE:
            state.closed = True
            logger.info("[CLOSED] websocket receive closed message")
        elif inbound.kind is InboundKind.PING:
            logger.info("[PING] websocket receive ping message")
            await safe_send_text(dispatcher, PONG_TEXT)
        elif inbound.kind is InboundKind.PONG:
            logger.info("[PONG] websocket receive pong message")
        else:
            await send_error_frame(dispatcher, "[ERROR] websocket receive message type not text")
            return


__all__ = ["refresh_read_deadline", "run_message_loop"]
