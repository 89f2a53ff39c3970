"""Admission checks for inbound text frames."""

from __future__ import annotations

from gateway.config.limits import MIN_PAYLOAD_CHARS
from gateway.errors import RateLimitError, PayloadTooShortError
from gateway.handlers.limits import RequestIntervalLimiter, validate_payload

from .errors import send_error_frame
from .dispatcher import OutboundDispatcher


def _format_seconds(seconds: float) -> str:
    return f"{seconds:g}"


async def consume_limiter(dispatcher: OutboundDispatcher, limiter: RequestIntervalLimiter) -> bool:
    try:
        limiter.consume()
    except RateLimitError as exc:
        await send_error_frame(
            dispatcher,
            f"[ERROR] please wait {_format_seconds(exc.interval_seconds)} seconds for next query",
        )
        return False
    return True


async def check_payload(dispatcher: OutboundDispatcher, text: str, *, minimum: int = MIN_PAYLOAD_CHARS) -> bool:
    try:
        validate_payload(text, minimum=minimum)
    except PayloadTooShortError:
        await send_error_frame(dispatcher, "[ERROR] message too short")
        return False
    return True


__all__ = ["check_payload", "consume_limiter"]
