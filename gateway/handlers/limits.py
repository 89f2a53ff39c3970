"""Per-session request pacing."""

from __future__ import annotations

import time
from collections.abc import Callable

from gateway.config.limits import MIN_PAYLOAD_CHARS
from gateway.errors import RateLimitError, PayloadTooShortError

TimeFn = Callable[[], float]


class RequestIntervalLimiter:
    """Admit a request only if `interval_seconds` passed since the last admitted one.

    The first request is always admitted. Rejected requests are dropped, not
    queued, and do not move the window. Disabled if interval_seconds <= 0.
    """

    def __init__(
        self,
        *,
        interval_seconds: float,
        now_fn: TimeFn | None = None,
    ) -> None:
        self.interval_seconds = max(0.0, float(interval_seconds))
        self._now = now_fn or time.monotonic
        self._last_accepted: float | None = None

    @property
    def last_accepted(self) -> float | None:
        return self._last_accepted

    def consume(self) -> None:
        now = self._now()
        last = self._last_accepted
        if last is not None and self.interval_seconds > 0:
            elapsed = now - last
            if elapsed < self.interval_seconds:
                raise RateLimitError(
                    retry_in=max(0.0, self.interval_seconds - elapsed),
                    interval_seconds=self.interval_seconds,
                )
        self._last_accepted = now


def validate_payload(text: str, *, minimum: int = MIN_PAYLOAD_CHARS) -> None:
    length = len((text or "").strip())
    if length < minimum:
        raise PayloadTooShortError(length=length, minimum=minimum)


__all__ = ["RateLimitError", "RequestIntervalLimiter", "validate_payload"]
