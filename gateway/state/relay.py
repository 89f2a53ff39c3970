"""Relay outcomes (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass


class RelayOutcome(str, Enum):
    END = "end"
    RETRY = "retry"
    ERROR = "error"
    IMAGE = "image"
    # The connection went away (or the relay was cancelled) before the last frame.
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class RelayResult:
    relay_id: str
    outcome: RelayOutcome
    # Assistant text without the echoed prompt header; empty unless something streamed.
    reply: str = ""


__all__ = ["RelayOutcome", "RelayResult"]
