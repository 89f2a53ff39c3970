"""Per-connection session state (dataclasses only)."""

from __future__ import annotations

from enum import Enum
from dataclasses import field, dataclass


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ChatTurn:
    role: ChatRole
    content: str


@dataclass(slots=True)
class SessionState:
    """Owned by the session's read loop; relays only ever see snapshots of `history`."""

    session_id: str
    history: list[ChatTurn] = field(default_factory=list)
    read_deadline: float = 0.0
    closed: bool = False


__all__ = ["ChatRole", "ChatTurn", "SessionState"]
