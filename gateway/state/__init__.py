from .runtime import RuntimeDeps
from .settings import AppSettings
from .relay import RelayResult, RelayOutcome
from .session import ChatRole, ChatTurn, SessionState
from .models import ModelFamily, ModelProfile, SamplingParams
from .frame import Frame, FrameKind, InboundKind, InboundMessage

__all__ = [
    "AppSettings",
    "ChatRole",
    "ChatTurn",
    "Frame",
    "FrameKind",
    "InboundKind",
    "InboundMessage",
    "ModelFamily",
    "ModelProfile",
    "RelayOutcome",
    "RelayResult",
    "RuntimeDeps",
    "SamplingParams",
    "SessionState",
]
