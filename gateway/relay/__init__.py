from .image import ImageRelay, relay_image
from .chat import CompletionRelay, relay_completion
from .emitter import FrameEmitter, RelayCancelledError

__all__ = [
    "CompletionRelay",
    "FrameEmitter",
    "ImageRelay",
    "RelayCancelledError",
    "relay_completion",
    "relay_image",
]
