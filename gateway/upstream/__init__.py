from .openai_provider import OpenAIProvider
from .provider import Increment, ImageResult, CompletionProvider

__all__ = ["CompletionProvider", "ImageResult", "Increment", "OpenAIProvider"]
