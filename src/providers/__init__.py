"""Content providers: streaming chat completion клиенты."""

from src.providers.base import ChatMessage, ContentProvider, ProviderFactory, StreamChunk
from src.providers.openai_compatible import OpenAICompatibleProvider, create_openai_compatible_provider

__all__ = [
    "ChatMessage",
    "ContentProvider",
    "OpenAICompatibleProvider",
    "ProviderFactory",
    "StreamChunk",
    "create_openai_compatible_provider",
]
