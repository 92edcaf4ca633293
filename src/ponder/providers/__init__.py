"""Embedding provider implementations for Ponder.

- EmbeddingClient: Abstract base class for embedding providers
- LiteLLMEmbeddingClient: Embeddings through LiteLLM (OpenAI, Gemini, Bedrock, ...)

Usage:
    from ponder.providers import EmbeddingClient
    from ponder.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels
"""

from ponder.providers.base import EmbeddingClient
from ponder.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient

__all__ = [
    "EmbeddingClient",
    "EmbeddingModels",
    "LiteLLMEmbeddingClient",
]
