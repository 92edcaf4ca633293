"""LiteLLM embedding client for Ponder.

Usage:
    from ponder.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

    client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
"""

from ponder.providers.litellm.client import LiteLLMEmbeddingClient
from ponder.providers.litellm.models import EMBEDDING_DIMENSIONS, EmbeddingModels

__all__ = [
    "EMBEDDING_DIMENSIONS",
    "EmbeddingModels",
    "LiteLLMEmbeddingClient",
]
