"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ponder.embedder import Embedder
    from ponder.providers import EmbeddingClient
    from ponder.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for embedding calls.

    Args:
        embedding: LiteLLM model identifier for embeddings.
                   Examples: "text-embedding-3-small", "gemini/text-embedding-004"
        api_key: Optional API key. If None, LiteLLM reads the provider's
                 standard environment variable.

    Example:
        provider = LiteLLMProvider(embedding="text-embedding-3-small")
    """

    embedding: str = "text-embedding-3-small"
    api_key: str | None = None

    def build_embedding_client(self) -> EmbeddingClient:
        """Build a LiteLLMEmbeddingClient.

        LiteLLM's own retries stay off; Ponder's BackoffPolicy does the retrying.
        """
        from ponder.providers.litellm import LiteLLMEmbeddingClient

        return LiteLLMEmbeddingClient(model=self.embedding, num_retries=0, api_key=self.api_key)

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder around a LiteLLM embedding client.

        Args:
            settings: Settings containing the backoff budget and dimensions.
                      Without explicit dimensions the model's known size is
                      checked; unknown models are not checked.
        """
        from ponder.embedder import ClientEmbedder
        from ponder.providers.litellm import EMBEDDING_DIMENSIONS
        from ponder.retry import BackoffPolicy

        dimensions = settings.embedding_dimensions
        if dimensions is None:
            dimensions = EMBEDDING_DIMENSIONS.get(self.embedding)

        return ClientEmbedder(
            embedding_client=self.build_embedding_client(),
            backoff=BackoffPolicy(settings.backoff_config()),
            dimensions=dimensions,
        )
