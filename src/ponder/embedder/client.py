"""Client-based embedder implementation."""

import logging

from ponder.embedder.base import Embedder
from ponder.exceptions import EmbeddingGenerationFailed
from ponder.providers.base import EmbeddingClient
from ponder.retry import BackoffConfig, BackoffPolicy

logger = logging.getLogger(__name__)


class ClientEmbedder(Embedder):
    """Embedder that calls an EmbeddingClient through a BackoffPolicy.

    Example:
        from ponder.providers.litellm import LiteLLMEmbeddingClient
        from ponder.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="text-embedding-3-small")
        embedder = ClientEmbedder(embedding_client=client, dimensions=1536)
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        backoff: BackoffPolicy | None = None,
        backoff_config: BackoffConfig | None = None,
        dimensions: int | None = None,
    ) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            backoff: Retry policy wrapped around every provider call
            backoff_config: Per-call retry budget (default: the policy's own)
            dimensions: Expected vector length. None skips the check.
        """
        self._client = embedding_client
        self._backoff = backoff or BackoffPolicy()
        self._backoff_config = backoff_config
        self.dimensions = dimensions

    @property
    def model(self) -> str:  # type: ignore[override]
        return self._client.model

    async def aembed_text(self, text: str) -> list[float]:
        """Embed one text, retrying provider failures with backoff.

        An empty provider response is not retried here; the retry budget
        covers provider errors only.
        """
        attempts = 0

        async def operation() -> list[float] | None:
            nonlocal attempts
            attempts += 1
            vectors = await self._client.aembed([text])
            return vectors[0] if vectors else None

        try:
            vector = await self._backoff.run(operation, self._backoff_config)
        except Exception as e:
            raise EmbeddingGenerationFailed(
                f"Failed to generate embedding after {attempts} attempt(s): {e}",
                attempts=attempts,
            ) from e

        if not vector:
            raise EmbeddingGenerationFailed(
                f"Embedding provider returned no vector for model {self.model}",
                attempts=attempts,
            )

        if self.dimensions is not None and len(vector) != self.dimensions:
            raise EmbeddingGenerationFailed(
                f"Expected {self.dimensions}-dimensional vector from {self.model}, "
                f"got {len(vector)}",
                attempts=attempts,
            )

        logger.debug("Embedded %d chars with %s in %d attempt(s)", len(text), self.model, attempts)
        return vector
