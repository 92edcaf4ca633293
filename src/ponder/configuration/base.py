"""Protocol definitions for configuration objects.

Implementations can use @dataclass(frozen=True) for immutability. Any
object with the right methods satisfies the interface without inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ponder.embedder import Embedder
    from ponder.providers import EmbeddingClient
    from ponder.settings import Settings
    from ponder.stores import EmbeddingStore, QuestionStore, VectorIndex


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    A provider builds the embedding client once per Ponder instance and
    wraps it in the shared Embedder used by both background generation and
    query embedding.
    """

    def build_embedding_client(self) -> EmbeddingClient:
        """Build the client for the external embedding service."""
        ...

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build the embedder, wrapping a freshly built client in retry.

        Args:
            settings: Settings containing the retry budget and dimensions.
        """
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - QuestionStore: Users and questions
    - EmbeddingStore: Embedding rows and indexing status
    - VectorIndex: Nearest-neighbour search over embeddings
    """

    def build_stores(self) -> tuple[QuestionStore, EmbeddingStore, VectorIndex]:
        """Build all three storage components.

        Returns:
            Tuple of (question_store, embedding_store, vector_index)
        """
        ...
