"""Abstract base class for embedding providers."""

from abc import ABC, abstractmethod


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Implementations generate vector embeddings for text. A client is built
    once per process and handed to the components that need it.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            model = "my-model"

            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    model: str

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
            May be shorter than ``texts`` (or empty) if the provider
            returned nothing.
        """
        ...

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (async).

        Default implementation calls sync embed().
        Override in subclasses for true async behavior.
        """
        return self.embed(texts)
