"""Embedder abstract base class."""

from abc import ABC, abstractmethod


class Embedder(ABC):
    """Turns one text into one vector.

    This is the single shared capability behind background question
    embedding and foreground query embedding.
    """

    model: str

    @abstractmethod
    async def aembed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text.

        Raises:
            EmbeddingGenerationFailed: If no usable vector could be produced.
        """
        ...
