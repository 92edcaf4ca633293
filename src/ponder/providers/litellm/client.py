"""LiteLLM client implementation for embedding APIs."""

import litellm

from ponder.exceptions import TerminalProviderError, TransientProviderError
from ponder.providers.base import EmbeddingClient
from ponder.providers.litellm.models import EmbeddingModels

# Failures that will repeat no matter how often they are retried
_TERMINAL_ERRORS = (
    litellm.BadRequestError,
    litellm.AuthenticationError,
    litellm.PermissionDeniedError,
    litellm.NotFoundError,
)


def _translate_error(model: str, error: Exception) -> Exception:
    if isinstance(error, _TERMINAL_ERRORS):
        return TerminalProviderError(f"Embedding request to {model} rejected: {error}")
    return TransientProviderError(f"Embedding request to {model} failed: {error}")


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Supports any embedding model available through LiteLLM. Provider errors are
    translated to TransientProviderError or TerminalProviderError so the
    caller's backoff policy can decide whether to retry.

    Example:
        from ponder.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL)
        embeddings = await client.aembed(["What is the meaning of life?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.TEXT_3_SMALL,
        num_retries: int = 0,
        api_key: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "text-embedding-3-small", "gemini/text-embedding-004"
            num_retries: Retries performed inside LiteLLM itself. Default 0, since
                        Ponder wraps every call in its own BackoffPolicy.
            api_key: Optional API key. If None, LiteLLM reads the provider's
                     standard environment variable (e.g. OPENAI_API_KEY).
        """
        self.model = model
        self.num_retries = num_retries
        self.api_key = api_key

    def _request_kwargs(self, texts: list[str]) -> dict:
        kwargs = {
            "model": self.model,
            "input": texts,
            "num_retries": self.num_retries,
        }
        if self.api_key is not None:
            kwargs["api_key"] = self.api_key
        return kwargs

    @staticmethod
    def _vectors(response) -> list[list[float]]:
        data = response.data or []
        # Sort by index to maintain order
        sorted_data = sorted(data, key=lambda x: x["index"])
        return [item["embedding"] for item in sorted_data if item["embedding"]]

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []
        try:
            response = litellm.embedding(**self._request_kwargs(texts))
        except Exception as e:
            raise _translate_error(self.model, e) from e
        return self._vectors(response)

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM (async)."""
        if not texts:
            return []
        try:
            response = await litellm.aembedding(**self._request_kwargs(texts))
        except Exception as e:
            raise _translate_error(self.model, e) from e
        return self._vectors(response)
