"""Tests for ClientEmbedder."""

import pytest

from ponder.embedder import ClientEmbedder, Embedder
from ponder.exceptions import EmbeddingGenerationFailed, TerminalProviderError, TransientProviderError
from ponder.providers import EmbeddingClient
from ponder.retry import BackoffConfig


class ScriptedClient(EmbeddingClient):
    """Embedding client that replays a script of results and errors."""

    model = "scripted-model"

    def __init__(self, script: list) -> None:
        self.script = list(script)
        self.calls = 0

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls += 1
        step = self.script.pop(0) if self.script else [[1.0, 2.0]]
        if isinstance(step, Exception):
            raise step
        return step


class TestClientEmbedder:
    def test_is_embedder(self, embedder):
        assert isinstance(embedder, Embedder)

    def test_model_comes_from_client(self, embedder, fake_client):
        assert embedder.model == fake_client.model

    @pytest.mark.asyncio
    async def test_embeds_one_text(self, embedder, fake_client):
        vector = await embedder.aembed_text("What is the meaning of life?")

        assert len(vector) == 1536
        assert fake_client.calls == [["What is the meaning of life?"]]

    @pytest.mark.asyncio
    async def test_retries_transient_failures(self, no_sleep_backoff):
        client = ScriptedClient([TransientProviderError("429"), TransientProviderError("503"), [[0.5]]])
        embedder = ClientEmbedder(embedding_client=client, backoff=no_sleep_backoff)

        assert await embedder.aembed_text("hi there") == [0.5]
        assert client.calls == 3

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_generation_failed(self, no_sleep_backoff):
        client = ScriptedClient([TransientProviderError(f"fail {i}") for i in range(10)])
        embedder = ClientEmbedder(embedding_client=client, backoff=no_sleep_backoff)

        with pytest.raises(EmbeddingGenerationFailed) as exc_info:
            await embedder.aembed_text("hi there")

        assert client.calls == 4
        assert exc_info.value.attempts == 4
        assert isinstance(exc_info.value.__cause__, TransientProviderError)
        assert str(exc_info.value.__cause__) == "fail 3"

    @pytest.mark.asyncio
    async def test_custom_backoff_config(self, no_sleep_backoff):
        client = ScriptedClient([TransientProviderError("x") for _ in range(10)])
        embedder = ClientEmbedder(
            embedding_client=client,
            backoff=no_sleep_backoff,
            backoff_config=BackoffConfig(max_retries=1),
        )

        with pytest.raises(EmbeddingGenerationFailed):
            await embedder.aembed_text("hi there")
        assert client.calls == 2

    @pytest.mark.asyncio
    async def test_terminal_failure_not_retried(self, no_sleep_backoff):
        client = ScriptedClient([TerminalProviderError("bad key")])
        embedder = ClientEmbedder(embedding_client=client, backoff=no_sleep_backoff)

        with pytest.raises(EmbeddingGenerationFailed) as exc_info:
            await embedder.aembed_text("hi there")

        assert client.calls == 1
        assert exc_info.value.attempts == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [[], [[]]])
    async def test_empty_vector_fails_without_retry(self, no_sleep_backoff, response):
        client = ScriptedClient([response])
        embedder = ClientEmbedder(embedding_client=client, backoff=no_sleep_backoff)

        with pytest.raises(EmbeddingGenerationFailed, match="no vector"):
            await embedder.aembed_text("hi there")
        assert client.calls == 1

    @pytest.mark.asyncio
    async def test_wrong_dimensions_fail(self, no_sleep_backoff):
        client = ScriptedClient([[[1.0, 2.0, 3.0]]])
        embedder = ClientEmbedder(embedding_client=client, backoff=no_sleep_backoff, dimensions=1536)

        with pytest.raises(EmbeddingGenerationFailed, match="1536"):
            await embedder.aembed_text("hi there")
