"""Shared pytest fixtures."""

import contextlib
import os
import re
import tempfile
import zlib

import pytest

from ponder.auth import IdentityProvider
from ponder.embedder import ClientEmbedder
from ponder.models import Identity
from ponder.providers import EmbeddingClient
from ponder.retry import BackoffPolicy
from ponder.stores import InMemoryVectorIndex, SQLiteEmbeddingStore, SQLiteQuestionStore

DIMENSIONS = 1536

# Words that share a meaning share a dimension
CONCEPTS = {
    "life": 0,
    "living": 0,
    "meaning": 1,
    "purpose": 1,
    "point": 1,
    "bread": 2,
    "sourdough": 2,
    "bake": 3,
    "baking": 3,
    "python": 4,
    "snake": 5,
}


class FakeEmbeddingClient(EmbeddingClient):
    """Bag-of-concepts embeddings: deterministic, offline, roughly semantic."""

    def __init__(self, model: str = "text-embedding-3-small", dimensions: int = DIMENSIONS) -> None:
        self.model = model
        self.dimensions = dimensions
        self.calls: list[list[str]] = []

    def vector_for(self, text: str) -> list[float]:
        vector = [0.0] * self.dimensions
        for word in re.findall(r"[a-z]+", text.lower()):
            if word in CONCEPTS:
                vector[CONCEPTS[word]] += 1.0
            else:
                vector[len(CONCEPTS) + zlib.crc32(word.encode()) % (self.dimensions - 16)] += 0.1
        return vector

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(texts)
        return [self.vector_for(text) for text in texts]


class SwitchableIdentityProvider(IdentityProvider):
    """Identity provider whose caller tests can change."""

    def __init__(self, identity: Identity | None = None) -> None:
        self.identity = identity

    def login(self, subject: str, email: str | None = None) -> None:
        self.identity = Identity(subject=subject, email=email)

    def logout(self) -> None:
        self.identity = None

    def get_caller_identity(self) -> Identity | None:
        return self.identity


async def _no_sleep(delay: float) -> None:
    return None


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir

        # Cleanup ChromaDB's shared system cache to release file handles
        # See: https://github.com/chroma-core/chroma/issues/5868
        try:
            from chromadb.api.shared_system_client import SharedSystemClient

            if hasattr(SharedSystemClient, "_identifier_to_system"):
                identifiers_to_remove = [
                    identifier
                    for identifier in list(SharedSystemClient._identifier_to_system.keys())
                    if tmpdir in str(identifier)
                ]
                for identifier in identifiers_to_remove:
                    if identifier in SharedSystemClient._identifier_to_system:
                        system = SharedSystemClient._identifier_to_system.pop(identifier)
                        with contextlib.suppress(Exception):
                            system.stop()
        except Exception:
            pass  # Best effort cleanup - ChromaDB internals may change


@pytest.fixture
def question_store(temp_dir):
    return SQLiteQuestionStore(os.path.join(temp_dir, "questions.db"))


@pytest.fixture
def embedding_store(temp_dir):
    return SQLiteEmbeddingStore(os.path.join(temp_dir, "embeddings.db"))


@pytest.fixture
def vector_index():
    return InMemoryVectorIndex()


@pytest.fixture
def fake_client():
    return FakeEmbeddingClient()


@pytest.fixture
def no_sleep_backoff():
    """BackoffPolicy that never actually waits."""
    return BackoffPolicy(sleep=_no_sleep, rand=lambda: 0.0)


@pytest.fixture
def embedder(fake_client, no_sleep_backoff):
    return ClientEmbedder(
        embedding_client=fake_client, backoff=no_sleep_backoff, dimensions=DIMENSIONS
    )


@pytest.fixture
def identity():
    """Identity provider logged in as user A."""
    return SwitchableIdentityProvider(Identity(subject="user_a", email="a@example.com"))


@pytest.fixture
def ponder_app(question_store, embedding_store, vector_index, embedder, identity):
    """A Ponder instance on SQLite + in-memory index with the fake embedder."""
    from ponder import Ponder

    return Ponder(
        embedder=embedder,
        question_store=question_store,
        embedding_store=embedding_store,
        vector_index=vector_index,
        identity_provider=identity,
    )
