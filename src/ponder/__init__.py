"""Ponder - record short questions and find them again by meaning.

Every question is embedded in the background; search embeds the query,
asks a vector index for the nearest neighbours and re-checks each hit
against the caller before returning it.

Quick Start:
    from ponder import Identity, LiteLLMProvider, LocalStorage, Ponder, StaticIdentityProvider

    app = Ponder(
        provider=LiteLLMProvider(embedding="text-embedding-3-small"),
        storage=LocalStorage("./data"),
        identity_provider=StaticIdentityProvider(Identity(subject="user_123")),
    )

    question_id = app.create_question("What is the meaning of life?")
    await app.wait_for_jobs()

    results = await app.semantic_search("purpose of life")
    related = app.get_related_questions(question_id)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("ponder-search")
except PackageNotFoundError:
    # Running from a source tree without an installed distribution
    __version__ = "unknown"

from ponder.auth import IdentityProvider, StaticIdentityProvider
from ponder.configuration import LiteLLMProvider, LocalStorage, ProviderConfig, StorageConfig
from ponder.embedder import ClientEmbedder, Embedder
from ponder.exceptions import (
    EmbeddingGenerationFailed,
    ForbiddenError,
    NotFoundError,
    PonderError,
    ProviderError,
    QuestionValidationError,
    TerminalProviderError,
    TransientProviderError,
    UnauthenticatedError,
)
from ponder.generator import EmbeddingGenerator
from ponder.hydrator import ResultHydrator
from ponder.models import (
    Embedding,
    Identity,
    IndexingStatus,
    IndexState,
    Question,
    QuestionPage,
    ScoredQuestion,
    User,
    VectorHit,
)
from ponder.ponder import Ponder
from ponder.providers import EmbeddingClient
from ponder.retry import BackoffConfig, BackoffPolicy
from ponder.scheduler import AsyncioJobScheduler, JobScheduler
from ponder.search import RelatedQuestionsResolver, SemanticSearchService
from ponder.settings import Settings
from ponder.stores import (
    ChromaVectorIndex,
    EmbeddingStore,
    InMemoryVectorIndex,
    QuestionStore,
    SQLiteEmbeddingStore,
    SQLiteQuestionStore,
    VectorIndex,
)

__all__ = [
    "__version__",
    # Central entry point
    "Ponder",
    # Models
    "Embedding",
    "Identity",
    "IndexingStatus",
    "IndexState",
    "Question",
    "QuestionPage",
    "ScoredQuestion",
    "User",
    "VectorHit",
    # Config
    "Settings",
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Identity
    "IdentityProvider",
    "StaticIdentityProvider",
    # Embedding
    "EmbeddingClient",
    "Embedder",
    "ClientEmbedder",
    "BackoffConfig",
    "BackoffPolicy",
    # Pipeline
    "EmbeddingGenerator",
    "JobScheduler",
    "AsyncioJobScheduler",
    "ResultHydrator",
    "SemanticSearchService",
    "RelatedQuestionsResolver",
    # Storage
    "QuestionStore",
    "EmbeddingStore",
    "VectorIndex",
    "SQLiteQuestionStore",
    "SQLiteEmbeddingStore",
    "ChromaVectorIndex",
    "InMemoryVectorIndex",
    # Errors
    "PonderError",
    "UnauthenticatedError",
    "NotFoundError",
    "ForbiddenError",
    "QuestionValidationError",
    "EmbeddingGenerationFailed",
    "ProviderError",
    "TransientProviderError",
    "TerminalProviderError",
]
