"""Storage abstractions for Ponder."""

from ponder.stores.base import EmbeddingStore, QuestionStore, VectorIndex
from ponder.stores.chroma import ChromaVectorIndex
from ponder.stores.memory import InMemoryVectorIndex
from ponder.stores.sqlite_embedding import SQLiteEmbeddingStore
from ponder.stores.sqlite_question import SQLiteQuestionStore

__all__ = [
    "QuestionStore",
    "EmbeddingStore",
    "VectorIndex",
    "SQLiteQuestionStore",
    "SQLiteEmbeddingStore",
    "ChromaVectorIndex",
    "InMemoryVectorIndex",
]
