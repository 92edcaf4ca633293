"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ponder.stores import EmbeddingStore, QuestionStore, VectorIndex


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite and Chroma.

    All data is persisted to the specified directory:
    - questions.db: Users and questions (SQLite)
    - embeddings.db: Embedding rows and indexing status (SQLite)
    - chroma/: Vector index (ChromaDB), unless vector_index="memory"

    With vector_index="memory" the index lives in process memory and is
    rebuilt from embeddings.db on startup.

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.
        vector_index: "chroma" (persistent) or "memory".

    Example:
        storage = LocalStorage("./my_data")
    """

    data_dir: str
    vector_index: Literal["chroma", "memory"] = "chroma"

    def build_stores(self) -> tuple[QuestionStore, EmbeddingStore, VectorIndex]:
        """Build all three storage components.

        Creates the data directory if it doesn't exist.

        Returns:
            Tuple of (question_store, embedding_store, vector_index)
        """
        from ponder.stores import (
            ChromaVectorIndex,
            InMemoryVectorIndex,
            SQLiteEmbeddingStore,
            SQLiteQuestionStore,
        )

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        question_store = SQLiteQuestionStore(os.path.join(self.data_dir, "questions.db"))
        embedding_store = SQLiteEmbeddingStore(os.path.join(self.data_dir, "embeddings.db"))

        index: VectorIndex
        if self.vector_index == "chroma":
            index = ChromaVectorIndex(os.path.join(self.data_dir, "chroma"))
        elif self.vector_index == "memory":
            index = InMemoryVectorIndex()
            for embedding in embedding_store.list_embeddings():
                index.upsert(embedding)
        else:
            raise ValueError(f"Unknown vector index: {self.vector_index}")

        return question_store, embedding_store, index
