"""ChromaDB vector index implementation."""

from pathlib import Path

import chromadb

from ponder.models import Embedding, VectorHit
from ponder.stores.base import VectorIndex


class ChromaVectorIndex(VectorIndex):
    """ChromaDB-based vector index using cosine space."""

    def __init__(self, persist_dir: str, collection_name: str = "ponder") -> None:
        """Initialize the ChromaDB index."""
        Path(persist_dir).mkdir(parents=True, exist_ok=True)
        self._client = chromadb.PersistentClient(path=persist_dir)
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    def close(self) -> None:
        """Close the index and release resources.

        ChromaDB doesn't have an official close method, so we call the internal
        _system.stop() to release file handles.

        See: https://github.com/chroma-core/chroma/issues/5868
        """
        self._collection = None  # type: ignore[assignment]

        try:
            if self._client is not None and hasattr(self._client, "_system"):
                self._client._system.stop()
        except Exception:
            pass  # Best effort cleanup

        self._client = None  # type: ignore[assignment]

    def upsert(self, embedding: Embedding) -> None:
        """Add or replace the entry for an embedding."""
        self._collection.upsert(
            ids=[embedding.id],
            embeddings=[embedding.vector],  # type: ignore[arg-type]
            metadatas=[{"question_id": embedding.question_id, "model": embedding.model}],
        )

    def top_k(
        self,
        vector: list[float],
        k: int,
        where: dict[str, str] | None = None,
    ) -> list[VectorHit]:
        """Search for the nearest embeddings."""
        total = self._collection.count()
        if total == 0 or k < 1:
            return []

        results = self._collection.query(
            query_embeddings=[vector],  # type: ignore[arg-type]
            n_results=min(k, total),
            where=where,  # type: ignore[arg-type]
            include=["metadatas", "distances"],
        )

        ids = results["ids"][0]
        metadatas = results["metadatas"][0]  # type: ignore[index]
        distances = results["distances"][0]  # type: ignore[index]

        # For cosine distance: similarity = 1 - distance
        return [
            VectorHit(id=eid, score=1.0 - dist, question_id=str(meta["question_id"]))
            for eid, meta, dist in zip(ids, metadatas, distances, strict=True)
        ]

    def count(self) -> int:
        """Count the entries in the index."""
        return self._collection.count()
