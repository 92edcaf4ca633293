"""In-memory vector index implementation."""

import numpy as np

from ponder.models import Embedding, VectorHit
from ponder.stores.base import VectorIndex


class InMemoryVectorIndex(VectorIndex):
    """Brute-force cosine similarity index held in process memory.

    Useful for tests and small data sets. Ties are broken by embedding id so
    results are deterministic.
    """

    def __init__(self) -> None:
        self._vectors: dict[str, np.ndarray] = {}
        self._metadata: dict[str, dict[str, str]] = {}

    def upsert(self, embedding: Embedding) -> None:
        """Add or replace the entry for an embedding."""
        self._vectors[embedding.id] = np.asarray(embedding.vector, dtype=np.float64)
        self._metadata[embedding.id] = {
            "question_id": embedding.question_id,
            "model": embedding.model,
        }

    def top_k(
        self,
        vector: list[float],
        k: int,
        where: dict[str, str] | None = None,
    ) -> list[VectorHit]:
        """Return up to k hits ordered by descending cosine similarity."""
        if k < 1 or not self._vectors:
            return []

        query = np.asarray(vector, dtype=np.float64)
        query_norm = np.linalg.norm(query)

        scored: list[tuple[float, str]] = []
        for eid, candidate in self._vectors.items():
            meta = self._metadata[eid]
            if where and any(meta.get(key) != value for key, value in where.items()):
                continue
            denom = query_norm * np.linalg.norm(candidate)
            score = float(np.dot(query, candidate) / denom) if denom else 0.0
            scored.append((score, eid))

        scored.sort(key=lambda item: (-item[0], item[1]))
        return [
            VectorHit(id=eid, score=score, question_id=self._metadata[eid]["question_id"])
            for score, eid in scored[:k]
        ]

    def count(self) -> int:
        """Count the entries in the index."""
        return len(self._vectors)
