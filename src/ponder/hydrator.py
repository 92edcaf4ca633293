"""Resolution of raw vector hits into authorized results."""

import logging

from ponder.models import ScoredQuestion
from ponder.stores import EmbeddingStore, QuestionStore

logger = logging.getLogger(__name__)


class ResultHydrator:
    """Turns embedding ids from the vector index into the requester's questions.

    The vector index is shared by every user, so each hit is re-checked here
    before it leaves Ponder. Hits that are missing, orphaned, or owned by
    someone else are dropped silently; they are expected, not errors.
    """

    def __init__(self, question_store: QuestionStore, embedding_store: EmbeddingStore) -> None:
        self.question_store = question_store
        self.embedding_store = embedding_store

    def hydrate(
        self,
        candidate_ids: list[str],
        score_map: dict[str, float],
        requester_id: str,
    ) -> list[ScoredQuestion]:
        """Resolve candidates in the given order, keeping only the requester's.

        Args:
            candidate_ids: Embedding ids, most similar first
            score_map: Similarity per embedding id (missing ids score 0)
            requester_id: User id the results are for

        Returns:
            Results in candidate order. Never re-sorted.
        """
        results: list[ScoredQuestion] = []

        for embedding_id in candidate_ids:
            embedding = self.embedding_store.get(embedding_id)
            if embedding is None:
                logger.debug("Skipping hit %s: embedding not found", embedding_id)
                continue

            question = self.question_store.get(embedding.question_id)
            if question is None:
                logger.debug("Skipping hit %s: question %s not found", embedding_id, embedding.question_id)
                continue

            if question.owner_id != requester_id:
                continue

            results.append(ScoredQuestion(question=question, score=score_map.get(embedding_id, 0.0)))

        return results
