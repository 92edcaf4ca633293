"""Background embedding generation for questions."""

import logging

from ponder.embedder import Embedder
from ponder.exceptions import EmbeddingGenerationFailed, NotFoundError
from ponder.models import Embedding, IndexingStatus, IndexState
from ponder.stores import EmbeddingStore, QuestionStore, VectorIndex

logger = logging.getLogger(__name__)


class EmbeddingGenerator:
    """Turns a stored question into a stored, indexed embedding.

    ``generate`` is the body of the background job. It is safe to run more
    than once for the same question: the embedding row is upserted by
    question id and the index entry is upserted by embedding id, so a
    repeated job replaces the vector instead of adding a second one.

    The indexing status is kept current on every outcome: ``indexed`` on
    success, ``failed`` (with cumulative attempts) when no vector could be
    produced or written.
    """

    def __init__(
        self,
        question_store: QuestionStore,
        embedding_store: EmbeddingStore,
        vector_index: VectorIndex,
        embedder: Embedder,
    ) -> None:
        self.question_store = question_store
        self.embedding_store = embedding_store
        self.vector_index = vector_index
        self.embedder = embedder

    async def generate(self, question_id: str) -> Embedding:
        """Embed a question's text and persist the vector.

        Args:
            question_id: The question to embed

        Returns:
            The stored embedding

        Raises:
            NotFoundError: If the question does not exist.
            EmbeddingGenerationFailed: If the provider gave up or returned nothing.
            Exception: Whatever the vector index or embedding store raised
                while writing; the status is recorded as ``failed`` first.
        """
        question = self.question_store.get(question_id)
        if question is None:
            raise NotFoundError(f"Question not found: {question_id}")

        try:
            vector = await self.embedder.aembed_text(question.text)
        except EmbeddingGenerationFailed as e:
            self._record_failure(question_id, e, e.attempts)
            raise

        embedding = Embedding(question_id=question_id, vector=vector, model=self.embedder.model)
        existing = self.embedding_store.get_by_question(question_id)
        if existing is not None:
            embedding = embedding.model_copy(update={"id": existing.id})

        # Index first: a row in the store is only written once its vector is searchable
        try:
            self.vector_index.upsert(embedding)
            embedding = self.embedding_store.upsert(embedding)
        except Exception as e:
            self._record_failure(question_id, e, 1)
            raise
        self.embedding_store.set_status(
            IndexingStatus(question_id=question_id, state=IndexState.INDEXED)
        )

        logger.info(
            "Indexed question %s (%d dimensions, %s)",
            question_id,
            embedding.dimensions,
            embedding.model,
        )
        return embedding

    def _record_failure(self, question_id: str, error: Exception, attempts: int) -> None:
        previous = self.embedding_store.get_status(question_id)
        if previous.state == IndexState.INDEXED:
            # An older vector is still searchable; keep serving it
            logger.warning("Re-embedding question %s failed: %s", question_id, error)
            return
        self.embedding_store.set_status(
            IndexingStatus(
                question_id=question_id,
                state=IndexState.FAILED,
                attempts=previous.attempts + attempts,
                last_error=str(error),
            )
        )
