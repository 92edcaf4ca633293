"""Semantic search and related-question lookup."""

from ponder.embedder import Embedder
from ponder.hydrator import ResultHydrator
from ponder.models import ScoredQuestion, VectorHit
from ponder.stores import EmbeddingStore, VectorIndex


def _hydrate_hits(
    hydrator: ResultHydrator, hits: list[VectorHit], requester_id: str
) -> list[ScoredQuestion]:
    return hydrator.hydrate(
        candidate_ids=[hit.id for hit in hits],
        score_map={hit.id: hit.score for hit in hits},
        requester_id=requester_id,
    )


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError("limit must be >= 1")


class SemanticSearchService:
    """Finds a requester's questions by meaning.

    Example:
        service = SemanticSearchService(embedder, vector_index, hydrator)
        results = await service.search("purpose of life", requester_id=user.id)
    """

    def __init__(
        self,
        embedder: Embedder,
        vector_index: VectorIndex,
        hydrator: ResultHydrator,
        default_limit: int = 20,
    ) -> None:
        """Initialize the search service.

        Args:
            embedder: Embeds the query text (same path as background generation)
            vector_index: Index to search
            hydrator: Resolves and authorizes hits
            default_limit: Number of candidates when no limit is given
        """
        self.embedder = embedder
        self.vector_index = vector_index
        self.hydrator = hydrator
        self.default_limit = default_limit

    async def search(
        self,
        query_text: str,
        requester_id: str,
        limit: int | None = None,
    ) -> list[ScoredQuestion]:
        """Search for questions similar to ``query_text``.

        At most ``limit`` candidates are taken from the index; results owned
        by other users are filtered afterwards, so fewer may be returned.

        Raises:
            EmbeddingGenerationFailed: If the query could not be embedded.
        """
        limit = self.default_limit if limit is None else limit
        _check_limit(limit)

        query_vector = await self.embedder.aembed_text(query_text)
        hits = self.vector_index.top_k(query_vector, k=limit)
        return _hydrate_hits(self.hydrator, hits, requester_id)


class RelatedQuestionsResolver:
    """Finds questions close in meaning to an existing question."""

    def __init__(
        self,
        embedding_store: EmbeddingStore,
        vector_index: VectorIndex,
        hydrator: ResultHydrator,
        default_limit: int = 5,
    ) -> None:
        self.embedding_store = embedding_store
        self.vector_index = vector_index
        self.hydrator = hydrator
        self.default_limit = default_limit

    def related(
        self,
        question_id: str,
        requester_id: str,
        limit: int | None = None,
    ) -> list[ScoredQuestion]:
        """Return questions related to ``question_id``, excluding itself.

        A question that has not been embedded yet has no related questions;
        the result is an empty list, not an error. Fewer than ``limit``
        results are returned when fewer candidates exist.
        """
        limit = self.default_limit if limit is None else limit
        _check_limit(limit)

        anchor = self.embedding_store.get_by_question(question_id)
        if anchor is None:
            return []

        # One extra: the anchor is usually its own nearest neighbour
        hits = self.vector_index.top_k(anchor.vector, k=limit + 1)
        hits = [
            hit for hit in hits if hit.id != anchor.id and hit.question_id != question_id
        ][:limit]
        return _hydrate_hits(self.hydrator, hits, requester_id)
