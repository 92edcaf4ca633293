"""Central entry point for Ponder."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from ponder.auth import IdentityProvider
    from ponder.configuration import ProviderConfig, StorageConfig
    from ponder.embedder import Embedder
    from ponder.scheduler import JobScheduler
    from ponder.stores import EmbeddingStore, QuestionStore, VectorIndex

from ponder.auth import current_user, require_identity, require_user
from ponder.exceptions import ForbiddenError, NotFoundError, QuestionValidationError
from ponder.generator import EmbeddingGenerator
from ponder.hydrator import ResultHydrator
from ponder.models import (
    Embedding,
    IndexingStatus,
    IndexState,
    Question,
    QuestionPage,
    ScoredQuestion,
)
from ponder.search import RelatedQuestionsResolver, SemanticSearchService
from ponder.settings import Settings
from ponder.validation import validate_question


class Ponder:
    """Questions you can find again by meaning.

    Ponder wires the stores, the embedding pipeline and the search services
    together and exposes them as operations performed on behalf of whoever
    the identity provider reports as the caller.

    1. With a storage bundle:

        from ponder import Ponder, LiteLLMProvider, LocalStorage

        app = Ponder(
            provider=LiteLLMProvider(embedding="text-embedding-3-small"),
            storage=LocalStorage("./data"),
            identity_provider=my_identity_provider,
        )
        question_id = app.create_question("What is the meaning of life?")
        await app.wait_for_jobs()
        results = await app.semantic_search("purpose of life")

    2. With explicit stores:

        app = Ponder(
            provider=LiteLLMProvider(),
            question_store=SQLiteQuestionStore("./data/questions.db"),
            embedding_store=SQLiteEmbeddingStore("./data/embeddings.db"),
            vector_index=InMemoryVectorIndex(),
            identity_provider=my_identity_provider,
        )
    """

    def __init__(
        self,
        *,
        identity_provider: IdentityProvider,
        # EITHER a provider config...
        provider: ProviderConfig | None = None,
        # ...OR a ready embedder
        embedder: Embedder | None = None,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        question_store: QuestionStore | None = None,
        embedding_store: EmbeddingStore | None = None,
        vector_index: VectorIndex | None = None,
        # Common
        settings: Settings | None = None,
        scheduler: JobScheduler | None = None,
    ) -> None:
        """Create a Ponder instance.

        Args:
            identity_provider: Reports the current caller.
            provider: Provider configuration (builds the embedder). Mutually
                      exclusive with ``embedder``.
            embedder: A ready-made embedder, e.g. one sharing a client with
                      other Ponder instances.
            storage: Storage bundle. Mutually exclusive with explicit stores.
            question_store: Explicit question store.
            embedding_store: Explicit embedding store.
            vector_index: Explicit vector index.
            settings: Behavioural settings.
            scheduler: Job scheduler for background embedding. Defaults to an
                       AsyncioJobScheduler bounded by
                       ``settings.max_concurrent_embeddings``.

        Raises:
            ValueError: If the provider/embedder or store arguments are
                        missing or mixed.
        """
        self._settings = settings if settings is not None else Settings()
        self.identity_provider = identity_provider

        if storage is not None:
            if any([question_store, embedding_store, vector_index]):
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.question_store, self.embedding_store, self.vector_index = storage.build_stores()
        elif all([question_store, embedding_store, vector_index]):
            self.question_store = cast("QuestionStore", question_store)
            self.embedding_store = cast("EmbeddingStore", embedding_store)
            self.vector_index = cast("VectorIndex", vector_index)
        else:
            raise ValueError(
                "Must provide either 'storage' bundle or all explicit stores "
                "(question_store, embedding_store, vector_index)"
            )

        if (provider is None) == (embedder is None):
            raise ValueError("Provide exactly one of 'provider' or 'embedder'")
        self.embedder = embedder if embedder is not None else provider.build_embedder(self._settings)  # type: ignore[union-attr]

        self.generator = EmbeddingGenerator(
            question_store=self.question_store,
            embedding_store=self.embedding_store,
            vector_index=self.vector_index,
            embedder=self.embedder,
        )
        self.hydrator = ResultHydrator(self.question_store, self.embedding_store)
        self.search_service = SemanticSearchService(
            embedder=self.embedder,
            vector_index=self.vector_index,
            hydrator=self.hydrator,
            default_limit=self._settings.default_search_limit,
        )
        self.related_resolver = RelatedQuestionsResolver(
            embedding_store=self.embedding_store,
            vector_index=self.vector_index,
            hydrator=self.hydrator,
            default_limit=self._settings.default_related_limit,
        )

        if scheduler is None:
            from ponder.scheduler import AsyncioJobScheduler

            scheduler = AsyncioJobScheduler(
                self.generator.generate,
                max_concurrent=self._settings.max_concurrent_embeddings,
            )
        self.scheduler = scheduler

    @property
    def settings(self) -> Settings:
        return self._settings

    # Writes

    def create_question(self, text: str) -> str:
        """Store a question for the caller and schedule its embedding.

        The question is searchable once its job has run. Jobs scheduled from
        synchronous code start at the next ``wait_for_jobs()`` (or the next
        question created inside a running event loop), so call
        ``await app.wait_for_jobs()`` before relying on search results.

        Returns:
            The new question id

        Raises:
            UnauthenticatedError: If there is no caller.
            QuestionValidationError: If the trimmed text is empty, shorter
                than 3 or longer than 500 characters.
        """
        require_identity(self.identity_provider)
        result = validate_question(text)
        if not result.valid:
            raise QuestionValidationError(result.error)

        user = require_user(self.identity_provider, self.question_store)

        question = Question(owner_id=user.id, text=text.strip())
        self.question_store.put(question)
        self.embedding_store.set_status(IndexingStatus(question_id=question.id))
        self.scheduler.enqueue(question.id)
        return question.id

    async def generate_embedding(self, question_id: str) -> Embedding:
        """Run the embedding job for a question right away.

        This is what the scheduler runs; it is exposed for operational use.
        Unlike a scheduled job, failures propagate to the caller.
        """
        return await self.generator.generate(question_id)

    async def wait_for_jobs(self) -> None:
        """Wait for every scheduled embedding job to finish."""
        await self.scheduler.drain()

    def requeue_unindexed(
        self,
        states: tuple[IndexState, ...] = (IndexState.UNINDEXED, IndexState.FAILED),
    ) -> int:
        """Schedule embedding jobs again for questions in the given states.

        Returns:
            Number of jobs scheduled
        """
        count = 0
        for state in states:
            for status in self.embedding_store.list_by_state(state):
                self.scheduler.enqueue(status.question_id)
                count += 1
        return count

    # Reads

    async def semantic_search(self, query: str, limit: int | None = None) -> list[ScoredQuestion]:
        """Search the caller's questions by meaning.

        Raises:
            UnauthenticatedError: If there is no caller.
            EmbeddingGenerationFailed: If the query could not be embedded.
        """
        require_identity(self.identity_provider)
        user = current_user(self.identity_provider, self.question_store)
        if user is None:
            # Never wrote anything, so nothing of theirs can match
            return []
        return await self.search_service.search(query, requester_id=user.id, limit=limit)

    def get_related_questions(
        self, question_id: str, limit: int | None = None
    ) -> list[ScoredQuestion]:
        """Return the caller's questions closest in meaning to ``question_id``.

        Returns an empty list while the question is not yet indexed.

        Raises:
            UnauthenticatedError: If there is no caller.
            NotFoundError: If the question does not exist.
            ForbiddenError: If the caller does not own the question.
        """
        question = self.get_question(question_id)
        return self.related_resolver.related(
            question_id, requester_id=question.owner_id, limit=limit
        )

    def get_questions(self, num_items: int = 20, cursor: str | None = None) -> QuestionPage:
        """Page through the caller's questions, newest first.

        An unauthenticated caller, or one with no questions yet, gets an
        empty final page.
        """
        user = current_user(self.identity_provider, self.question_store)
        if user is None:
            return QuestionPage()
        return self.question_store.list_by_owner(user.id, num_items, cursor)

    def get_question(self, question_id: str) -> Question:
        """Fetch one of the caller's questions by id.

        Raises:
            UnauthenticatedError: If there is no caller.
            NotFoundError: If the question does not exist.
            ForbiddenError: If the caller does not own the question.
        """
        require_identity(self.identity_provider)
        question = self.question_store.get(question_id)
        if question is None:
            raise NotFoundError(f"Question not found: {question_id}")

        user = current_user(self.identity_provider, self.question_store)
        if user is None or question.owner_id != user.id:
            raise ForbiddenError(f"Not allowed to access question {question_id}")
        return question

    def get_indexing_status(self, question_id: str) -> IndexingStatus:
        """Report whether one of the caller's questions is searchable yet.

        Raises the same errors as ``get_question``.
        """
        self.get_question(question_id)
        return self.embedding_store.get_status(question_id)
