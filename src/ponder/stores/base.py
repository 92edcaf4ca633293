"""Abstract base classes for storage."""

from abc import ABC, abstractmethod

from ponder.models import (
    Embedding,
    IndexingStatus,
    IndexState,
    Question,
    QuestionPage,
    User,
    VectorHit,
)


class QuestionStore(ABC):
    """Document store for users and their questions."""

    @abstractmethod
    def get_user(self, user_id: str) -> User | None:
        """Retrieve a user by ID. Returns None if not found."""
        ...

    @abstractmethod
    def get_user_by_subject(self, subject: str) -> User | None:
        """Retrieve a user by identity subject. Returns None if not found."""
        ...

    @abstractmethod
    def put_user(self, user: User) -> None:
        """Store a user."""
        ...

    @abstractmethod
    def put(self, question: Question) -> None:
        """Store a question."""
        ...

    @abstractmethod
    def get(self, question_id: str) -> Question | None:
        """Retrieve a question by ID. Returns None if not found."""
        ...

    @abstractmethod
    def list_by_owner(
        self, owner_id: str, num_items: int, cursor: str | None = None
    ) -> QuestionPage:
        """Page through an owner's questions, newest first.

        The returned page's continue_cursor is "" on the final page.
        """
        ...

    @abstractmethod
    def count_questions(self) -> int:
        """Count the total number of questions in the store."""
        ...


class EmbeddingStore(ABC):
    """Store for embedding rows and explicit per-question indexing status."""

    @abstractmethod
    def get(self, embedding_id: str) -> Embedding | None:
        """Retrieve an embedding by ID. Returns None if not found."""
        ...

    @abstractmethod
    def get_by_question(self, question_id: str) -> Embedding | None:
        """Retrieve the embedding for a question. Returns None if not indexed."""
        ...

    @abstractmethod
    def upsert(self, embedding: Embedding) -> Embedding:
        """Insert or replace the embedding for ``embedding.question_id``.

        At most one embedding exists per question. When one already exists
        its id is kept and the vector, model and timestamp are replaced.

        Returns:
            The embedding as stored (with the effective id).
        """
        ...

    @abstractmethod
    def list_embeddings(self) -> list[Embedding]:
        """List every stored embedding, oldest first."""
        ...

    @abstractmethod
    def count_embeddings(self) -> int:
        """Count the total number of embeddings in the store."""
        ...

    @abstractmethod
    def get_status(self, question_id: str) -> IndexingStatus:
        """Get the indexing status of a question (UNINDEXED if never recorded)."""
        ...

    @abstractmethod
    def set_status(self, status: IndexingStatus) -> None:
        """Record the indexing status of a question."""
        ...

    @abstractmethod
    def list_by_state(self, state: IndexState) -> list[IndexingStatus]:
        """List statuses in the given state, oldest update first."""
        ...

    @abstractmethod
    def count_by_state(self) -> dict[IndexState, int]:
        """Count recorded statuses per state (every state present, zero if none)."""
        ...


class VectorIndex(ABC):
    """Nearest-neighbour index over embedding vectors.

    Entries are keyed by embedding id and carry the question id as metadata.
    Scores are similarities: higher means closer.
    """

    @abstractmethod
    def upsert(self, embedding: Embedding) -> None:
        """Add or replace the entry for an embedding."""
        ...

    @abstractmethod
    def top_k(
        self,
        vector: list[float],
        k: int,
        where: dict[str, str] | None = None,
    ) -> list[VectorHit]:
        """Return up to k hits ordered by descending similarity.

        Args:
            vector: Query vector
            k: Maximum number of hits
            where: Optional metadata equality filter, e.g. {"question_id": "..."}
        """
        ...

    @abstractmethod
    def count(self) -> int:
        """Count the entries in the index."""
        ...
