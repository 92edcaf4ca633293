"""Question, embedding and indexing status models."""

import time
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def now_ms() -> int:
    """Current Unix time in milliseconds."""
    return int(time.time() * 1000)


class Question(BaseModel):
    """A short text question owned by exactly one user."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: str
    text: str
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)


class Embedding(BaseModel):
    """The vector for one question, tagged with the model that produced it."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    question_id: str
    vector: list[float]
    model: str
    created_at: int = Field(default_factory=now_ms)

    @property
    def dimensions(self) -> int:
        return len(self.vector)


class IndexState(str, Enum):
    """Where a question is in the embedding pipeline."""

    UNINDEXED = "unindexed"
    INDEXED = "indexed"
    FAILED = "failed"


class IndexingStatus(BaseModel):
    """Explicit indexing state for a question.

    ``attempts`` counts provider calls made across all failed jobs for the
    question; it is reset when the question becomes indexed.
    """

    question_id: str
    state: IndexState = IndexState.UNINDEXED
    attempts: int = 0
    last_error: str | None = None
    updated_at: int = Field(default_factory=now_ms)
