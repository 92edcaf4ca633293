"""Data models for Ponder."""

from ponder.models.question import (
    Embedding,
    IndexingStatus,
    IndexState,
    Question,
    now_ms,
)
from ponder.models.results import QuestionPage, ScoredQuestion, VectorHit
from ponder.models.user import Identity, User

__all__ = [
    "Identity",
    "User",
    "Question",
    "Embedding",
    "IndexState",
    "IndexingStatus",
    "VectorHit",
    "ScoredQuestion",
    "QuestionPage",
    "now_ms",
]
