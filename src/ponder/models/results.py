"""Result data models for Ponder queries."""

from pydantic import BaseModel, Field

from ponder.models.question import Question


class VectorHit(BaseModel):
    """A raw candidate returned by the vector index."""

    id: str  # Embedding id
    score: float
    question_id: str | None = None


class ScoredQuestion(BaseModel):
    """A hydrated, authorized search result."""

    question: Question
    score: float


class QuestionPage(BaseModel):
    """One page of a user's questions, newest first."""

    page: list[Question] = Field(default_factory=list)
    is_done: bool = True
    continue_cursor: str = ""
