"""User and caller identity models."""

from uuid import uuid4

from pydantic import BaseModel, Field

from ponder.models.question import now_ms


class Identity(BaseModel):
    """What the identity provider knows about the current caller."""

    subject: str  # Stable external id
    email: str | None = None
    name: str | None = None


class User(BaseModel):
    """A user record, created the first time an authenticated caller is seen."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    subject: str
    email: str = ""
    name: str | None = None
    created_at: int = Field(default_factory=now_ms)
