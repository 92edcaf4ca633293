"""Caller identity and user resolution."""

from abc import ABC, abstractmethod

from ponder.exceptions import UnauthenticatedError
from ponder.models import Identity, User
from ponder.stores.base import QuestionStore


class IdentityProvider(ABC):
    """Tells Ponder who is calling.

    Token and session validation happen outside Ponder; an implementation
    only reports the result.
    """

    @abstractmethod
    def get_caller_identity(self) -> Identity | None:
        """Return the current caller's identity, or None if unauthenticated."""
        ...


class StaticIdentityProvider(IdentityProvider):
    """Identity provider that always reports the same caller.

    Example:
        provider = StaticIdentityProvider(Identity(subject="user_123"))
        anonymous = StaticIdentityProvider(None)
    """

    def __init__(self, identity: Identity | None) -> None:
        self.identity = identity

    def get_caller_identity(self) -> Identity | None:
        return self.identity


def require_identity(identity_provider: IdentityProvider) -> Identity:
    """Return the caller identity or raise UnauthenticatedError."""
    identity = identity_provider.get_caller_identity()
    if identity is None:
        raise UnauthenticatedError()
    return identity


def require_user(identity_provider: IdentityProvider, question_store: QuestionStore) -> User:
    """Resolve the caller to a User, creating the record on first sight.

    Raises:
        UnauthenticatedError: If there is no caller identity.
    """
    identity = require_identity(identity_provider)

    user = question_store.get_user_by_subject(identity.subject)
    if user is not None:
        return user

    user = User(subject=identity.subject, email=identity.email or "", name=identity.name)
    question_store.put_user(user)
    return user


def current_user(identity_provider: IdentityProvider, question_store: QuestionStore) -> User | None:
    """Resolve the caller to an existing User without creating one.

    Returns None if the caller is unauthenticated or has never written anything.
    """
    identity = identity_provider.get_caller_identity()
    if identity is None:
        return None
    return question_store.get_user_by_subject(identity.subject)
