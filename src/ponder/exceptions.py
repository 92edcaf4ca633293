"""Exceptions raised by Ponder."""


class PonderError(Exception):
    """Base class for all Ponder errors."""


class UnauthenticatedError(PonderError):
    """Raised when an operation needs a caller identity and there is none."""

    def __init__(self, message: str = "Unauthenticated") -> None:
        super().__init__(message)


class NotFoundError(PonderError):
    """Raised when a referenced question or embedding does not exist."""


class ForbiddenError(PonderError):
    """Raised when a caller asks for a specific question they do not own."""


class QuestionValidationError(PonderError, ValueError):
    """Raised when question text fails validation."""


class EmbeddingGenerationFailed(PonderError):
    """Raised when no vector could be produced for a text.

    Attributes:
        attempts: Number of provider calls made before giving up.
    """

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class ProviderError(PonderError):
    """Base class for errors reported by the embedding provider."""


class TransientProviderError(ProviderError):
    """A provider failure worth retrying (rate limit, timeout, 5xx, network)."""


class TerminalProviderError(ProviderError):
    """A provider failure that will not go away on retry (bad request, auth)."""
