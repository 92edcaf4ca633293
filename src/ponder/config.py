"""Environment-driven configuration for applications built on Ponder.

The library itself is configured programmatically (see ``ponder.settings``).
This module is for the application layer - the CLI, or any service that
wants ``PONDER_*`` environment variables and a ``.env`` file to decide how
Ponder is built.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from ponder.auth import IdentityProvider
    from ponder.ponder import Ponder
    from ponder.settings import Settings

DEFAULT_DATA_DIR = "./ponder_data"


class PonderConfig(BaseSettings):
    """Ponder application configuration.

    Every field can be set with a ``PONDER_``-prefixed environment variable,
    e.g. ``PONDER_EMBEDDING_MODEL`` or ``PONDER_DATA_DIR``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PONDER_",
        env_file=".env",
        extra="ignore",
    )

    # Embeddings
    embedding_model: str = "text-embedding-3-small"
    embedding_api_key: str | None = None

    # Storage
    data_dir: str = DEFAULT_DATA_DIR
    vector_index: Literal["chroma", "memory"] = "chroma"

    # Caller (stands in for a real identity provider on the command line)
    user: str | None = None
    user_email: str | None = None

    # Behaviour
    rate_limit_profile: Literal["aggressive", "conservative"] | None = None
    max_concurrent_embeddings: int | None = None
    max_retries: int | None = None

    @field_validator("user", "user_email", "embedding_api_key", "rate_limit_profile", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        if v == "":
            return None
        return v

    def build_settings(self) -> Settings:
        """Build behavioural Settings, applying the profile then explicit overrides."""
        from ponder.providers.litellm import EMBEDDING_DIMENSIONS
        from ponder.settings import Settings

        overrides: dict = {"embedding_dimensions": EMBEDDING_DIMENSIONS.get(self.embedding_model)}
        if self.max_concurrent_embeddings is not None:
            overrides["max_concurrent_embeddings"] = self.max_concurrent_embeddings
        if self.max_retries is not None:
            overrides["max_retries"] = self.max_retries

        if self.rate_limit_profile:
            return Settings.with_profile(self.rate_limit_profile, **overrides)
        return Settings(**overrides)

    def build_identity_provider(self) -> IdentityProvider:
        """Identity provider reporting the configured user (or nobody)."""
        from ponder.auth import StaticIdentityProvider
        from ponder.models import Identity

        if not self.user:
            return StaticIdentityProvider(None)
        return StaticIdentityProvider(Identity(subject=self.user, email=self.user_email))


def create_ponder(
    config: PonderConfig,
    identity_provider: IdentityProvider | None = None,
) -> Ponder:
    """Create a Ponder instance from configuration.

    Args:
        config: Application configuration
        identity_provider: Overrides the configured user

    Returns:
        Configured Ponder instance
    """
    from ponder.configuration import LiteLLMProvider, LocalStorage
    from ponder.ponder import Ponder

    return Ponder(
        provider=LiteLLMProvider(
            embedding=config.embedding_model,
            api_key=config.embedding_api_key,
        ),
        storage=LocalStorage(config.data_dir, vector_index=config.vector_index),
        identity_provider=identity_provider or config.build_identity_provider(),
        settings=config.build_settings(),
    )
