"""Behavioural settings for Ponder.

Settings are passed programmatically - the library does not read from
environment variables. Applications that want env-based config use
``ponder.config.PonderConfig`` and pass the resulting Settings explicitly.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

from ponder.retry import BackoffConfig

# Rate limit profile definitions
RATE_LIMIT_PROFILES: dict[str, dict[str, Any]] = {
    "aggressive": {
        "max_concurrent_embeddings": 16,
        "max_retries": 3,
    },
    "conservative": {
        "max_concurrent_embeddings": 1,
        "max_retries": 5,
        "max_delay": 30.0,
    },
}


class Settings(BaseModel):
    """Behavioural settings for Ponder.

    Example:
        settings = Settings(default_search_limit=10)

        # Or use a rate limit profile for free API tiers
        settings = Settings.with_profile("conservative")
    """

    # Result sizes
    default_search_limit: int = 20
    default_related_limit: int = 5

    # Background embedding jobs running at once
    max_concurrent_embeddings: int = 4

    # Backoff around each embedding provider call (seconds)
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 8.0
    jitter: float = 1.0

    # Expected vector length; None takes it from the embedding model
    embedding_dimensions: int | None = None

    @classmethod
    def with_profile(
        cls,
        profile: Literal["aggressive", "conservative"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings with a rate limit profile.

        - "aggressive": For paid API tiers with high rate limits
        - "conservative": For free tiers or APIs with strict rate limits

        Args:
            profile: The rate limit profile to use.
            **overrides: Additional settings to override profile defaults.
        """
        if profile not in RATE_LIMIT_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(RATE_LIMIT_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = RATE_LIMIT_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)

    def backoff_config(self) -> BackoffConfig:
        """Build the BackoffConfig used around embedding provider calls."""
        return BackoffConfig(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
            jitter=self.jitter,
        )
