# tests/test_settings.py
"""Tests for behavioural Settings."""

import pytest

from ponder.retry import BackoffConfig
from ponder.settings import RATE_LIMIT_PROFILES, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.default_search_limit == 20
        assert settings.default_related_limit == 5
        assert settings.max_concurrent_embeddings == 4
        assert settings.max_retries == 3
        assert settings.base_delay == 1.0
        assert settings.max_delay == 8.0
        assert settings.jitter == 1.0
        assert settings.embedding_dimensions is None

    def test_overrides(self):
        settings = Settings(default_search_limit=10, embedding_dimensions=512)
        assert settings.default_search_limit == 10
        assert settings.embedding_dimensions == 512

    def test_backoff_config(self):
        config = Settings(max_retries=2, base_delay=0.5, max_delay=4.0, jitter=0.0).backoff_config()
        assert config == BackoffConfig(max_retries=2, base_delay=0.5, max_delay=4.0, jitter=0.0)
        assert config.max_attempts == 3


class TestRateLimitProfiles:
    def test_conservative(self):
        settings = Settings.with_profile("conservative")
        assert settings.max_concurrent_embeddings == 1
        assert settings.max_retries == 5
        assert settings.max_delay == 30.0

    def test_aggressive(self):
        settings = Settings.with_profile("aggressive")
        assert settings.max_concurrent_embeddings == 16

    def test_overrides_win(self):
        settings = Settings.with_profile("conservative", max_retries=1)
        assert settings.max_retries == 1
        assert settings.max_concurrent_embeddings == 1

    def test_profile_table_not_mutated(self):
        Settings.with_profile("aggressive", max_retries=9)
        assert RATE_LIMIT_PROFILES["aggressive"]["max_retries"] == 3

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            Settings.with_profile("reckless")  # type: ignore[arg-type]
