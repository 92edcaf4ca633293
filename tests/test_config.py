# tests/test_config.py
"""Tests for environment-driven configuration."""

import pytest

from ponder.auth import StaticIdentityProvider
from ponder.config import PonderConfig, create_ponder
from ponder.ponder import Ponder
from ponder.stores import InMemoryVectorIndex


def load(**kwargs) -> PonderConfig:
    # Ignore any .env in the working directory
    return PonderConfig(_env_file=None, **kwargs)


class TestPonderConfig:
    def test_defaults(self):
        config = load()
        assert config.embedding_model == "text-embedding-3-small"
        assert config.embedding_api_key is None
        assert config.data_dir == "./ponder_data"
        assert config.vector_index == "chroma"
        assert config.user is None
        assert config.rate_limit_profile is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("PONDER_EMBEDDING_MODEL", "gemini/text-embedding-004")
        monkeypatch.setenv("PONDER_DATA_DIR", "/tmp/elsewhere")
        monkeypatch.setenv("PONDER_VECTOR_INDEX", "memory")
        monkeypatch.setenv("PONDER_USER", "alice")
        monkeypatch.setenv("PONDER_MAX_RETRIES", "7")

        config = load()
        assert config.embedding_model == "gemini/text-embedding-004"
        assert config.data_dir == "/tmp/elsewhere"
        assert config.vector_index == "memory"
        assert config.user == "alice"
        assert config.max_retries == 7

    def test_empty_values_are_none(self, monkeypatch):
        monkeypatch.setenv("PONDER_USER", "")
        monkeypatch.setenv("PONDER_RATE_LIMIT_PROFILE", "")

        config = load()
        assert config.user is None
        assert config.rate_limit_profile is None

    def test_rejects_unknown_index(self, monkeypatch):
        monkeypatch.setenv("PONDER_VECTOR_INDEX", "faiss")
        with pytest.raises(ValueError):
            load()


class TestBuildSettings:
    def test_dimensions_follow_model(self):
        assert load().build_settings().embedding_dimensions == 1536
        assert load(embedding_model="text-embedding-3-large").build_settings().embedding_dimensions == 3072

    def test_unknown_model_skips_dimension_check(self):
        settings = load(embedding_model="some/custom-model").build_settings()
        assert settings.embedding_dimensions is None

    def test_profile_then_overrides(self):
        settings = load(rate_limit_profile="conservative", max_retries=2).build_settings()
        assert settings.max_concurrent_embeddings == 1
        assert settings.max_retries == 2

    def test_explicit_concurrency(self):
        assert load(max_concurrent_embeddings=8).build_settings().max_concurrent_embeddings == 8


class TestBuildIdentityProvider:
    def test_no_user(self):
        provider = load().build_identity_provider()
        assert isinstance(provider, StaticIdentityProvider)
        assert provider.get_caller_identity() is None

    def test_user(self):
        identity = load(user="alice", user_email="a@example.com").build_identity_provider().get_caller_identity()
        assert identity.subject == "alice"
        assert identity.email == "a@example.com"


class TestCreatePonder:
    def test_create(self, temp_dir):
        app = create_ponder(load(data_dir=temp_dir, vector_index="memory", user="alice"))

        assert isinstance(app, Ponder)
        assert isinstance(app.vector_index, InMemoryVectorIndex)
        assert app.identity_provider.get_caller_identity().subject == "alice"

    def test_identity_override(self, temp_dir, identity):
        app = create_ponder(load(data_dir=temp_dir, vector_index="memory"), identity_provider=identity)
        assert app.identity_provider is identity
