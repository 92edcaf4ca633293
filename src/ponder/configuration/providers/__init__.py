"""Provider configurations for Ponder."""

from ponder.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
