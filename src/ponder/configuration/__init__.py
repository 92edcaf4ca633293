"""Configuration objects for Ponder.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build the embedding pipeline):
- LiteLLMProvider: Uses LiteLLM for embedding calls

Storage configurations (build data stores):
- LocalStorage: SQLite + Chroma (or in-memory) for local use

Example:
    from ponder import Ponder, LiteLLMProvider, LocalStorage

    app = Ponder(
        provider=LiteLLMProvider(embedding="text-embedding-3-small"),
        storage=LocalStorage("./data"),
        identity_provider=my_identity_provider,
    )
"""

from ponder.configuration.base import ProviderConfig, StorageConfig
from ponder.configuration.providers import LiteLLMProvider
from ponder.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
