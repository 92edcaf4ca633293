"""Storage configurations for Ponder."""

from ponder.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
