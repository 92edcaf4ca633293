"""Embedding functionality for Ponder."""

from ponder.embedder.base import Embedder
from ponder.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
