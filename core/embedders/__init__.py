# Path: core/embedders/__init__.py
# Purpose: Package initializer for embedder implementations and interfaces.
# Layer: core/embedders.
# Details: Exposes the base interface, the HTTP and offline implementations, and a settings-driven factory.

from config.settings import EmbedderSettings

from .base import Embedder
from .hash_embedder import HashEmbedder
from .openai_embedder import OpenAIEmbedder


def build_embedder(settings: EmbedderSettings) -> Embedder:
    """Instantiate the embedder named in ``settings``."""

    if settings.name == "openai":
        return OpenAIEmbedder(settings)
    if settings.name == "hash":
        return HashEmbedder(dim=settings.dim)
    raise ValueError(f"Unknown embedder: {settings.name}")


__all__ = ["Embedder", "HashEmbedder", "OpenAIEmbedder", "build_embedder"]
