# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes settings models and logging setup for application-wide configuration.

from .logging_setup import configure_logging
from .settings import AppSettings, EmbedderSettings, IndexingSettings, SearchSettings, VectorStoreSettings

__all__ = [
    "AppSettings",
    "EmbedderSettings",
    "IndexingSettings",
    "SearchSettings",
    "VectorStoreSettings",
    "configure_logging",
]
