# Path: core/search/__init__.py
# Purpose: Package initializer for semantic query orchestration.
# Layer: core/search.
# Details: Exposes the search service entrypoint.

from .pipeline import SemanticSearchService

__all__ = ["SemanticSearchService"]
