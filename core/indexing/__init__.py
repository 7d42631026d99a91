# Path: core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes canonical text building and the index maintainer.

from .index_builder import IndexMaintainer
from .text_builder import build_canonical_text, normalize_text

__all__ = ["IndexMaintainer", "build_canonical_text", "normalize_text"]
