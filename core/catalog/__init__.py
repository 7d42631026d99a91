# Path: core/catalog/__init__.py
# Purpose: Package initializer for listing catalog readers.
# Layer: core/catalog.
# Details: Exposes the catalog contract, its errors, the Supabase and in-memory readers, and a factory.

from config.settings import AppSettings

from .base import CatalogError, CatalogUnavailableError, ListingCatalog
from .memory_catalog import MemoryCatalog
from .supabase_catalog import SupabaseCatalog


def build_catalog(settings: AppSettings) -> ListingCatalog:
    """Instantiate the Supabase catalog; raises CatalogUnavailableError without credentials."""

    return SupabaseCatalog(settings.vector_store)


__all__ = [
    "CatalogError",
    "CatalogUnavailableError",
    "ListingCatalog",
    "MemoryCatalog",
    "SupabaseCatalog",
    "build_catalog",
]
