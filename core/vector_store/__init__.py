# Path: core/vector_store/__init__.py
# Purpose: Package initializer for vector store interfaces and implementations.
# Layer: core/vector_store.
# Details: Exposes the base store contract, the vector literal codec, and the Supabase and in-memory stores.

from config.settings import AppSettings

from .base import StoreUnavailableError, VectorStore
from .codec import decode_vector, encode_vector
from .memory_store import MemoryStore
from .supabase_store import SupabaseStore


def build_vector_store(settings: AppSettings) -> VectorStore:
    """Instantiate the store named in ``settings``; raises StoreUnavailableError when it cannot be built."""

    store_settings = settings.vector_store
    if store_settings.name == "supabase":
        return SupabaseStore(store_settings, dim=settings.embedder.dim)
    if store_settings.name == "memory":
        store = MemoryStore(dim=settings.embedder.dim)
        if store_settings.index_path.exists():
            store.load(str(store_settings.index_path))
        return store
    raise StoreUnavailableError(f"Unknown vector store: {store_settings.name}")


__all__ = [
    "MemoryStore",
    "StoreUnavailableError",
    "SupabaseStore",
    "VectorStore",
    "build_vector_store",
    "decode_vector",
    "encode_vector",
]
