"""Per-repository sync metadata and file cache."""

from __future__ import annotations

from .memory import InMemoryCacheBackend, InMemoryCacheStore
from .protocol import (
    LAST_COMMIT_HASH_KEY,
    CacheBackend,
    CacheEntry,
    CacheRecord,
    CacheStore,
)
from .services import SqlCacheBackend, SqlCacheStore
from .storage import FileCacheRecord, SyncMetadataRecord, init_cache_storage

__all__ = [
    "LAST_COMMIT_HASH_KEY",
    "CacheBackend",
    "CacheEntry",
    "CacheRecord",
    "CacheStore",
    "FileCacheRecord",
    "InMemoryCacheBackend",
    "InMemoryCacheStore",
    "SqlCacheBackend",
    "SqlCacheStore",
    "SyncMetadataRecord",
    "init_cache_storage",
]
