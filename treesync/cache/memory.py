"""Process-local cache backend.

Useful for embedding treesync in short-lived processes and as a
deterministic store in tests. Nothing survives the process.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .protocol import CacheEntry, CacheRecord


class InMemoryCacheStore:
    """Dictionary-backed :class:`~treesync.cache.protocol.CacheStore`."""

    def __init__(self) -> None:
        """Start with empty metadata and file namespaces."""
        self.meta: dict[str, str] = {}
        self.files: dict[str, CacheRecord] = {}

    async def get_meta(self, key: str) -> str | None:
        """Return the metadata value for ``key``."""
        return self.meta.get(key)

    async def set_meta(self, key: str, value: str) -> None:
        """Store a metadata value."""
        self.meta[key] = value

    async def get_all_file_records(self) -> list[CacheEntry]:
        """Return cached records ordered by path."""
        return sorted(self.files.items())

    async def upsert_file_records(self, records: cabc.Iterable[CacheEntry]) -> None:
        """Create or replace file records."""
        self.files.update(records)

    async def delete_file_records(self, paths: cabc.Iterable[str]) -> None:
        """Drop file records."""
        for path in paths:
            self.files.pop(path, None)


class InMemoryCacheBackend:
    """Hand out one :class:`InMemoryCacheStore` per cache key."""

    def __init__(self) -> None:
        """Initialise the store registry."""
        self._stores: dict[str, InMemoryCacheStore] = {}

    def open(self, cache_key: str) -> InMemoryCacheStore:
        """Return the store for ``cache_key``, creating it on first use."""
        store = self._stores.get(cache_key)
        if store is None:
            store = self._stores[cache_key] = InMemoryCacheStore()
        return store
