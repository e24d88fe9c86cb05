"""Cache store ports.

A cache store keeps two namespaces for one repository:

- sync metadata, a handful of single values such as the last synced commit
  hash;
- the file cache, one :class:`CacheRecord` per repository path.

Stores are opened per cache key through a :class:`CacheBackend`, so one
backend can serve many repositories without their records mixing.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from treesync.files.models import FileMeta

LAST_COMMIT_HASH_KEY = "last_commit_hash"


@dc.dataclass(frozen=True, slots=True)
class CacheRecord:
    """Cached state of one repository path."""

    sha: str
    meta: FileMeta | None = None
    text: str | None = None
    size: int | None = None


CacheEntry: typ.TypeAlias = tuple[str, CacheRecord]


@typ.runtime_checkable
class CacheStore(typ.Protocol):
    """Persistent cache for a single repository."""

    async def get_meta(self, key: str) -> str | None:
        """Return the sync metadata value stored under ``key``."""
        ...

    async def set_meta(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    async def get_all_file_records(self) -> list[CacheEntry]:
        """Return every cached ``(path, record)`` pair."""
        ...

    async def upsert_file_records(self, records: cabc.Iterable[CacheEntry]) -> None:
        """Create or overwrite the records for the given paths."""
        ...

    async def delete_file_records(self, paths: cabc.Iterable[str]) -> None:
        """Remove the records for the given paths; unknown paths are ignored."""
        ...


@typ.runtime_checkable
class CacheBackend(typ.Protocol):
    """Factory of per-repository cache stores."""

    def open(self, cache_key: str) -> CacheStore:
        """Return the store for ``cache_key``."""
        ...
