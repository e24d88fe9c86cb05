"""SQLAlchemy-backed cache store."""

from __future__ import annotations

import itertools
import typing as typ

from sqlalchemy import delete, select

from .protocol import CacheRecord
from .storage import FileCacheRecord, SyncMetadataRecord

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from .protocol import CacheEntry

    SessionFactory: typ.TypeAlias = async_sessionmaker[AsyncSession]

# Keeps IN clauses under SQLite's bound-parameter limit.
_PATH_CHUNK_SIZE = 500

T = typ.TypeVar("T")


def _chunks(items: cabc.Iterable[T], size: int) -> cabc.Iterator[list[T]]:
    iterator = iter(items)
    while chunk := list(itertools.islice(iterator, size)):
        yield chunk


def _to_record(row: FileCacheRecord) -> CacheRecord:
    return CacheRecord(sha=row.sha, meta=row.meta, text=row.text, size=row.size)


class SqlCacheStore:
    """Cache store persisting into the ``sync_metadata``/``file_cache`` tables.

    Every query is scoped to the store's cache key. Each operation runs in its
    own transaction; the two namespaces are not updated atomically together.
    """

    def __init__(self, session_factory: SessionFactory, cache_key: str) -> None:
        """Bind the store to a session factory and cache key."""
        self._session_factory = session_factory
        self._cache_key = cache_key

    @property
    def cache_key(self) -> str:
        """Return the cache key scoping this store."""
        return self._cache_key

    async def get_meta(self, key: str) -> str | None:
        """Return the metadata value stored under ``key``."""
        async with self._session_factory() as session:
            return await session.scalar(
                select(SyncMetadataRecord.value).where(
                    SyncMetadataRecord.cache_key == self._cache_key,
                    SyncMetadataRecord.key == key,
                )
            )

    async def set_meta(self, key: str, value: str) -> None:
        """Insert or update the metadata value under ``key``."""
        async with self._session_factory() as session, session.begin():
            existing = await session.scalar(
                select(SyncMetadataRecord).where(
                    SyncMetadataRecord.cache_key == self._cache_key,
                    SyncMetadataRecord.key == key,
                )
            )
            if existing is None:
                session.add(
                    SyncMetadataRecord(cache_key=self._cache_key, key=key, value=value)
                )
            else:
                existing.value = value

    async def get_all_file_records(self) -> list[CacheEntry]:
        """Return every cached record ordered by path."""
        async with self._session_factory() as session:
            rows = await session.scalars(
                select(FileCacheRecord)
                .where(FileCacheRecord.cache_key == self._cache_key)
                .order_by(FileCacheRecord.path)
            )
            return [(row.path, _to_record(row)) for row in rows]

    async def upsert_file_records(self, records: cabc.Iterable[CacheEntry]) -> None:
        """Create or overwrite records in a single transaction."""
        pending = dict(records)
        if not pending:
            return

        async with self._session_factory() as session, session.begin():
            existing: dict[str, FileCacheRecord] = {}
            for chunk in _chunks(pending, _PATH_CHUNK_SIZE):
                rows = await session.scalars(
                    select(FileCacheRecord).where(
                        FileCacheRecord.cache_key == self._cache_key,
                        FileCacheRecord.path.in_(chunk),
                    )
                )
                existing.update((row.path, row) for row in rows)

            for path, record in pending.items():
                row = existing.get(path)
                if row is None:
                    session.add(
                        FileCacheRecord(
                            cache_key=self._cache_key,
                            path=path,
                            sha=record.sha,
                            meta=record.meta,
                            text=record.text,
                            size=record.size,
                        )
                    )
                    continue
                row.sha = record.sha
                row.meta = record.meta
                row.text = record.text
                row.size = record.size

    async def delete_file_records(self, paths: cabc.Iterable[str]) -> None:
        """Delete records for ``paths`` in a single transaction."""
        doomed = list(dict.fromkeys(paths))
        if not doomed:
            return

        async with self._session_factory() as session, session.begin():
            for chunk in _chunks(doomed, _PATH_CHUNK_SIZE):
                await session.execute(
                    delete(FileCacheRecord).where(
                        FileCacheRecord.cache_key == self._cache_key,
                        FileCacheRecord.path.in_(chunk),
                    )
                )


class SqlCacheBackend:
    """Open :class:`SqlCacheStore` instances sharing one session factory."""

    def __init__(self, session_factory: SessionFactory) -> None:
        """Store the session factory used by every opened store."""
        self._session_factory = session_factory

    def open(self, cache_key: str) -> SqlCacheStore:
        """Return a store scoped to ``cache_key``."""
        return SqlCacheStore(self._session_factory, cache_key)
