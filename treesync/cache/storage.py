"""Persistence models for the sync metadata and file cache tables."""

from __future__ import annotations

import datetime as dt
import typing as typ

from sqlalchemy import JSON, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from treesync.common.time import utcnow

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Dialect
    from sqlalchemy.ext.asyncio import AsyncEngine


class Base(DeclarativeBase):
    """Declarative base for cache tables."""


class UTCDateTime(TypeDecorator[dt.datetime]):
    """DateTime that keeps UTC tzinfo, including on SQLite."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Reject naive datetimes and store aware ones as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            msg = "cache timestamps must be timezone aware"
            raise ValueError(msg)
        return value.astimezone(dt.UTC)

    def process_result_value(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Return UTC-aware datetimes regardless of backend."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)


class SyncMetadataRecord(Base):
    """Single-value sync metadata, such as the last synced commit hash."""

    __tablename__ = "sync_metadata"
    __table_args__ = (
        UniqueConstraint("cache_key", "key", name="uq_sync_metadata_key"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    cache_key: Mapped[str] = mapped_column(String(255))
    key: Mapped[str] = mapped_column(String(64))
    value: Mapped[str] = mapped_column(String(255))
    updated_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow
    )


class FileCacheRecord(Base):
    """Cached content and metadata for one repository path."""

    __tablename__ = "file_cache"
    __table_args__ = (
        UniqueConstraint("cache_key", "path", name="uq_file_cache_path"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    cache_key: Mapped[str] = mapped_column(String(255), index=True)
    path: Mapped[str] = mapped_column(String(1024))
    sha: Mapped[str] = mapped_column(String(64))
    meta: Mapped[dict[str, typ.Any] | None] = mapped_column(JSON, default=None)
    text: Mapped[str | None] = mapped_column(Text(), default=None)
    size: Mapped[int | None] = mapped_column(Integer, default=None)
    cached_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow
    )


async def init_cache_storage(engine: AsyncEngine) -> None:
    """Create the cache tables if they are absent."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
