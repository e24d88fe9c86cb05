"""Value objects describing a repository and the outcome of a sync."""

from __future__ import annotations

import dataclasses
import enum


@dataclasses.dataclass(frozen=True, slots=True)
class RepositoryIdentity:
    """Which remote repository to mirror and where its cache lives.

    ``branch`` may be left unset; the first sync resolves the default branch
    and returns an updated identity in :class:`SyncResult`, which callers
    reuse for later syncs. The identity itself is never mutated.
    """

    service: str
    owner: str
    name: str
    branch: str | None = None
    cache_key: str = ""

    def __post_init__(self) -> None:
        """Validate the coordinates and derive a default cache key."""
        if not self.owner or not self.name:
            msg = "Repository owner and name are required"
            raise ValueError(msg)
        if not self.cache_key:
            object.__setattr__(
                self, "cache_key", f"{self.service}:{self.owner}/{self.name}"
            )

    @property
    def slug(self) -> str:
        """Return the ``owner/name`` notation."""
        return f"{self.owner}/{self.name}"

    def with_branch(self, branch: str) -> RepositoryIdentity:
        """Return a copy pinned to ``branch``."""
        return dataclasses.replace(self, branch=branch)


class SyncSource(enum.StrEnum):
    """Where a sync obtained its file list."""

    CACHE = "cache"
    REMOTE = "remote"


@dataclasses.dataclass(frozen=True, slots=True)
class SyncResult:
    """Summary of one completed sync.

    Attributes
    ----------
    repository
        Identity with the branch resolved; pass it to the next sync.
    commit_hash
        Remote commit hash the sync was based on.
    source
        Whether the file list came from the cache or a remote listing.
    entry_count, asset_count
        Number of classified entry and asset files published.
    restored_count
        Files whose content and metadata were restored from the cache.
    fetched_count
        Files sent to the remote content fetch.
    evicted_count
        Stale cache records removed.

    """

    repository: RepositoryIdentity
    commit_hash: str
    source: SyncSource
    entry_count: int = 0
    asset_count: int = 0
    restored_count: int = 0
    fetched_count: int = 0
    evicted_count: int = 0

    @property
    def file_count(self) -> int:
        """Return the number of published files."""
        return self.entry_count + self.asset_count
