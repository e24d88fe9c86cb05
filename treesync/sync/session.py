"""Single-flight sync sessions."""

from __future__ import annotations

import asyncio
import typing as typ

if typ.TYPE_CHECKING:
    from treesync.folders.models import FolderConfigs

    from .models import RepositoryIdentity, SyncResult
    from .orchestrator import SyncOrchestrator


class SyncSession:
    """Serialise syncs of one repository and remember its resolved branch.

    Concurrent calls to :meth:`sync` queue behind an :class:`asyncio.Lock`.
    After each successful run the session adopts the identity returned in the
    result, so the default branch is resolved at most once.
    """

    def __init__(
        self, orchestrator: SyncOrchestrator, repository: RepositoryIdentity
    ) -> None:
        """Bind the session to ``repository``."""
        self._orchestrator = orchestrator
        self._repository = repository
        self._lock = asyncio.Lock()

    @property
    def repository(self) -> RepositoryIdentity:
        """Return the identity the next sync will use."""
        return self._repository

    async def sync(self, folders: FolderConfigs) -> SyncResult:
        """Run a sync once any in-flight sync has finished."""
        async with self._lock:
            result = await self._orchestrator.sync(self._repository, folders)
            self._repository = result.repository
            return result
