"""Repository sync orchestration.

A sync resolves the branch head, decides whether the cached file list is
still valid, fetches only the files whose content changed, publishes the
parsed results and finally reconciles the cache.

"""

from __future__ import annotations

import dataclasses
import typing as typ

from treesync.cache.protocol import LAST_COMMIT_HASH_KEY, CacheRecord
from treesync.common.time import elapsed_since, utcnow
from treesync.files.classifier import classify_files
from treesync.files.models import FileKind, RemoteFile

from .models import SyncResult, SyncSource
from .observability import SyncEventLogger, SyncRunContext
from .ports import SyncOutputs, passthrough_parser

if typ.TYPE_CHECKING:
    from treesync.cache.protocol import CacheBackend, CacheEntry, CacheStore
    from treesync.files.models import ClassifiedFile, FetchedContent
    from treesync.folders.models import FolderConfigs
    from treesync.remote.protocol import RemoteRepositoryClient

    from .models import RepositoryIdentity
    from .ports import FileParser


@dataclasses.dataclass(frozen=True, slots=True)
class _SourceDecision:
    source: SyncSource
    files: list[RemoteFile]


def _rebuild_from_cache(cached: dict[str, CacheRecord]) -> list[RemoteFile]:
    return [
        RemoteFile(
            path=path,
            sha=record.sha,
            meta=record.meta,
            size=record.size,
            text=record.text,
        )
        for path, record in cached.items()
    ]


def _restore_from_cache(
    file: ClassifiedFile, cached: dict[str, CacheRecord]
) -> ClassifiedFile | None:
    """Return ``file`` with cached content, or ``None`` if the cache is stale."""
    record = cached.get(file.path)
    if record is None or record.sha != file.sha:
        return None
    return dataclasses.replace(
        file, meta=record.meta, text=record.text, size=record.size
    )


def _apply_fetched(
    file: ClassifiedFile, fetched: FetchedContent | None
) -> ClassifiedFile:
    """Fill the fields of ``file`` that are still unset from ``fetched``."""
    if fetched is None:
        return file
    return dataclasses.replace(
        file,
        meta=file.meta if file.meta is not None else fetched.meta,
        text=file.text if file.text is not None else fetched.text,
        size=file.size if file.size is not None else fetched.size,
    )


def _cache_entry(file: ClassifiedFile) -> CacheEntry:
    return (
        file.path,
        CacheRecord(sha=file.sha, meta=file.meta, text=file.text, size=file.size),
    )


class SyncOrchestrator:
    """Mirror a remote repository into the injected output ports.

    Parameters
    ----------
    remote
        Collaborator used for branch and hash resolution, listing and
        content fetches.
    cache_backend
        Factory of per-repository cache stores.
    entry_parser, asset_parser
        Turn classified files into the values published on the entry and
        asset ports. Both default to returning the files unchanged.
    outputs
        Ports receiving entries, assets and the load-complete flag. Fresh
        in-memory ports are used when omitted.
    event_logger
        Receives structured run events.

    Collaborator failures propagate unchanged; nothing is retried.

    """

    def __init__(  # noqa: PLR0913
        self,
        remote: RemoteRepositoryClient,
        cache_backend: CacheBackend,
        *,
        entry_parser: FileParser = passthrough_parser,
        asset_parser: FileParser = passthrough_parser,
        outputs: SyncOutputs | None = None,
        event_logger: SyncEventLogger | None = None,
    ) -> None:
        """Store collaborators for later syncs."""
        self._remote = remote
        self._cache_backend = cache_backend
        self._entry_parser = entry_parser
        self._asset_parser = asset_parser
        self.outputs = outputs or SyncOutputs.in_memory()
        self._events = event_logger or SyncEventLogger()

    async def sync(
        self, repository: RepositoryIdentity, folders: FolderConfigs
    ) -> SyncResult:
        """Run one sync of ``repository`` classified against ``folders``.

        Returns
        -------
        SyncResult
            Counts for the run and the identity with its branch resolved.

        Raises
        ------
        Exception
            Whatever the remote, cache or parsers raised, after a
            ``sync.run.failed`` event has been logged.

        """
        context = SyncRunContext(repository=repository, started_at=utcnow())
        self._events.log_run_started(context)
        try:
            result = await self._run(context, folders)
        except Exception as exc:
            self._events.log_run_failed(
                context, exc, elapsed_since(context.started_at)
            )
            raise
        self._events.log_run_completed(
            context, result, elapsed_since(context.started_at)
        )
        return result

    async def _run(
        self, context: SyncRunContext, folders: FolderConfigs
    ) -> SyncResult:
        repository = context.repository
        if not repository.branch:
            branch = await self._remote.resolve_default_branch(repository)
            repository = repository.with_branch(branch)

        commit_hash = await self._remote.resolve_latest_commit_hash(repository)
        store = self._cache_backend.open(repository.cache_key)
        cached = dict(await store.get_all_file_records())

        decision = await self._decide_source(repository, store, commit_hash, cached)
        self._events.log_source_decided(
            context,
            source=decision.source,
            commit_hash=commit_hash,
            cached_records=len(cached),
        )

        file_list = classify_files(
            decision.files, folders.entry_folders, folders.asset_folders
        )
        if file_list.count == 0:
            self._publish([], [])
            return SyncResult(
                repository=repository,
                commit_hash=commit_hash,
                source=decision.source,
            )

        files: list[ClassifiedFile] = []
        restored_count = 0
        for file in file_list.all_files:
            restored = _restore_from_cache(file, cached)
            if restored is not None:
                restored_count += 1
            files.append(restored or file)

        delta = [file for file in files if file.meta is None]
        fetched: dict[str, FetchedContent] = {}
        if delta:
            fetched = await self._remote.fetch_contents(repository, delta)
        files = [_apply_fetched(file, fetched.get(file.path)) for file in files]
        refreshed = {file.path for file in delta} & fetched.keys()

        entries = [file for file in files if file.kind is FileKind.ENTRY]
        assets = [file for file in files if file.kind is FileKind.ASSET]
        self._publish(
            list(self._entry_parser(entries)), list(self._asset_parser(assets))
        )

        evicted = await self._reconcile_cache(
            context, store, files, cached, refreshed
        )
        return SyncResult(
            repository=repository,
            commit_hash=commit_hash,
            source=decision.source,
            entry_count=len(entries),
            asset_count=len(assets),
            restored_count=restored_count,
            fetched_count=len(delta),
            evicted_count=evicted,
        )

    async def _decide_source(
        self,
        repository: RepositoryIdentity,
        store: CacheStore,
        commit_hash: str,
        cached: dict[str, CacheRecord],
    ) -> _SourceDecision:
        """Reuse the cached file list when it matches ``commit_hash``.

        A full listing persists the new hash immediately, before any content
        is fetched.
        """
        last_hash = await store.get_meta(LAST_COMMIT_HASH_KEY)
        if last_hash == commit_hash and cached:
            return _SourceDecision(SyncSource.CACHE, _rebuild_from_cache(cached))

        listed = await self._remote.list_files(repository)
        await store.set_meta(LAST_COMMIT_HASH_KEY, commit_hash)
        return _SourceDecision(SyncSource.REMOTE, listed)

    def _publish(self, entries: list[object], assets: list[object]) -> None:
        self.outputs.entries.publish(entries)
        self.outputs.assets.publish(assets)
        self.outputs.loaded.publish(True)

    async def _reconcile_cache(
        self,
        context: SyncRunContext,
        store: CacheStore,
        files: list[ClassifiedFile],
        cached: dict[str, CacheRecord],
        refreshed: set[str],
    ) -> int:
        """Evict stale paths and store freshly fetched files.

        Returns the number of evicted records.
        """
        current_paths = {file.path for file in files}
        stale = sorted(cached.keys() - current_paths)
        if stale:
            await store.delete_file_records(stale)

        fresh = [_cache_entry(file) for file in files if file.path in refreshed]
        if fresh:
            await store.upsert_file_records(fresh)

        self._events.log_cache_reconciled(
            context, evicted=len(stale), stored=len(fresh)
        )
        return len(stale)


__all__ = ["SyncOrchestrator"]
