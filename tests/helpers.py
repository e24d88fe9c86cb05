"""Shared test utilities."""

from __future__ import annotations

import asyncio
import dataclasses
import typing as typ

from treesync.files.models import FetchedContent, RemoteFile
from treesync.folders.models import AssetFolderConfig, EntryFolderConfig, FolderConfigs

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from treesync.files.models import ClassifiedFile
    from treesync.sync.models import RepositoryIdentity


T = typ.TypeVar("T")


def run_async(coro_func: typ.Callable[[], typ.Coroutine[typ.Any, typ.Any, T]]) -> T:
    """Execute an async callable within the test context."""
    return asyncio.run(coro_func())


def blog_folders() -> FolderConfigs:
    """Return a small blog layout: markdown posts plus an image folder."""
    return FolderConfigs(
        entry_folders=(
            EntryFolderConfig(collection="posts", folder_path="content/posts"),
        ),
        asset_folders=(AssetFolderConfig(internal_path="static/images"),),
    )


def remote_file(path: str, sha: str | None = None, **kwargs: typ.Any) -> RemoteFile:
    """Build a listed file whose sha defaults to one derived from its path."""
    return RemoteFile(path=path, sha=sha or f"sha-{path}", **kwargs)


def fetched_for(path: str) -> FetchedContent:
    """Return the content :class:`FakeRemoteClient` serves for ``path``."""
    return FetchedContent(
        meta={"commit_author": {"login": "octo"}, "commit_date": "2024-05-01"},
        text=f"body of {path}",
        size=len(path),
    )


@dataclasses.dataclass
class FakeRemoteClient:
    """Scriptable remote collaborator recording every call."""

    default_branch: str = "main"
    commit_hash: str = "commit-1"
    files: list[RemoteFile] = dataclasses.field(default_factory=list)
    contents: dict[str, FetchedContent] = dataclasses.field(default_factory=dict)
    withheld: set[str] = dataclasses.field(default_factory=set)
    fetch_error: Exception | None = None
    calls: list[tuple[str, object]] = dataclasses.field(default_factory=list)

    async def resolve_default_branch(self, repository: RepositoryIdentity) -> str:
        self.calls.append(("resolve_default_branch", repository.branch))
        return self.default_branch

    async def resolve_latest_commit_hash(self, repository: RepositoryIdentity) -> str:
        self.calls.append(("resolve_latest_commit_hash", repository.branch))
        return self.commit_hash

    async def list_files(self, repository: RepositoryIdentity) -> list[RemoteFile]:
        self.calls.append(("list_files", repository.branch))
        return list(self.files)

    async def fetch_contents(
        self,
        repository: RepositoryIdentity,
        files: cabc.Sequence[ClassifiedFile],
    ) -> dict[str, FetchedContent]:
        paths = [file.path for file in files]
        self.calls.append(("fetch_contents", paths))
        if self.fetch_error is not None:
            raise self.fetch_error
        return {
            path: self.contents.get(path) or fetched_for(path)
            for path in paths
            if path not in self.withheld
        }

    def call_names(self) -> list[str]:
        """Return the names of the calls made so far."""
        return [name for name, _ in self.calls]

    def fetched_paths(self) -> list[list[str]]:
        """Return the path lists passed to each ``fetch_contents`` call."""
        return [
            typ.cast("list[str]", arg)
            for name, arg in self.calls
            if name == "fetch_contents"
        ]


class FakeLogger:
    """Collects log calls for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None]] = []

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        self.calls.append((level, message, exc_info))
        return message

    def messages(self, level: str | None = None) -> list[str]:
        """Return logged messages, optionally filtered by level."""
        return [
            message
            for logged_level, message, _ in self.calls
            if level is None or logged_level == level
        ]
