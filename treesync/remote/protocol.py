"""Port for the remote repository collaborator."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from treesync.files.models import ClassifiedFile, FetchedContent, RemoteFile
    from treesync.sync.models import RepositoryIdentity


@typ.runtime_checkable
class RemoteRepositoryClient(typ.Protocol):
    """Read access to a remote repository.

    Implementations own transport, authentication headers, and any retry
    policy. Failures propagate to the caller unchanged.
    """

    async def resolve_default_branch(self, repository: RepositoryIdentity) -> str:
        """Return the repository's default branch name."""
        ...

    async def resolve_latest_commit_hash(self, repository: RepositoryIdentity) -> str:
        """Return the hash of the latest commit on ``repository.branch``."""
        ...

    async def list_files(self, repository: RepositoryIdentity) -> list[RemoteFile]:
        """Return every file in the tree of ``repository.branch``."""
        ...

    async def fetch_contents(
        self,
        repository: RepositoryIdentity,
        files: cabc.Sequence[ClassifiedFile],
    ) -> dict[str, FetchedContent]:
        """Return metadata, and text where available, keyed by path."""
        ...
