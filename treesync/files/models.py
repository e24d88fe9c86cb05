"""Typed file descriptors flowing through classification and sync."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from treesync.common.paths import file_name

if typ.TYPE_CHECKING:
    from treesync.folders.models import AssetFolderConfig, EntryFolderConfig

FileMeta: typ.TypeAlias = dict[str, typ.Any]


class FileKind(enum.StrEnum):
    """How a classified file is managed."""

    ENTRY = "entry"
    ASSET = "asset"


@dataclasses.dataclass(frozen=True, slots=True)
class RemoteFile:
    """A file reported by the remote listing or rebuilt from the cache.

    ``sha`` fingerprints the file content. ``meta`` holds provider metadata
    (for example the last commit touching the file) and is ``None`` until it
    has been fetched or restored from the cache.
    """

    path: str
    sha: str
    meta: FileMeta | None = None
    size: int | None = None
    text: str | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class ClassifiedFile:
    """A remote file assigned to an entry or asset folder."""

    path: str
    sha: str
    kind: FileKind
    folder: EntryFolderConfig | AssetFolderConfig
    meta: FileMeta | None = None
    size: int | None = None
    text: str | None = None

    @classmethod
    def from_remote(
        cls,
        remote: RemoteFile,
        kind: FileKind,
        folder: EntryFolderConfig | AssetFolderConfig,
    ) -> ClassifiedFile:
        """Attach a classification to ``remote``."""
        return cls(
            path=remote.path,
            sha=remote.sha,
            kind=kind,
            folder=folder,
            meta=remote.meta,
            size=remote.size,
            text=remote.text,
        )

    @property
    def name(self) -> str:
        """Return the file name without its directory."""
        return file_name(self.path)

    @property
    def is_resolved(self) -> bool:
        """Return whether provider metadata is available for this file."""
        return self.meta is not None


@dataclasses.dataclass(frozen=True, slots=True)
class FetchedContent:
    """Content and metadata returned by the remote for one path."""

    meta: FileMeta | None
    text: str | None = None
    size: int | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class FileList:
    """Classified files, entries first.

    An empty list is a valid outcome for a repository that holds no managed
    files.
    """

    entry_files: tuple[ClassifiedFile, ...] = ()
    asset_files: tuple[ClassifiedFile, ...] = ()

    @property
    def all_files(self) -> tuple[ClassifiedFile, ...]:
        """Return entries followed by assets."""
        return self.entry_files + self.asset_files

    @property
    def count(self) -> int:
        """Return the number of classified files."""
        return len(self.entry_files) + len(self.asset_files)
