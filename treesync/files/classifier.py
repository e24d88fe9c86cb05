"""Partition a flat remote file list into entries and assets."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from treesync.common.paths import file_name

from .matcher import (
    has_reserved_name,
    is_entry_file,
    match_asset_folder,
    match_entry_folder,
)
from .models import ClassifiedFile, FileKind, FileList

if typ.TYPE_CHECKING:
    from treesync.folders.models import AssetFolderConfig, EntryFolderConfig

    from .models import RemoteFile


def classify_files(
    files: cabc.Iterable[RemoteFile],
    entry_folders: cabc.Sequence[EntryFolderConfig],
    asset_folders: cabc.Sequence[AssetFolderConfig],
) -> FileList:
    """Classify ``files`` against ordered entry and asset folder lists.

    A file becomes an entry when the last entry folder claiming it either
    lists it literally or expects its extension. Otherwise it becomes an
    asset when the last asset folder claiming it exists and its name does not
    start with ``+``. Files matching neither are dropped. Relative input
    order is preserved within each partition, and a path repeated in the
    input is only classified on its first occurrence.

    Parameters
    ----------
    files : Iterable[RemoteFile]
        Unfiltered remote file list.
    entry_folders : Sequence[EntryFolderConfig]
        Entry folders in precedence order (last wins).
    asset_folders : Sequence[AssetFolderConfig]
        Asset folders in precedence order (last wins).

    Returns
    -------
    FileList
        Entry files and asset files with their matched folders attached.

    """
    entries: list[ClassifiedFile] = []
    assets: list[ClassifiedFile] = []
    seen: set[str] = set()

    for remote in files:
        path = remote.path
        if path in seen:
            continue

        entry_folder = match_entry_folder(entry_folders, path)
        if entry_folder is not None and is_entry_file(entry_folder, path):
            entries.append(
                ClassifiedFile.from_remote(remote, FileKind.ENTRY, entry_folder)
            )
            seen.add(path)
            continue

        asset_folder = match_asset_folder(asset_folders, path)
        if asset_folder is not None and not has_reserved_name(file_name(path)):
            assets.append(
                ClassifiedFile.from_remote(remote, FileKind.ASSET, asset_folder)
            )
            seen.add(path)

    return FileList(entry_files=tuple(entries), asset_files=tuple(assets))
