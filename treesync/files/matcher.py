"""Folder matching rules.

Configurations are evaluated as a fold over the ordered list: every
configuration is tested and the last one whose predicate holds is kept, so
later (usually more specific) configurations override earlier ones.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from treesync.common.paths import file_extension, parent_directory

if typ.TYPE_CHECKING:
    from treesync.folders.models import AssetFolderConfig, EntryFolderConfig

RESERVED_NAME_PREFIX = "+"

T = typ.TypeVar("T")


def _last_match(
    configs: cabc.Iterable[T], predicate: cabc.Callable[[T], bool]
) -> T | None:
    match: T | None = None
    for config in configs:
        if predicate(config):
            match = config
    return match


def entry_folder_covers(folder: EntryFolderConfig, path: str) -> bool:
    """Return whether ``folder`` claims ``path``.

    File collections claim their literal paths; folder collections claim
    every path beginning with their folder path.
    """
    if folder.file_path_map is not None:
        return path in folder.literal_paths
    if folder.folder_path is None:
        return False
    return path.startswith(folder.folder_path)


def asset_folder_covers(folder: AssetFolderConfig, path: str) -> bool:
    """Return whether ``folder`` claims ``path``.

    Entry-relative folders claim anything below them. Other folders claim
    only files sitting directly inside, never files in subdirectories.
    """
    if folder.entry_relative:
        return path.startswith(f"{folder.internal_path}/")
    return parent_directory(path) == folder.internal_path


def match_entry_folder(
    folders: cabc.Iterable[EntryFolderConfig], path: str
) -> EntryFolderConfig | None:
    """Return the last entry folder claiming ``path``."""
    return _last_match(folders, lambda folder: entry_folder_covers(folder, path))


def match_asset_folder(
    folders: cabc.Iterable[AssetFolderConfig], path: str
) -> AssetFolderConfig | None:
    """Return the last asset folder claiming ``path``."""
    return _last_match(folders, lambda folder: asset_folder_covers(folder, path))


def is_entry_file(folder: EntryFolderConfig, path: str) -> bool:
    """Return whether ``path`` qualifies as an entry of the matched ``folder``."""
    return (
        path in folder.literal_paths
        or file_extension(path) == folder.expected_extension
    )


def has_reserved_name(name: str) -> bool:
    """Return whether a file name carries the reserved ``+`` marker."""
    return name.startswith(RESERVED_NAME_PREFIX)
