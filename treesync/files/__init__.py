"""File classification into entries and assets."""

from __future__ import annotations

from .classifier import classify_files
from .matcher import (
    RESERVED_NAME_PREFIX,
    asset_folder_covers,
    entry_folder_covers,
    match_asset_folder,
    match_entry_folder,
)
from .models import (
    ClassifiedFile,
    FetchedContent,
    FileKind,
    FileList,
    FileMeta,
    RemoteFile,
)

__all__ = [
    "RESERVED_NAME_PREFIX",
    "ClassifiedFile",
    "FetchedContent",
    "FileKind",
    "FileList",
    "FileMeta",
    "RemoteFile",
    "asset_folder_covers",
    "classify_files",
    "entry_folder_covers",
    "match_asset_folder",
    "match_entry_folder",
]
