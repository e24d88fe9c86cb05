"""YAML loader for entry and asset folder configuration.

A folder document looks like::

    i18n:
      locales: [en, fr]
      default_locale: en
    entry_folders:
      - collection: posts
        folder_path: content/posts
        format: frontmatter
        i18n: true
      - collection: pages
        file: about
        file_path_map: {en: content/about.en.yml, fr: content/about.fr.yml}
        i18n: true
        file_i18n: {save_all_locales: false}
    asset_folders:
      - internal_path: static/images
        public_path: /images
      - collection: posts
        internal_path: content/posts
        entry_relative: true

List order is significant: later folders take precedence when several match
the same path.
"""

from __future__ import annotations

from pathlib import Path

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import FolderConfigError
from .i18n import RawI18nConfig, resolve_i18n_config
from .models import AssetFolderConfig, EntryFolderConfig, FolderConfigs

YAML_VERSION = (1, 2)


class RawEntryFolder(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Entry folder as written in the folder document."""

    collection: str
    file: str | None = None
    folder_path: str | None = None
    file_path_map: dict[str, str] | None = None
    extension: str | None = None
    format: str | None = None
    i18n: RawI18nConfig | bool | None = None
    file_i18n: RawI18nConfig | bool | None = None


class FolderDocument(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Top-level folder document."""

    i18n: RawI18nConfig | None = None
    entry_folders: list[RawEntryFolder] = msgspec.field(default_factory=list)
    asset_folders: list[AssetFolderConfig] = msgspec.field(default_factory=list)


def load_folder_configs(path: Path | str) -> FolderConfigs:
    """Read a YAML folder document from ``path``."""
    try:
        loaded = _yaml().load(Path(path).read_text(encoding="utf-8"))
    except (OSError, YAMLError) as exc:
        raise FolderConfigError.single(f"failed to parse YAML: {exc}") from exc

    if loaded is None:
        raise FolderConfigError.single("folder document is empty")
    return parse_folder_configs(loaded)


def parse_folder_configs(raw: object) -> FolderConfigs:
    """Validate already-decoded folder document data.

    Raises
    ------
    FolderConfigError
        If the data does not match the schema or an entry folder is
        ambiguous.

    """
    try:
        document = msgspec.convert(raw, type=FolderDocument)
    except msgspec.ValidationError as exc:
        raise FolderConfigError.single(f"schema validation failed: {exc}") from exc

    issues = _collect_issues(document)
    if issues:
        raise FolderConfigError(issues)

    return FolderConfigs(
        entry_folders=tuple(
            _resolve_entry_folder(folder, document.i18n)
            for folder in document.entry_folders
        ),
        asset_folders=tuple(document.asset_folders),
    )


def _collect_issues(document: FolderDocument) -> list[str]:
    issues: list[str] = []
    for index, folder in enumerate(document.entry_folders):
        label = f"entry_folders[{index}] ({folder.collection!r})"
        if not folder.collection.strip():
            issues.append(f"entry_folders[{index}] has an empty collection name")
        has_folder = folder.folder_path is not None
        has_files = folder.file_path_map is not None
        if has_folder == has_files:
            issues.append(f"{label} must set exactly one of folder_path/file_path_map")
        if has_files and not folder.file_path_map:
            issues.append(f"{label} has an empty file_path_map")
    for index, asset in enumerate(document.asset_folders):
        if not asset.internal_path.strip():
            issues.append(f"asset_folders[{index}] has an empty internal_path")
    return issues


def _resolve_entry_folder(
    folder: RawEntryFolder, site_i18n: RawI18nConfig | None
) -> EntryFolderConfig:
    is_file = folder.file_path_map is not None
    return EntryFolderConfig(
        collection=folder.collection,
        file=folder.file,
        folder_path=folder.folder_path,
        file_path_map=folder.file_path_map,
        extension=folder.extension,
        format=folder.format,
        i18n=resolve_i18n_config(
            site_i18n, folder.i18n, folder.file_i18n, is_file=is_file
        ),
    )


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.version = YAML_VERSION
    yaml.allow_duplicate_keys = False
    return yaml
