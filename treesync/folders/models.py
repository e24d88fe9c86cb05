"""Typed folder configuration structures.

Entry folders describe where structured content lives; asset folders describe
where media files live. Both are evaluated in list order by the folder
matcher, with later configurations taking precedence over earlier ones.
"""

from __future__ import annotations

import dataclasses
import typing as typ

import msgspec

I18nStructure: typ.TypeAlias = typ.Literal[
    "single_file", "multiple_files", "multiple_folders"
]

DEFAULT_LOCALE = "_default"

_FORMAT_EXTENSIONS: dict[str, str] = {
    "yaml": "yml",
    "yml": "yml",
    "toml": "toml",
    "json": "json",
}
_FALLBACK_EXTENSION = "md"


class I18nConfig(msgspec.Struct, frozen=True, kw_only=True):
    """Resolved internationalisation settings for an entry folder.

    Attributes
    ----------
    enabled : bool
        ``True`` when at least one locale is configured.
    save_all_locales : bool
        Whether every locale is written when an entry is saved.
    locales : tuple[str, ...]
        Configured locales, or ``("_default",)`` when disabled.
    default_locale : str
        Locale used when none is requested explicitly.
    structure : I18nStructure
        How localised content is laid out on disk.

    """

    enabled: bool = False
    save_all_locales: bool = True
    locales: tuple[str, ...] = (DEFAULT_LOCALE,)
    default_locale: str = DEFAULT_LOCALE
    structure: I18nStructure = "single_file"


class EntryFolderConfig(msgspec.Struct, frozen=True, kw_only=True):
    """Where a collection stores its entry files.

    A folder collection sets ``folder_path`` and matches every file under it
    with the expected extension. A file collection sets ``file_path_map``
    (locale to literal path) and matches only those paths.

    Attributes
    ----------
    collection : str
        Name of the owning collection.
    file : str, optional
        Name of the collection file for file collections.
    folder_path : str, optional
        Path prefix for folder collections.
    file_path_map : dict[str, str], optional
        Literal paths for file collections, keyed by locale.
    extension : str, optional
        Explicit file extension, overriding the one implied by ``format``.
    format : str, optional
        Content format such as ``yaml`` or ``frontmatter``.
    i18n : I18nConfig
        Resolved internationalisation settings.

    """

    collection: str
    file: str | None = None
    folder_path: str | None = None
    file_path_map: dict[str, str] | None = None
    extension: str | None = None
    format: str | None = None
    i18n: I18nConfig = msgspec.field(default_factory=I18nConfig)

    @property
    def expected_extension(self) -> str:
        """Return the extension entry files in this folder must carry."""
        if self.extension:
            return self.extension
        return _FORMAT_EXTENSIONS.get(self.format or "", _FALLBACK_EXTENSION)

    @property
    def literal_paths(self) -> frozenset[str]:
        """Return the explicit paths of a file collection (empty otherwise)."""
        return frozenset((self.file_path_map or {}).values())


class AssetFolderConfig(msgspec.Struct, frozen=True, kw_only=True):
    """Where media files are stored.

    Attributes
    ----------
    internal_path : str
        Repository path of the media folder.
    public_path : str, optional
        URL path the folder is served from.
    collection : str, optional
        Owning collection for collection-specific media folders.
    entry_relative : bool
        When ``True`` any file below ``internal_path`` matches; otherwise only
        files directly inside it do.

    """

    internal_path: str
    public_path: str | None = None
    collection: str | None = None
    entry_relative: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class FolderConfigs:
    """Ordered entry and asset folder configurations for one repository."""

    entry_folders: tuple[EntryFolderConfig, ...] = ()
    asset_folders: tuple[AssetFolderConfig, ...] = ()
