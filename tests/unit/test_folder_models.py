"""Unit tests for folder configuration structures."""
# ruff: noqa: D103

from __future__ import annotations

import pytest

from treesync.folders import (
    DEFAULT_LOCALE,
    AssetFolderConfig,
    EntryFolderConfig,
    FolderConfigs,
    I18nConfig,
)


@pytest.mark.parametrize(
    ("fmt", "extension", "expected"),
    [
        (None, None, "md"),
        ("frontmatter", None, "md"),
        ("yaml", None, "yml"),
        ("yml", None, "yml"),
        ("toml", None, "toml"),
        ("json", None, "json"),
        ("yaml", "yaml", "yaml"),
        (None, "mdx", "mdx"),
    ],
)
def test_expected_extension(
    fmt: str | None, extension: str | None, expected: str
) -> None:
    folder = EntryFolderConfig(
        collection="posts", folder_path="content", format=fmt, extension=extension
    )

    assert folder.expected_extension == expected


def test_literal_paths() -> None:
    folder = EntryFolderConfig(
        collection="pages",
        file="home",
        file_path_map={"en": "home.en.md", "fr": "home.fr.md"},
    )

    assert folder.literal_paths == frozenset({"home.en.md", "home.fr.md"})
    assert EntryFolderConfig(collection="x", folder_path="x").literal_paths == (
        frozenset()
    )


def test_entry_folder_defaults_to_disabled_i18n() -> None:
    folder = EntryFolderConfig(collection="posts", folder_path="content")

    assert folder.i18n == I18nConfig()
    assert folder.i18n.locales == (DEFAULT_LOCALE,)
    assert not folder.i18n.enabled


def test_asset_folder_defaults() -> None:
    folder = AssetFolderConfig(internal_path="static")

    assert folder.entry_relative is False
    assert folder.public_path is None
    assert folder.collection is None


def test_folder_configs_default_to_empty() -> None:
    configs = FolderConfigs()

    assert configs.entry_folders == ()
    assert configs.asset_folders == ()
