"""Unit tests for the YAML folder configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from treesync.folders import (
    FolderConfigError,
    load_folder_configs,
    parse_folder_configs,
)

if typ.TYPE_CHECKING:
    from treesync.folders import FolderConfigs

_FIXTURES = Path(__file__).resolve().parents[1] / "fixtures" / "folders"


@pytest.fixture
def blog() -> FolderConfigs:
    """Return the parsed blog fixture."""
    return load_folder_configs(_FIXTURES / "blog.yaml")


def test_entry_folders_keep_document_order(blog: FolderConfigs) -> None:
    """Folders are returned in the order they are declared."""
    assert [folder.collection for folder in blog.entry_folders] == [
        "posts",
        "pages",
        "notes",
    ]


def test_folder_collection_inherits_site_i18n(blog: FolderConfigs) -> None:
    """``i18n: true`` resolves to the site settings."""
    posts = blog.entry_folders[0]

    assert posts.i18n.enabled
    assert posts.i18n.locales == ("en", "fr")
    assert posts.i18n.structure == "multiple_files"
    assert posts.expected_extension == "md"


def test_file_collection_resolves_file_layer(blog: FolderConfigs) -> None:
    """File collections use single_file and apply their file i18n layer."""
    pages = blog.entry_folders[1]

    assert pages.literal_paths == frozenset(
        {"content/about.en.yml", "content/about.fr.yml"}
    )
    assert pages.i18n.structure == "single_file"
    assert pages.i18n.save_all_locales is False


def test_folder_without_i18n_is_disabled(blog: FolderConfigs) -> None:
    """Collections that do not opt in stay single-locale."""
    notes = blog.entry_folders[2]

    assert not notes.i18n.enabled
    assert notes.expected_extension == "txt"


def test_asset_folders(blog: FolderConfigs) -> None:
    """Asset folders are decoded with their flags."""
    images, colocated = blog.asset_folders

    assert images.internal_path == "static/images"
    assert images.public_path == "/images"
    assert not images.entry_relative
    assert colocated.entry_relative
    assert colocated.collection == "posts"


def test_empty_document_is_rejected(tmp_path: Path) -> None:
    """An empty file is not a valid folder document."""
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    with pytest.raises(FolderConfigError, match="empty"):
        load_folder_configs(path)


def test_duplicate_keys_are_rejected(tmp_path: Path) -> None:
    """YAML duplicate keys surface as configuration errors."""
    path = tmp_path / "dupes.yaml"
    path.write_text(
        "entry_folders: []\nentry_folders: []\n",
        encoding="utf-8",
    )

    with pytest.raises(FolderConfigError, match="failed to parse YAML"):
        load_folder_configs(path)


def test_missing_file_is_reported(tmp_path: Path) -> None:
    """Unreadable paths raise FolderConfigError rather than OSError."""
    with pytest.raises(FolderConfigError):
        load_folder_configs(tmp_path / "missing.yaml")


def test_unknown_fields_fail_schema_validation() -> None:
    """Typos in field names are not silently ignored."""
    with pytest.raises(FolderConfigError, match="schema validation failed"):
        parse_folder_configs(
            {"entry_folders": [{"collection": "posts", "folder": "content"}]}
        )


@pytest.mark.parametrize(
    ("folder", "fragment"),
    [
        ({"collection": "posts"}, "exactly one of folder_path/file_path_map"),
        (
            {"collection": "posts", "folder_path": "a", "file_path_map": {"en": "b"}},
            "exactly one of folder_path/file_path_map",
        ),
        ({"collection": "pages", "file_path_map": {}}, "empty file_path_map"),
        ({"collection": " ", "folder_path": "a"}, "empty collection name"),
    ],
)
def test_ambiguous_entry_folders_are_rejected(
    folder: dict[str, object], fragment: str
) -> None:
    """Each entry folder must name exactly one way of locating entries."""
    with pytest.raises(FolderConfigError) as excinfo:
        parse_folder_configs({"entry_folders": [folder]})

    assert any(fragment in issue for issue in excinfo.value.issues)


def test_issues_are_collected_together() -> None:
    """All problems are reported at once."""
    with pytest.raises(FolderConfigError) as excinfo:
        parse_folder_configs(
            {
                "entry_folders": [{"collection": "a"}, {"collection": "b"}],
                "asset_folders": [{"internal_path": ""}],
            }
        )

    assert len(excinfo.value.issues) == 3
