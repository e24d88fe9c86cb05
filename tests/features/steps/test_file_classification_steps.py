"""Behavioural tests for file classification."""
# ruff: noqa: D103

from __future__ import annotations

import typing as typ

import pytest
from pytest_bdd import given, parsers, scenario, then, when

from tests.helpers import remote_file
from treesync.files import FileList, RemoteFile, classify_files
from treesync.folders import AssetFolderConfig, EntryFolderConfig


class ClassificationContext(typ.TypedDict, total=False):
    """State shared between classification steps."""

    entry_folders: list[EntryFolderConfig]
    asset_folders: list[AssetFolderConfig]
    files: list[RemoteFile]
    result: FileList


@scenario(
    "../file_classification.feature",
    "Posts become entries and direct image children become assets",
)
def test_blog_classification() -> None:
    """Entries and assets are separated by folder rules."""


@scenario(
    "../file_classification.feature",
    "The last matching entry folder takes precedence",
)
def test_last_match_precedence() -> None:
    """Later entry folders override earlier ones."""


@pytest.fixture
def context() -> ClassificationContext:
    return {"entry_folders": [], "asset_folders": []}


def _split(paths: str) -> list[str]:
    return [path.strip() for path in paths.split(",") if path.strip()]


_ENTRY_FOLDER_STEP = (
    'an entry folder "{collection}" at "{folder_path}" expecting "{extension}" files'
)


@given(parsers.parse(_ENTRY_FOLDER_STEP))
def entry_folder(
    context: ClassificationContext, collection: str, folder_path: str, extension: str
) -> None:
    context["entry_folders"].append(
        EntryFolderConfig(
            collection=collection, folder_path=folder_path, extension=extension
        )
    )


@given(parsers.parse('an asset folder at "{internal_path}"'))
def asset_folder(context: ClassificationContext, internal_path: str) -> None:
    context["asset_folders"].append(AssetFolderConfig(internal_path=internal_path))


@given(parsers.parse('the remote lists "{paths}"'))
def remote_listing(context: ClassificationContext, paths: str) -> None:
    context["files"] = [remote_file(path) for path in _split(paths)]


@when("the files are classified")
def classify(context: ClassificationContext) -> None:
    context["result"] = classify_files(
        context["files"], context["entry_folders"], context["asset_folders"]
    )


@then(parsers.parse('the entry files are "{paths}"'))
def entry_files_are(context: ClassificationContext, paths: str) -> None:
    assert [file.path for file in context["result"].entry_files] == _split(paths)


@then(parsers.parse('the asset files are "{paths}"'))
def asset_files_are(context: ClassificationContext, paths: str) -> None:
    assert [file.path for file in context["result"].asset_files] == _split(paths)


@then(parsers.parse('"{path}" belongs to the "{collection}" collection'))
def belongs_to(context: ClassificationContext, path: str, collection: str) -> None:
    folders = {file.path: file.folder for file in context["result"].entry_files}
    folder = folders[path]
    assert isinstance(folder, EntryFolderConfig)
    assert folder.collection == collection
