"""Unit tests for repository path helpers."""

from __future__ import annotations

import datetime as dt

import pytest

from treesync.common.paths import file_extension, file_name, parent_directory
from treesync.common.time import elapsed_since, utcnow


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("content/posts/hello.md", "md"),
        ("archive.tar.gz", "gz"),
        ("content/.env", "env"),
        ("docs/README", "README"),
        ("content/posts.d/README", "README"),
    ],
)
def test_file_extension(path: str, expected: str) -> None:
    """The extension is taken from the file name only."""
    assert file_extension(path) == expected


def test_file_name() -> None:
    """File names drop every directory segment."""
    assert file_name("a/b/c.png") == "c.png"
    assert file_name("c.png") == "c.png"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("static/images/cat.png", "static/images"),
        ("static/cat.png", "static"),
        ("cat.png", None),
        ("/cat.png", None),
    ],
)
def test_parent_directory(path: str, expected: str | None) -> None:
    """Root-level files have no parent directory."""
    assert parent_directory(path) == expected


def test_elapsed_since_rejects_naive_datetimes() -> None:
    """Naive timestamps cannot be compared with the UTC clock."""
    with pytest.raises(ValueError, match="timezone-aware"):
        elapsed_since(dt.datetime(2024, 1, 1))  # noqa: DTZ001


def test_elapsed_since_is_non_negative() -> None:
    """Elapsed time from a recent aware timestamp is not negative."""
    assert elapsed_since(utcnow()) >= dt.timedelta(0)
