"""Repository path utilities.

Remote repository paths are ``/``-separated strings relative to the tree
root, with no leading slash. They are keys rather than filesystem locations,
so these helpers work on the strings directly instead of going through
``pathlib``.
"""

from __future__ import annotations


def file_name(path: str) -> str:
    """Return the last segment of a repository path.

    Examples
    --------
    >>> file_name("content/posts/hello.md")
    'hello.md'
    >>> file_name("README")
    'README'

    """
    return path.rpartition("/")[2]


def file_extension(path: str) -> str:
    """Return the text after the final dot of the file name.

    A name without any dot is returned unchanged, so ``README`` has the
    extension ``README``. Callers compare the result with an expected
    extension, which a dotless name can only match by being named after it.

    Examples
    --------
    >>> file_extension("content/posts/hello.md")
    'md'
    >>> file_extension("static/archive.tar.gz")
    'gz'

    """
    return file_name(path).rpartition(".")[2]


def parent_directory(path: str) -> str | None:
    """Return the immediate parent directory, or ``None`` at the tree root.

    Examples
    --------
    >>> parent_directory("static/images/cat.png")
    'static/images'
    >>> parent_directory("cat.png") is None
    True

    """
    head, separator, _ = path.rpartition("/")
    if not separator or not head:
        return None
    return head
