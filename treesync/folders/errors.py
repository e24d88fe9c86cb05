"""Errors raised while loading folder configuration."""

from __future__ import annotations


class FolderConfigError(ValueError):
    """Raised when a folder configuration document is invalid."""

    def __init__(self, issues: list[str]) -> None:
        """Keep every issue while presenting them as one message."""
        super().__init__("\n".join(issues))
        self.issues = issues

    @classmethod
    def single(cls, issue: str) -> FolderConfigError:
        """Return an error describing one problem."""
        return cls([issue])
