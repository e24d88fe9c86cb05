"""Errors raised by remote repository adapters."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub answers with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, *, api: str = "GraphQL") -> GitHubAPIError:
        """Return an error for a non-2xx HTTP response."""
        return cls(f"GitHub {api} HTTP {status_code}", status_code=status_code)

    @classmethod
    def graphql_errors(cls, errors: object) -> GitHubAPIError:
        """Return an error for a GraphQL ``errors`` payload."""
        return cls(f"GitHub GraphQL errors: {errors}")


class GitHubResponseShapeError(RuntimeError):
    """Raised when a GitHub response lacks an expected field."""

    @classmethod
    def missing(cls, field: str) -> GitHubResponseShapeError:
        """Return an error naming the missing field."""
        return cls(f"GitHub response missing expected field: {field}")


class GitHubConfigError(RuntimeError):
    """Raised when the GitHub adapter is misconfigured."""

    @classmethod
    def missing_token(cls) -> GitHubConfigError:
        """Return an error for an unset token variable."""
        return cls("TREESYNC_GITHUB_TOKEN is required for the GitHub API")

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error for a blank token."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def missing_branch(cls, slug: str) -> GitHubConfigError:
        """Return an error for a call that needs a resolved branch."""
        return cls(f"branch for {slug} must be resolved before this call")
