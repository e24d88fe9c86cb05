"""Remote repository collaborators."""

from __future__ import annotations

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError
from .github import GitHubConfig, GitHubRepositoryClient
from .protocol import RemoteRepositoryClient

__all__ = [
    "GitHubAPIError",
    "GitHubConfig",
    "GitHubConfigError",
    "GitHubRepositoryClient",
    "GitHubResponseShapeError",
    "RemoteRepositoryClient",
]
