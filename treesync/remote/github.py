"""GitHub implementation of the remote repository collaborator.

Branch and commit resolution and content fetches use the GraphQL API; the
recursive tree listing uses the REST git trees endpoint, which returns the
whole tree in one response.
"""

from __future__ import annotations

import dataclasses
import json
import os
import typing as typ
from urllib.parse import quote

import httpx

from treesync.files.models import FetchedContent, FileKind, RemoteFile
from treesync.logging import get_logger, log_warning

from .errors import GitHubAPIError, GitHubConfigError, GitHubResponseShapeError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from treesync.files.models import ClassifiedFile, FileMeta
    from treesync.sync.models import RepositoryIdentity

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_DEFAULT_BATCH_SIZE = 50


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Connection settings for the GitHub adapter."""

    token: str
    graphql_endpoint: str = "https://api.github.com/graphql"
    api_root: str = "https://api.github.com"
    timeout_s: float = 20.0
    user_agent: str = "treesync/0.1"
    batch_size: int = _DEFAULT_BATCH_SIZE

    def __post_init__(self) -> None:
        """Reject batch sizes that would never make progress."""
        if self.batch_size < 1:
            msg = f"batch_size must be positive, got: {self.batch_size}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls) -> GitHubConfig:
        """Build a configuration from ``TREESYNC_GITHUB_TOKEN``.

        ``TREESYNC_GITHUB_API_ROOT`` and ``TREESYNC_GITHUB_GRAPHQL_ENDPOINT``
        optionally point the adapter at a GitHub Enterprise server.
        """
        token = os.environ.get("TREESYNC_GITHUB_TOKEN", "").strip()
        if not token:
            raise GitHubConfigError.missing_token()
        overrides: dict[str, str] = {}
        api_root = os.environ.get("TREESYNC_GITHUB_API_ROOT", "").strip()
        if api_root:
            overrides["api_root"] = api_root.rstrip("/")
        endpoint = os.environ.get("TREESYNC_GITHUB_GRAPHQL_ENDPOINT", "").strip()
        if endpoint:
            overrides["graphql_endpoint"] = endpoint
        return cls(token=token, **overrides)


_DEFAULT_BRANCH_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    defaultBranchRef {
      name
    }
  }
}
"""

_LAST_COMMIT_QUERY = """
query($owner: String!, $name: String!, $qualifiedName: String!) {
  repository(owner: $owner, name: $name) {
    ref(qualifiedName: $qualifiedName) {
      target {
        oid
      }
    }
  }
}
"""

_COMMIT_META_FRAGMENT = """
fragment CommitMeta on Commit {
  committedDate
  author {
    name
    email
    user {
      login
    }
  }
}
"""


def _qualified_name(branch: str) -> str:
    return f"refs/heads/{branch}"


def _require_branch(repository: RepositoryIdentity) -> str:
    if not repository.branch:
        raise GitHubConfigError.missing_branch(repository.slug)
    return repository.branch


def _history_alias(index: int) -> str:
    return f"h{index}"


def _blob_alias(index: int) -> str:
    return f"b{index}"


def _build_contents_query(files: cabc.Sequence[ClassifiedFile]) -> str:
    """Build one aliased query covering every file in ``files``.

    Each file gets the last commit touching its path; entry files also get
    their blob text. Paths and hashes are embedded as JSON string literals,
    which GraphQL accepts verbatim.
    """
    histories = "\n".join(
        f"          {_history_alias(index)}: history(first: 1, "
        f"path: {json.dumps(file.path)}) {{ nodes {{ ...CommitMeta }} }}"
        for index, file in enumerate(files)
    )
    blobs = "\n".join(
        f"    {_blob_alias(index)}: object(oid: {json.dumps(file.sha)}) "
        "{ ... on Blob { text byteSize } }"
        for index, file in enumerate(files)
        if file.kind is FileKind.ENTRY
    )
    return (
        "query($owner: String!, $name: String!, $qualifiedName: String!) {\n"
        "  repository(owner: $owner, name: $name) {\n"
        "    ref(qualifiedName: $qualifiedName) {\n"
        "      target {\n"
        "        ... on Commit {\n"
        f"{histories}\n"
        "        }\n"
        "      }\n"
        "    }\n"
        f"{blobs}\n"
        "  }\n"
        "}\n"
        f"{_COMMIT_META_FRAGMENT}"
    )


def _traverse(data: dict[str, typ.Any], path: list[str]) -> object:
    node: object = data
    for key in path:
        if not isinstance(node, dict):
            raise GitHubResponseShapeError.missing(".".join(path))
        node = node.get(key)
    return node


def _require_dict(data: dict[str, typ.Any], path: list[str]) -> dict[str, typ.Any]:
    node = _traverse(data, path)
    if not isinstance(node, dict):
        raise GitHubResponseShapeError.missing(".".join(path))
    return node


def _require_str(data: dict[str, typ.Any], path: list[str]) -> str:
    node = _traverse(data, path)
    if not isinstance(node, str):
        raise GitHubResponseShapeError.missing(".".join(path))
    return node


def _commit_meta(history: object) -> FileMeta:
    """Convert a one-commit history connection into file metadata."""
    nodes = history.get("nodes") if isinstance(history, dict) else None
    commit = nodes[0] if isinstance(nodes, list) and nodes else None
    if not isinstance(commit, dict):
        return {"commit_author": None, "commit_date": None}

    raw_author = commit.get("author")
    author = raw_author if isinstance(raw_author, dict) else {}
    user = author.get("user")
    login = user.get("login") if isinstance(user, dict) else None
    return {
        "commit_author": {
            "name": author.get("name"),
            "email": author.get("email"),
            "login": login if isinstance(login, str) else None,
        },
        "commit_date": commit.get("committedDate"),
    }


def _parse_contents(
    files: cabc.Sequence[ClassifiedFile], data: dict[str, typ.Any]
) -> dict[str, FetchedContent]:
    target = _require_dict(data, ["repository", "ref", "target"])
    repository = _require_dict(data, ["repository"])
    contents: dict[str, FetchedContent] = {}
    for index, file in enumerate(files):
        meta = _commit_meta(target.get(_history_alias(index)))
        blob = repository.get(_blob_alias(index))
        if isinstance(blob, dict):
            text = blob.get("text")
            size = blob.get("byteSize")
            contents[file.path] = FetchedContent(
                meta=meta,
                text=text if isinstance(text, str) else None,
                size=size if isinstance(size, int) else None,
            )
        else:
            contents[file.path] = FetchedContent(meta=meta)
    return contents


def _tree_files(payload: object) -> list[RemoteFile]:
    if not isinstance(payload, dict):
        raise GitHubResponseShapeError.missing("tree response")
    tree = payload.get("tree")
    if not isinstance(tree, list):
        raise GitHubResponseShapeError.missing("tree")
    if payload.get("truncated"):
        log_warning(
            logger,
            "GitHub truncated the tree listing at %d items; some files are missing",
            len(tree),
        )

    files: list[RemoteFile] = []
    for item in tree:
        if not isinstance(item, dict) or item.get("type") != "blob":
            continue
        path = item.get("path")
        sha = item.get("sha")
        if not isinstance(path, str) or not isinstance(sha, str):
            continue
        size = item.get("size")
        files.append(
            RemoteFile(path=path, sha=sha, size=size if isinstance(size, int) else None)
        )
    return files


def _parse_graphql_payload(payload: object) -> dict[str, typ.Any]:
    """Validate a GraphQL response and return its ``data`` field."""
    if not isinstance(payload, dict):
        raise GitHubResponseShapeError.missing("response")
    errors = payload.get("errors")
    if errors:
        raise GitHubAPIError.graphql_errors(errors)
    data = payload.get("data")
    if not isinstance(data, dict):
        raise GitHubResponseShapeError.missing("data")
    return data


class GitHubRepositoryClient:
    """GitHub adapter implementing :class:`RemoteRepositoryClient`."""

    def __init__(
        self,
        config: GitHubConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the adapter, creating an HTTP client unless one is given."""
        if not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.timeout_s,
            headers={
                "Authorization": f"Bearer {config.token}",
                "User-Agent": config.user_agent,
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    async def resolve_default_branch(self, repository: RepositoryIdentity) -> str:
        """Return the default branch name."""
        data = await self._graphql(
            _DEFAULT_BRANCH_QUERY,
            {"owner": repository.owner, "name": repository.name},
        )
        return _require_str(data, ["repository", "defaultBranchRef", "name"])

    async def resolve_latest_commit_hash(self, repository: RepositoryIdentity) -> str:
        """Return the object id of the branch head."""
        branch = _require_branch(repository)
        data = await self._graphql(
            _LAST_COMMIT_QUERY,
            {
                "owner": repository.owner,
                "name": repository.name,
                "qualifiedName": _qualified_name(branch),
            },
        )
        return _require_str(data, ["repository", "ref", "target", "oid"])

    async def list_files(self, repository: RepositoryIdentity) -> list[RemoteFile]:
        """Return every blob in the branch tree."""
        branch = _require_branch(repository)
        url = (
            f"{self._config.api_root}/repos/{repository.owner}/{repository.name}"
            f"/git/trees/{quote(branch, safe='')}"
        )
        response = await self._client.get(url, params={"recursive": "1"})
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(response.status_code, api="REST")
        return _tree_files(response.json())

    async def fetch_contents(
        self,
        repository: RepositoryIdentity,
        files: cabc.Sequence[ClassifiedFile],
    ) -> dict[str, FetchedContent]:
        """Fetch metadata for every file and text for entry files.

        Files are requested in batches of ``config.batch_size``, one GraphQL
        request per batch, issued sequentially.
        """
        branch = _require_branch(repository)
        variables = {
            "owner": repository.owner,
            "name": repository.name,
            "qualifiedName": _qualified_name(branch),
        }
        contents: dict[str, FetchedContent] = {}
        size = self._config.batch_size
        for start in range(0, len(files), size):
            batch = files[start : start + size]
            data = await self._graphql(_build_contents_query(batch), variables)
            contents.update(_parse_contents(batch, data))
        return contents

    async def _graphql(
        self, query: str, variables: dict[str, typ.Any]
    ) -> dict[str, typ.Any]:
        """Execute a GraphQL query and return the validated data field."""
        response = await self._client.post(
            self._config.graphql_endpoint,
            json={"query": query, "variables": variables},
        )
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise GitHubAPIError.http_error(response.status_code)
        return _parse_graphql_payload(response.json())
