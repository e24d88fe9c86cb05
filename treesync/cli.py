"""Command-line entry point for syncing a GitHub repository into the cache."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import typing as typ
from pathlib import Path

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from treesync.cache import SqlCacheBackend, init_cache_storage
from treesync.folders import FolderConfigError, load_folder_configs
from treesync.logging import configure_logging, get_logger, log_exception, log_warning
from treesync.remote import (
    GitHubAPIError,
    GitHubConfig,
    GitHubConfigError,
    GitHubRepositoryClient,
    GitHubResponseShapeError,
)
from treesync.sync import RepositoryIdentity, SyncConfig, SyncOrchestrator

if typ.TYPE_CHECKING:
    from treesync.folders import FolderConfigs
    from treesync.sync import SyncResult

logger = get_logger(__name__)

_SYNC_ERRORS: tuple[type[Exception], ...] = (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    SQLAlchemyError,
    httpx.HTTPError,
)


def _parse_slug(value: str) -> tuple[str, str]:
    owner, sep, name = value.partition("/")
    if not sep or not owner or not name or "/" in name:
        msg = f"expected OWNER/REPO, got: {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return (owner, name)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="treesync", description=__doc__)
    parser.add_argument(
        "repository", type=_parse_slug, help="GitHub repository as OWNER/REPO"
    )
    parser.add_argument(
        "--folders",
        type=Path,
        required=True,
        help="YAML document describing entry and asset folders",
    )
    parser.add_argument(
        "--branch",
        default=None,
        help="Branch to sync; the default branch is resolved when omitted",
    )
    parser.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy async URL of the cache (overrides TREESYNC_DATABASE_URL)",
    )
    parser.add_argument(
        "--cache-key",
        default="",
        help="Cache namespace; defaults to github:OWNER/REPO",
    )
    return parser


async def run_sync(
    repository: RepositoryIdentity,
    folders: FolderConfigs,
    *,
    database_url: str,
    github_config: GitHubConfig,
) -> SyncResult:
    """Sync ``repository`` into the cache database at ``database_url``."""
    engine = create_async_engine(database_url)
    client = GitHubRepositoryClient(github_config)
    try:
        await init_cache_storage(engine)
        backend = SqlCacheBackend(async_sessionmaker(engine, expire_on_commit=False))
        orchestrator = SyncOrchestrator(client, backend)
        return await orchestrator.sync(repository, folders)
    finally:
        await client.aclose()
        await engine.dispose()


def _summary(result: SyncResult) -> str:
    return (
        f"synced {result.repository.slug}@{result.repository.branch} "
        f"({result.commit_hash[:12]}) from {result.source}: "
        f"{result.entry_count} entries / {result.asset_count} assets, "
        f"{result.restored_count} restored, {result.fetched_count} fetched, "
        f"{result.evicted_count} evicted"
    )


def main(argv: list[str] | None = None) -> int:
    """Sync one repository and print a summary.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when configuration or the sync fails.

    """
    args = _build_parser().parse_args(argv)

    try:
        config = SyncConfig.from_env()
    except ValueError as exc:
        print(f"invalid configuration: {exc}")
        return 1
    level, invalid = configure_logging(config.log_level)
    if invalid:
        log_warning(
            logger, "Unknown log level %r; falling back to %s", config.log_level, level
        )

    try:
        folders = load_folder_configs(args.folders)
    except FolderConfigError as exc:
        print(f"Folder configuration {args.folders} is invalid:")
        for issue in exc.issues:
            print(f"  - {issue}")
        return 1

    owner, name = args.repository
    try:
        github_config = dataclasses.replace(
            GitHubConfig.from_env(), batch_size=config.fetch_batch_size
        )
        result = asyncio.run(
            run_sync(
                RepositoryIdentity(
                    service="github",
                    owner=owner,
                    name=name,
                    branch=args.branch,
                    cache_key=args.cache_key,
                ),
                folders,
                database_url=args.database_url or config.database_url,
                github_config=github_config,
            )
        )
    except _SYNC_ERRORS as exc:
        log_exception(logger, f"Sync of {owner}/{name} failed", exc)
        print(f"sync of {owner}/{name} failed: {exc}")
        return 1

    print(_summary(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
