"""Runtime configuration for sync runs.

Usage
-----
>>> config = SyncConfig()
>>> config.fetch_batch_size
50

"""

from __future__ import annotations

import dataclasses as dc
import os

_DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///treesync.db"
_DEFAULT_FETCH_BATCH_SIZE = 50


@dc.dataclass(frozen=True, slots=True)
class SyncConfig:
    """Settings shared by the CLI and long-running hosts.

    Attributes
    ----------
    database_url
        SQLAlchemy async URL of the cache database.
    log_level
        femtologging level name; unknown values fall back to ``INFO`` when
        logging is configured.
    fetch_batch_size
        Number of files requested per remote content query.

    """

    database_url: str = _DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    fetch_batch_size: int = _DEFAULT_FETCH_BATCH_SIZE

    @staticmethod
    def _parse_positive_int(env_var: str, default: int) -> int:
        """Read a positive integer env var, falling back to a default."""
        raw = os.environ.get(env_var, "")
        if not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError as exc:
            msg = f"{env_var} must be an integer, got: {raw!r}"
            raise ValueError(msg) from exc
        if value < 1:
            msg = f"{env_var} must be positive, got: {value}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_env(cls) -> SyncConfig:
        """Create configuration from environment variables.

        Reads ``TREESYNC_DATABASE_URL``, ``TREESYNC_LOG_LEVEL`` and
        ``TREESYNC_FETCH_BATCH_SIZE``; blank values use the defaults.

        Raises
        ------
        ValueError
            If ``TREESYNC_FETCH_BATCH_SIZE`` is not a positive integer.

        """
        database_url = (
            os.environ.get("TREESYNC_DATABASE_URL", "").strip()
            or _DEFAULT_DATABASE_URL
        )
        log_level = os.environ.get("TREESYNC_LOG_LEVEL", "").strip() or "INFO"
        return cls(
            database_url=database_url,
            log_level=log_level,
            fetch_batch_size=cls._parse_positive_int(
                "TREESYNC_FETCH_BATCH_SIZE", _DEFAULT_FETCH_BATCH_SIZE
            ),
        )
