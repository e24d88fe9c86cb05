"""Structured sync events and error categorisation.

Every event is a single log line of the form ``[event.type] key=value ...``
so runs can be followed and alerted on by log aggregators.
"""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from treesync.folders.errors import FolderConfigError
from treesync.logging import get_logger, log_error, log_info
from treesync.remote.errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
)

if typ.TYPE_CHECKING:
    import datetime as dt

    from treesync.logging import SupportsLog

    from .models import RepositoryIdentity, SyncResult, SyncSource

_HTTP_SERVER_ERROR_THRESHOLD = 500


class SyncEventType(enum.StrEnum):
    """Structured log event types for sync runs."""

    RUN_STARTED = "sync.run.started"
    SOURCE_DECIDED = "sync.source.decided"
    CACHE_RECONCILED = "sync.cache.reconciled"
    RUN_COMPLETED = "sync.run.completed"
    RUN_FAILED = "sync.run.failed"


class ErrorCategory(enum.StrEnum):
    """Categories for error classification in alerts."""

    TRANSIENT = "transient"
    CLIENT_ERROR = "client_error"
    SCHEMA_DRIFT = "schema_drift"
    CONFIGURATION = "configuration"
    DATABASE_CONNECTIVITY = "database_connectivity"
    DATA_INTEGRITY = "data_integrity"
    DATABASE_ERROR = "database_error"
    UNKNOWN = "unknown"


@dataclasses.dataclass(frozen=True, slots=True)
class SyncRunContext:
    """Shared context for a single sync run."""

    repository: RepositoryIdentity
    started_at: dt.datetime

    @property
    def cache_key(self) -> str:
        """Return the cache key the run reads and writes."""
        return self.repository.cache_key


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (GitHubResponseShapeError, ErrorCategory.SCHEMA_DRIFT),
    (GitHubConfigError, ErrorCategory.CONFIGURATION),
    (FolderConfigError, ErrorCategory.CONFIGURATION),
    (OperationalError, ErrorCategory.DATABASE_CONNECTIVITY),
    (InterfaceError, ErrorCategory.DATABASE_CONNECTIVITY),
    (IntegrityError, ErrorCategory.DATA_INTEGRITY),
    (SQLAlchemyError, ErrorCategory.DATABASE_ERROR),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize an exception for alert routing.

    GitHub errors with a 5xx status are transient; other GitHub API errors
    are client errors. Remaining types are looked up in order, so subclasses
    must precede their bases.
    """
    if isinstance(exc, GitHubAPIError):
        if (
            exc.status_code is not None
            and exc.status_code >= _HTTP_SERVER_ERROR_THRESHOLD
        ):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.CLIENT_ERROR

    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category

    return ErrorCategory.UNKNOWN


class SyncEventLogger:
    """Emit structured sync events through femtologging.

    Success events are logged at INFO and failures at ERROR with the
    exception attached.
    """

    def __init__(self, logger: SupportsLog | None = None) -> None:
        """Use ``logger`` or the module logger when omitted."""
        self._logger = logger or get_logger(__name__)

    def log_run_started(self, context: SyncRunContext) -> None:
        """Log sync run start."""
        log_info(
            self._logger,
            "[%s] cache_key=%s branch=%s started_at=%s",
            SyncEventType.RUN_STARTED,
            context.cache_key,
            context.repository.branch,
            context.started_at.isoformat(),
        )

    def log_source_decided(
        self,
        context: SyncRunContext,
        *,
        source: SyncSource,
        commit_hash: str,
        cached_records: int,
    ) -> None:
        """Log whether the file list comes from the cache or the remote."""
        log_info(
            self._logger,
            "[%s] cache_key=%s source=%s commit_hash=%s cached_records=%d",
            SyncEventType.SOURCE_DECIDED,
            context.cache_key,
            source,
            commit_hash,
            cached_records,
        )

    def log_cache_reconciled(
        self,
        context: SyncRunContext,
        *,
        evicted: int,
        stored: int,
    ) -> None:
        """Log cache garbage collection and refresh counts."""
        log_info(
            self._logger,
            "[%s] cache_key=%s evicted=%d stored=%d",
            SyncEventType.CACHE_RECONCILED,
            context.cache_key,
            evicted,
            stored,
        )

    def log_run_completed(
        self,
        context: SyncRunContext,
        result: SyncResult,
        duration: dt.timedelta,
    ) -> None:
        """Log successful sync completion with counts."""
        log_info(
            self._logger,
            "[%s] cache_key=%s duration_seconds=%.3f source=%s "
            "entry_count=%d asset_count=%d restored_count=%d "
            "fetched_count=%d evicted_count=%d",
            SyncEventType.RUN_COMPLETED,
            context.cache_key,
            duration.total_seconds(),
            result.source,
            result.entry_count,
            result.asset_count,
            result.restored_count,
            result.fetched_count,
            result.evicted_count,
        )

    def log_run_failed(
        self,
        context: SyncRunContext,
        error: BaseException,
        duration: dt.timedelta,
    ) -> None:
        """Log a failed sync with error categorization."""
        log_error(
            self._logger,
            "[%s] cache_key=%s duration_seconds=%.3f "
            "error_type=%s error_category=%s error_message=%s",
            SyncEventType.RUN_FAILED,
            context.cache_key,
            duration.total_seconds(),
            type(error).__name__,
            categorize_error(error),
            str(error),
            exc_info=error,
        )


__all__ = [
    "ErrorCategory",
    "SyncEventLogger",
    "SyncEventType",
    "SyncRunContext",
    "categorize_error",
]
