"""Sync orchestration, sessions and run observability."""

from __future__ import annotations

from .config import SyncConfig
from .models import RepositoryIdentity, SyncResult, SyncSource
from .observability import (
    ErrorCategory,
    SyncEventLogger,
    SyncEventType,
    SyncRunContext,
    categorize_error,
)
from .orchestrator import SyncOrchestrator
from .ports import FileParser, OutputPort, SyncOutputs, ValuePort, passthrough_parser
from .session import SyncSession

__all__ = [
    "ErrorCategory",
    "FileParser",
    "OutputPort",
    "RepositoryIdentity",
    "SyncConfig",
    "SyncEventLogger",
    "SyncEventType",
    "SyncOrchestrator",
    "SyncOutputs",
    "SyncResult",
    "SyncRunContext",
    "SyncSession",
    "SyncSource",
    "ValuePort",
    "categorize_error",
    "passthrough_parser",
]
