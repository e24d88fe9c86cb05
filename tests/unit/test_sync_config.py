"""Unit tests for SyncConfig."""

from __future__ import annotations

import pytest

from treesync.sync import SyncConfig


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset variables fall back to the defaults."""
    for name in (
        "TREESYNC_DATABASE_URL",
        "TREESYNC_LOG_LEVEL",
        "TREESYNC_FETCH_BATCH_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)

    assert SyncConfig.from_env() == SyncConfig()
    assert SyncConfig().database_url == "sqlite+aiosqlite:///treesync.db"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Every setting can be overridden."""
    monkeypatch.setenv("TREESYNC_DATABASE_URL", "sqlite+aiosqlite:///other.db")
    monkeypatch.setenv("TREESYNC_LOG_LEVEL", "debug")
    monkeypatch.setenv("TREESYNC_FETCH_BATCH_SIZE", "7")

    config = SyncConfig.from_env()

    assert config == SyncConfig(
        database_url="sqlite+aiosqlite:///other.db",
        log_level="debug",
        fetch_batch_size=7,
    )


@pytest.mark.parametrize(
    ("raw", "message"),
    [("many", "must be an integer"), ("0", "must be positive")],
)
def test_rejects_bad_batch_size(
    monkeypatch: pytest.MonkeyPatch, raw: str, message: str
) -> None:
    """Batch sizes must be positive integers."""
    monkeypatch.setenv("TREESYNC_FETCH_BATCH_SIZE", raw)

    with pytest.raises(ValueError, match=message):
        SyncConfig.from_env()
