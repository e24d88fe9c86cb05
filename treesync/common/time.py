"""Clock helpers for cache bookkeeping and sync timing."""

from __future__ import annotations

import datetime as dt


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def elapsed_since(started_at: dt.datetime) -> dt.timedelta:
    """Return the time elapsed since ``started_at``.

    ``started_at`` must be timezone aware; naive values raise ``ValueError``
    rather than being silently interpreted as local time.
    """
    if started_at.tzinfo is None:
        msg = "started_at must be timezone-aware"
        raise ValueError(msg)
    return utcnow() - started_at
