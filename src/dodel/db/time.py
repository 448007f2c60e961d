# src/dodel/db/time.py
"""Time utilities shared by the store and its snapshot format."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time truncated to whole seconds.

    Snapshots persist integer unix seconds, so the store never holds finer
    timestamps than it can write back out.
    """
    return datetime.now(UTC).replace(microsecond=0)


def to_unix(moment: datetime) -> int:
    """Return integer unix seconds for an aware datetime."""
    return int(moment.timestamp())


def from_unix(seconds: int) -> datetime:
    """Return an aware UTC datetime for integer unix seconds."""
    return datetime.fromtimestamp(seconds, UTC)
