"""Shared dependencies for the v1 API."""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from dodel.core.settings import settings
from dodel.services.snapshot import SnapshotStore
from dodel.services.store import PostStore


@lru_cache(maxsize=1)
def get_store() -> PostStore:
    """Return the process-wide post/vote store."""
    return PostStore(policy=settings.vote_policy)


@lru_cache(maxsize=1)
def get_snapshot_store() -> SnapshotStore:
    """Return the snapshot location configured for this process."""
    return SnapshotStore(settings.snapshot_file, allow_missing=settings.snapshot_allow_missing)


StoreDep = Annotated[PostStore, Depends(get_store)]
SnapshotDep = Annotated[SnapshotStore, Depends(get_snapshot_store)]
