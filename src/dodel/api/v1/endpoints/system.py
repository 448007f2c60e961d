"""System and status endpoints for the Dodel API."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from dodel.api.v1.dependencies import SnapshotDep, StoreDep
from dodel.core.settings import settings

router = APIRouter(tags=["system"])


@router.get("/")
def api_status() -> dict[str, str]:
    """Report that the API is serving requests."""
    return {"status": "ok"}


@router.get("/system/status")
def get_system_status(store: StoreDep, snapshots: SnapshotDep) -> dict[str, object]:
    """Return store sizes and the active persistence configuration.

    Returns:
        Dictionary containing app metadata, collection counts, the vote policy,
        feed defaults and snapshot settings.
    """
    return {
        "app": {
            "name": settings.app_name,
            "version": settings.app_version,
            "debug": settings.debug,
        },
        "store": asdict(store.stats()),
        "vote_policy": store.policy.value,
        "feed": {
            "limit": settings.feed_limit,
            "max_age_hours": settings.feed_max_age_hours,
            "min_rank": settings.feed_min_rank,
        },
        "snapshot": {
            "path": str(snapshots.path),
            "allow_missing": snapshots.allow_missing,
            "checkpoint_interval_seconds": settings.checkpoint_interval_seconds,
        },
    }
