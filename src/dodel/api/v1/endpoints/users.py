# src/dodel/api/v1/endpoints/users.py
"""User endpoints for the Dodel API."""

from fastapi import APIRouter

from dodel.api.v1.dependencies import StoreDep
from dodel.schemas.vote import KarmaOut

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user}/karma", response_model=KarmaOut)
def get_karma(user: str, store: StoreDep) -> KarmaOut:
    """Return the karma a user has earned across all of their posts."""
    return KarmaOut(user=user, karma=store.karma(user))
