# src/dodel/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Dodel API."""

from fastapi import APIRouter, Query, status

from dodel.api.v1.dependencies import StoreDep
from dodel.schemas.vote import VoteCreate, VoteResult, VoteStateOut

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=VoteResult)
def cast_vote(vote_data: VoteCreate, store: StoreDep) -> VoteResult:
    """Cast a vote on a post and return its new net vote count."""
    count = store.cast_vote(vote_data.user, vote_data.post, vote_data.upvote)
    return VoteResult(votes=count)


@router.get("/{post_id}/state", response_model=VoteStateOut)
def get_vote_state(
    post_id: str,
    store: StoreDep,
    user: str = Query(..., min_length=1),
) -> VoteStateOut:
    """Get a user's standing vote on a specific post."""
    store.get_post(post_id)
    return VoteStateOut(post=post_id, user=user, state=store.vote_state(post_id, user))
