# src/dodel/schemas/vote.py
"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from dodel.models import VoteState


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    post: str = Field(..., description="ID of the post being voted on")
    user: str = Field(..., description="Voter identifier")
    upvote: bool = Field(..., description="True for upvote, False for downvote")


class VoteResult(BaseModel):
    """Net vote count after a vote was recorded."""

    votes: int


class VoteOut(BaseModel):
    """A single vote record from a post's history."""

    user: str
    post: str
    upvote: bool
    time: int


class VoteStateOut(BaseModel):
    """A user's standing vote on a post."""

    post: str
    user: str
    state: VoteState


class KarmaOut(BaseModel):
    """Karma earned by a user."""

    user: str
    karma: int
