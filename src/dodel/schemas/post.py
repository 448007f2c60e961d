# src/dodel/schemas/post.py
"""Post-related Pydantic schemas."""

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for submitting a post or a comment."""

    user: str = Field(..., description="Author identifier")
    text: str = Field(..., description="Post body")
    color: str = Field("", description="Display color")
    topic: str | None = Field(None, description="Parent post ID for comments")


class PostCreated(BaseModel):
    """Identifier of a freshly submitted post."""

    id: str


class PostView(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    topic: str | None
    user: str
    text: str
    color: str
    timestamp: int
    votes: int
    comments: int
    rank: float
    age: str


class CommentThread(PostView):
    """A post together with its comments, oldest first."""

    comments_list: list[PostView] = Field(default_factory=list)
