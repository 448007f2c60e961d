# src/dodel/models/__init__.py
"""Domain entities held by the post/vote store."""

from .post import Post
from .vote import Vote, VoteState

__all__ = [
    "Post",
    "Vote", "VoteState",
]
