# src/dodel/schemas/__init__.py
"""Pydantic schemas for the snapshot document and the JSON API."""

from .post import CommentThread, PostCreate, PostCreated, PostView
from .snapshot import SnapshotDocument, SnapshotPost, SnapshotVote
from .vote import KarmaOut, VoteCreate, VoteOut, VoteResult, VoteStateOut

__all__ = [
    "CommentThread", "PostCreate", "PostCreated", "PostView",
    "SnapshotDocument", "SnapshotPost", "SnapshotVote",
    "KarmaOut", "VoteCreate", "VoteOut", "VoteResult", "VoteStateOut",
]
