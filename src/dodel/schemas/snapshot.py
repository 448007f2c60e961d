# src/dodel/schemas/snapshot.py
"""Snapshot document schema.

Field names match the JSON written by earlier releases so existing snapshot
files keep loading: ``topic`` is the parent id (empty for top-level posts),
``user`` the author and ``timestamp``/``time`` integer unix seconds.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SnapshotPost(BaseModel):
    """A post as stored in the snapshot."""

    id: str = Field(..., min_length=1)
    topic: str = ""
    user: str
    text: str
    color: str = ""
    timestamp: int
    # Derived at save time for read-only consumers; ignored on load.
    votes: int = 0
    comments: int = 0

    model_config = ConfigDict(extra="ignore")


class SnapshotVote(BaseModel):
    """A vote as stored in the snapshot."""

    user: str
    post: str
    upvote: bool
    time: int

    model_config = ConfigDict(extra="ignore")


class SnapshotDocument(BaseModel):
    """Top-level snapshot document: posts and votes in insertion order."""

    posts: list[SnapshotPost] = Field(default_factory=list)
    votes: list[SnapshotVote] = Field(default_factory=list)
